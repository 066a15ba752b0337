import bcrypt
from flask import current_app

DEFAULT_ROUNDS = 10


def _rounds() -> int:
    try:
        return int(current_app.config.get("BCRYPT_ROUNDS", DEFAULT_ROUNDS))
    except RuntimeError:
        # outside an app context (CLI scripts)
        return DEFAULT_ROUNDS


def hash_password(plain_password: str) -> str:
    if not isinstance(plain_password, str) or len(plain_password) == 0:
        raise ValueError("Password must be a non-empty string")

    # bcrypt expects bytes
    salt = bcrypt.gensalt(rounds=_rounds())
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not isinstance(plain_password, str) or not isinstance(password_hash, str):
        return False
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            password_hash.encode("utf-8")
        )
    except ValueError:
        # malformed stored hash or over-long input
        return False
