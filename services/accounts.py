from sqlalchemy.exc import IntegrityError

from models.user import User
from security.password import hash_password, verify_password
from security.password_policy import validate_password
from services.errors import AuthRejected, Conflict, ValidationError
from utils.roles import normalize_role


def _is_valid_email(email: str) -> bool:
    return isinstance(email, str) and "@" in email and len(email) <= 255


def normalize_email(email) -> str:
    # anything that is not text can never match a stored address
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def signup(db_session, name, email, password, role) -> User:
    if name is not None and not isinstance(name, str):
        raise ValidationError("Invalid name")
    name = (name or "").strip()
    email = normalize_email(email)
    role_name = normalize_role(role)

    if not name or len(name) > 120:
        raise ValidationError("Invalid name")
    if not _is_valid_email(email):
        raise ValidationError("Invalid email")
    if role_name is None:
        raise ValidationError("Invalid role")
    valid, errors = validate_password(password)
    if not valid:
        raise ValidationError("; ".join(errors))

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role_name,
    )
    db_session.add(user)
    try:
        db_session.commit()
    except IntegrityError:
        db_session.rollback()
        # same wording as any other signup failure
        raise Conflict("Error during signup")
    return user


def find_user(db_session, email, role):
    role_name = normalize_role(role)
    if role_name is None:
        return None
    return (
        db_session.query(User)
        .filter_by(email=normalize_email(email), role=role_name)
        .first()
    )


def authenticate(db_session, email, password, role) -> User:
    """
    A wrong role is reported exactly like an unknown email.
    """
    user = find_user(db_session, email, role)
    if user is None:
        raise AuthRejected("User not found")
    if not verify_password(password, user.password_hash):
        raise AuthRejected("Invalid password")
    return user
