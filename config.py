import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def engine_options(database_uri: str, timeout_seconds: int) -> dict:
    """
    Bounded data-layer timeouts for the given database URI.
    SQLite gets a busy timeout, PostgreSQL gets connect + statement timeouts.
    """
    if database_uri.startswith("sqlite"):
        # connections move between request threads through the pool
        return {"connect_args": {"timeout": timeout_seconds, "check_same_thread": False}}

    options = {"pool_pre_ping": True, "pool_timeout": timeout_seconds}
    if database_uri.startswith("postgresql"):
        options["connect_args"] = {
            "connect_timeout": timeout_seconds,
            "options": f"-c statement_timeout={timeout_seconds * 1000}",
        }
    return options


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as gamescheduler.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "gamescheduler.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upper bound for any single database wait (lock, connect, statement)
    DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", "5"))

    # Session cookie name for our auth token
    AUTH_COOKIE_NAME = "gamescheduler_session"

    # 8 hours session lifetime
    SESSION_LIFETIME_SECONDS = 8 * 60 * 60

    # Idle timeout: 20 minutes
    IDLE_TIMEOUT_SECONDS = 20 * 60

    # Session/cookie security defaults
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

    # bcrypt work factor
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Password policy
    PASSWORD_MIN_LEN = 8
    PASSWORD_MAX_LEN = 72  # bcrypt ignores anything past 72 bytes
    PASSWORD_REQUIRE_UPPER = False
    PASSWORD_REQUIRE_LOWER = False
    PASSWORD_REQUIRE_DIGIT = False
    PASSWORD_REQUIRE_SYMBOL = False

    # Largest capacity an admin may give a game
    MAX_PLAYER_LIMIT = 1000

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False
