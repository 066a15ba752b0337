import hashlib
import secrets
from datetime import datetime, timedelta
from flask import request, current_app

from models.session import Session


def _hash_token(token: str) -> str:
    # SHA-256 is fine for hashing random session tokens
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _client_ip():
    return request.headers.get("X-Forwarded-For", request.remote_addr)


def cookie_name() -> str:
    return current_app.config.get("AUTH_COOKIE_NAME", "gamescheduler_session")


def create_session(db_session, user_id: int, role: str) -> str:
    """
    Creates a server-side session and returns the RAW token (to set as cookie).
    Only the hash is stored in DB, together with the (user_id, role) claims.
    """
    raw_token = secrets.token_urlsafe(32)
    token_hash = _hash_token(raw_token)

    lifetime = current_app.config.get("SESSION_LIFETIME_SECONDS", 28800)
    expires_at = datetime.utcnow() + timedelta(seconds=lifetime)

    user_agent = (request.headers.get("User-Agent") or "")[:255]

    row = Session(
        user_id=user_id,
        role=role,
        token_hash=token_hash,
        expires_at=expires_at,
        ip=_client_ip(),
        user_agent=user_agent,
    )
    db_session.add(row)
    db_session.commit()
    return raw_token


def is_live(sess: Session, now: datetime) -> bool:
    if sess.revoked:
        return False

    # Absolute expiry
    if sess.expires_at <= now:
        return False

    # Idle timeout
    idle_seconds = current_app.config.get("IDLE_TIMEOUT_SECONDS", 1200)
    last_seen = sess.last_seen_at or sess.created_at
    return (last_seen + timedelta(seconds=idle_seconds)) > now


def get_session_from_request(db_session):
    raw_token = request.cookies.get(cookie_name())
    if not raw_token:
        return None

    sess = (
        db_session.query(Session)
        .filter_by(token_hash=_hash_token(raw_token), revoked=False)
        .first()
    )
    if not sess:
        return None

    now = datetime.utcnow()
    if not is_live(sess, now):
        return None

    # Update activity timestamp (touch)
    sess.last_seen_at = now
    db_session.commit()

    return sess


def revoke_session(db_session, raw_token: str) -> bool:
    if not raw_token:
        return False
    sess = db_session.query(Session).filter_by(token_hash=_hash_token(raw_token)).first()
    if not sess:
        return False
    sess.revoked = True
    db_session.commit()
    return True


def revoke_all_sessions(db_session, user_id: int) -> int:
    sessions = db_session.query(Session).filter_by(user_id=user_id, revoked=False).all()
    for s in sessions:
        s.revoked = True
    db_session.commit()
    return len(sessions)
