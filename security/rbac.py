from functools import wraps
from flask import g, redirect, request, url_for

from security.csrf import require_csrf
from utils.events import log_event

STATE_CHANGING_METHODS = ("POST", "PUT", "PATCH", "DELETE")


def is_allowed(session, required_role: str) -> bool:
    """
    ALLOW only when a session exists and its role claim equals required_role.
    """
    if session is None:
        return False
    return session.role == required_role


def require_role(role_name: str):
    """
    Usage: @require_role("admin")

    Runs before the view body, so a denied caller never reaches a
    repository call. Denial sends the browser to the login page; only an
    allowed caller has its CSRF token checked on state-changing requests.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            session = getattr(g, "session", None)
            if not is_allowed(session, role_name):
                log_event(
                    "ACCESS_DENIED",
                    user_id=session.user_id if session else None,
                    metadata={"path": request.path, "required_role": role_name},
                )
                return redirect(url_for("auth.login"))

            if request.method in STATE_CHANGING_METHODS:
                failure = require_csrf()
                if failure:
                    return failure
            return fn(*args, **kwargs)
        return wrapper
    return decorator
