import hmac
import secrets
from flask import request, current_app

CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"
CSRF_FIELD = "csrf_token"


def issue_csrf_token(resp):
    token = secrets.token_urlsafe(32)
    resp.set_cookie(
        CSRF_COOKIE,
        token,
        httponly=False,  # must be readable by client JS and form templates
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        path="/",
    )
    return resp


def clear_csrf_token(resp):
    resp.delete_cookie(CSRF_COOKIE, path="/")
    return resp


def require_csrf():
    cookie_token = request.cookies.get(CSRF_COOKIE)
    # HTML forms post the token as a hidden field, scripts send the header
    sent_token = request.headers.get(CSRF_HEADER) or request.form.get(CSRF_FIELD)
    if not cookie_token or not sent_token or not hmac.compare_digest(cookie_token, sent_token):
        return "CSRF validation failed", 403, {"Content-Type": "text/plain; charset=utf-8"}
    return None
