from flask import Blueprint, current_app, g, redirect, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from models import db
from security.csrf import clear_csrf_token, issue_csrf_token
from security.session import cookie_name, create_session, revoke_all_sessions, revoke_session
from services.accounts import authenticate, normalize_email, signup as create_account
from services.errors import AuthRejected
from utils.events import log_event
from utils.responses import form_data, plain
from utils.roles import DASHBOARD_ENDPOINTS

auth_bp = Blueprint("auth", __name__)


@auth_bp.get("/signup")
def signup_form():
    return render_template("signup.html")


@auth_bp.post("/signup")
def signup():
    data = form_data()
    try:
        user = create_account(
            db.session,
            data.get("name"),
            data.get("email"),
            data.get("password") or "",
            data.get("role"),
        )
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("signup failed")
        return plain("Error during signup", 500)

    log_event("SIGNUP_SUCCESS", user_id=user.id, metadata={"role": user.role})
    return redirect(url_for("auth.login"))


@auth_bp.get("/login")
def login():
    return render_template("login.html")


@auth_bp.post("/login")
def login_submit():
    data = form_data()
    email = normalize_email(data.get("email"))

    try:
        user = authenticate(db.session, email, data.get("password") or "", data.get("role"))
    except AuthRejected as exc:
        log_event("LOGIN_FAIL", metadata={"email": email, "reason": exc.message})
        raise

    try:
        # Rotate: revoke any existing sessions for this user
        revoked_count = revoke_all_sessions(db.session, user.id)
        raw_token = create_session(db.session, user.id, user.role)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("login failed")
        return plain("Error during login", 500)

    resp = redirect(url_for(DASHBOARD_ENDPOINTS[user.role]))
    resp.set_cookie(
        cookie_name(),
        raw_token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=current_app.config.get("SESSION_LIFETIME_SECONDS", 8 * 60 * 60),
        path="/",
    )
    resp = issue_csrf_token(resp)

    log_event("LOGIN_SUCCESS", user_id=user.id, metadata={"revoked_sessions": revoked_count})
    return resp


@auth_bp.get("/logout")
def logout():
    raw_token = request.cookies.get(cookie_name())
    sess = getattr(g, "session", None)

    try:
        revoke_session(db.session, raw_token)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("logout failed")
        return plain("Error during logout", 500)

    if sess is not None:
        log_event("LOGOUT", user_id=sess.user_id)

    resp = redirect(url_for("auth.login"))
    resp.delete_cookie(cookie_name(), path="/")
    return clear_csrf_token(resp)
