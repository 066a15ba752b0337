from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.session import Session
from models.user import User
from tests.conftest import PASSWORD, login


def _signup(client, **overrides):
    form = {
        "name": "Sam Signup",
        "email": "sam@example.com",
        "password": PASSWORD,
        "role": "player",
    }
    form.update(overrides)
    return client.post("/signup", data=form)


def test_signup_form_renders(client):
    resp = client.get("/signup")
    assert resp.status_code == 200
    assert b"Sign up" in resp.data


def test_signup_creates_user_and_redirects_to_login(app, client):
    resp = _signup(client, email="  Sam@Example.COM ")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")

    with app.app_context():
        user = db.session.query(User).filter_by(email="sam@example.com").one()
        assert user.role == "player"
        assert user.name == "Sam Signup"
        assert user.password_hash != PASSWORD
        assert user.password_hash.startswith("$2")


def test_signup_accepts_role_case_insensitively(app, client):
    resp = _signup(client, role="ADMIN")
    assert resp.status_code == 302

    with app.app_context():
        assert db.session.query(User.role).filter_by(email="sam@example.com").scalar() == "admin"


def test_signup_rejects_unknown_role(app, client):
    resp = _signup(client, role="superuser")

    assert resp.status_code == 400
    assert resp.data == b"Invalid role"
    assert resp.mimetype == "text/plain"
    with app.app_context():
        assert db.session.query(User).count() == 0


def test_signup_requires_name(client):
    resp = _signup(client, name="   ")
    assert resp.status_code == 400
    assert resp.data == b"Invalid name"


def test_signup_rejects_bad_email(client):
    resp = _signup(client, email="not-an-email")
    assert resp.status_code == 400
    assert resp.data == b"Invalid email"


def test_signup_enforces_password_policy(client):
    resp = _signup(client, password="short")
    assert resp.status_code == 400
    assert b"at least 8 characters" in resp.data


def test_signup_duplicate_email_is_a_generic_conflict(client):
    assert _signup(client).status_code == 302

    resp = _signup(client, name="Someone Else", role="admin")

    assert resp.status_code == 409
    assert resp.data == b"Error during signup"


def test_signup_database_failure_hides_details(client, mocker):
    mocker.patch("routes.auth.create_account", side_effect=SQLAlchemyError("INSERT INTO users failed"))

    resp = _signup(client)

    assert resp.status_code == 500
    assert resp.data == b"Error during signup"


def test_login_form_renders(client):
    resp = client.get("/login")
    assert resp.status_code == 200
    assert b"Log in" in resp.data


def test_signup_then_login_round_trip(client):
    _signup(client)

    resp = login(client, "sam@example.com", role="player")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/player/dashboard")
    assert client.get("/player/dashboard").status_code == 200


def test_login_with_other_password_fails(client):
    _signup(client)

    for wrong in ("correct-horsE", "", PASSWORD + "x"):
        resp = login(client, "sam@example.com", role="player", password=wrong)
        assert resp.status_code == 400
        assert resp.data == b"Invalid password"


def test_admin_login_lands_on_admin_dashboard(client, make_user):
    make_user("boss@example.com", role="admin")

    resp = login(client, "boss@example.com", role="admin")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/dashboard")


def test_login_email_is_case_insensitive(client, make_user):
    make_user("casey@example.com")

    resp = login(client, "CASEY@example.com")
    assert resp.status_code == 302


def test_wrong_role_is_indistinguishable_from_unknown_email(client, make_user):
    make_user("pat@example.com", role="player")

    wrong_role = login(client, "pat@example.com", role="admin")
    unknown = login(client, "nobody@example.com", role="admin")

    assert wrong_role.status_code == unknown.status_code == 400
    assert wrong_role.data == unknown.data == b"User not found"
    assert client.get_cookie("gamescheduler_session") is None


def test_login_with_invalid_role_value_is_not_found(client, make_user):
    make_user("pat@example.com", role="player")

    resp = login(client, "pat@example.com", role="root")

    assert resp.status_code == 400
    assert resp.data == b"User not found"


def test_login_session_carries_stored_role(app, client, make_user):
    uid = make_user("ada@example.com", role="admin")

    login(client, "ada@example.com", role="admin")

    with app.app_context():
        sess = db.session.query(Session).filter_by(user_id=uid, revoked=False).one()
        assert sess.role == "admin"


def test_login_sets_httponly_session_cookie_and_csrf_cookie(client, make_user):
    make_user("pat@example.com")

    login(client, "pat@example.com")

    session_cookie = client.get_cookie("gamescheduler_session")
    assert session_cookie is not None
    assert session_cookie.http_only
    assert client.get_cookie("csrf_token") is not None


def test_signup_non_text_email_is_rejected(client):
    resp = client.post("/signup", json={"name": "A", "email": 5, "password": PASSWORD, "role": "player"})
    assert resp.status_code == 400
    assert resp.data == b"Invalid email"


def test_signup_non_text_name_is_rejected(client):
    resp = client.post(
        "/signup",
        json={"name": ["A"], "email": "a@example.com", "password": PASSWORD, "role": "player"},
    )
    assert resp.status_code == 400
    assert resp.data == b"Invalid name"


def test_signup_non_text_password_is_rejected(client):
    resp = client.post("/signup", json={"name": "A", "email": "a@example.com", "password": 12345678, "role": "player"})
    assert resp.status_code == 400
    assert resp.data == b"Password must be a string"


def test_login_non_text_email_is_not_found(client, make_user):
    make_user("pat@example.com")

    resp = client.post("/login", json={"email": 5, "password": PASSWORD, "role": "player"})

    assert resp.status_code == 400
    assert resp.data == b"User not found"


def test_login_non_text_password_is_rejected(client, make_user):
    make_user("pat@example.com")

    resp = client.post("/login", json={"email": "pat@example.com", "password": 42, "role": "player"})

    assert resp.status_code == 400
    assert resp.data == b"Invalid password"


def test_login_json_array_body_is_not_found(client):
    resp = client.post("/login", json=[1, 2])
    assert resp.status_code == 400
    assert resp.data == b"User not found"
