from datetime import date

import pytest

from app import create_app
from models import db
from models.game import Game
from security.csrf import CSRF_COOKIE
from services.accounts import signup

PASSWORD = "correct-horse"


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "test.db"),
        "BCRYPT_ROUNDS": 4,
    })
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user straight through the account service, returns its id."""
    def _make(email, role="player", password=PASSWORD, name="Test User"):
        with app.app_context():
            user = signup(db.session, name, email, password, role)
            return user.id
    return _make


@pytest.fixture
def make_game(app):
    def _make(admin_id, title="Friday pickup", player_limit=2, game_date="2030-01-20", description=None):
        with app.app_context():
            game = Game(
                title=title,
                description=description,
                date=date.fromisoformat(game_date),
                player_limit=player_limit,
                created_by=admin_id,
            )
            db.session.add(game)
            db.session.commit()
            return game.id
    return _make


def login(client, email, role="player", password=PASSWORD):
    return client.post("/login", data={"email": email, "password": password, "role": role})


def csrf_token(client):
    cookie = client.get_cookie(CSRF_COOKIE)
    return cookie.value if cookie else ""


def post(client, url, data=None):
    """POST a form the way the rendered pages do, CSRF field included."""
    form = dict(data or {})
    form["csrf_token"] = csrf_token(client)
    return client.post(url, data=form)


@pytest.fixture
def admin_client(app, make_user):
    make_user("admin@example.com", role="admin", name="Ada Admin")
    c = app.test_client()
    resp = login(c, "admin@example.com", role="admin")
    assert resp.status_code == 302
    return c


@pytest.fixture
def player_client(app, make_user):
    make_user("player@example.com", role="player", name="Pat Player")
    c = app.test_client()
    resp = login(c, "player@example.com", role="player")
    assert resp.status_code == 302
    return c


def user_id(app, email):
    from models.user import User
    with app.app_context():
        return db.session.query(User.id).filter_by(email=email).scalar()
