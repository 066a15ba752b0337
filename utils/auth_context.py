from flask import g

from models import db
from security.session import get_session_from_request


def load_current_session():
    g.session = get_session_from_request(db.session)
