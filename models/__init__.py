from .db import db
from .user import User
from .game import Game
from .enrollment import Enrollment
from .session import Session
