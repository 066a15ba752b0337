from .main import main_bp
from .auth import auth_bp
from .player import player_bp
from .admin import admin_bp
