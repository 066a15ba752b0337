import click
from flask import Flask, request
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config, engine_options
from models import db
from routes import admin_bp, auth_bp, main_bp, player_bp
from security.csrf import CSRF_COOKIE
from services.errors import ServiceError
from utils.auth_context import load_current_session
from utils.responses import plain


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS",
        engine_options(app.config["SQLALCHEMY_DATABASE_URI"], app.config["DB_TIMEOUT_SECONDS"]),
    )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Register routes
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(player_bp)
    app.register_blueprint(admin_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.before_request
    def _load_session():
        load_current_session()

    @app.context_processor
    def _inject_csrf():
        return {"csrf_token": request.cookies.get(CSRF_COOKIE, "")}

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        resp.headers["Content-Security-Policy"] = (
            "default-src 'self'; frame-ancestors 'none'; form-action 'self';"
        )
        return resp

    register_error_handlers(app)
    register_cli(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def _service_error(exc):
        return plain(exc.message, exc.status_code)

    @app.errorhandler(Exception)
    def _unexpected_error(exc):
        # routing 404s, 405s and the like keep their own responses
        if isinstance(exc, HTTPException):
            return exc

        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return plain("Server Error", 500)


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables directly (development shortcut for migrations)."""
        db.create_all()
        click.echo("Database tables created")


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
