import logging

from flask import Flask

from .config import get_config
from .errors import UnauthorizedError, error_response, register_error_handlers
from .extensions import cors, db, jwt, ma, migrate

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("fitclub").setLevel(level)
    app.logger.setLevel(level)


def register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token_callback(reason):
        return error_response(UnauthorizedError("Missing or invalid authorization header"))

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return error_response(UnauthorizedError("Invalid or expired token"))

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response(UnauthorizedError("Invalid or expired token"))


def create_app(config_object=None):
    app = Flask(__name__)
    config_object = config_object or get_config()
    if hasattr(config_object, "validate"):
        config_object.validate()
    app.config.from_object(config_object)

    configure_logging(app)

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    }})

    register_jwt_handlers()
    register_error_handlers(app)

    from . import models  # noqa: F401
    from .commands import register_commands
    from .routes import register_blueprints

    register_blueprints(app)
    register_commands(app)

    app.logger.info(f"FitClub API started with {config_object.__name__}")
    return app
