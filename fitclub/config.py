import os
from datetime import timedelta

DEV_JWT_SECRET = "dev-jwt-secret-change-me"


def _csv_env(name, default):
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///fitclub.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Tokens are issued by the external identity provider; we only verify them.
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", DEV_JWT_SECRET)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_DECODE_AUDIENCE = os.getenv("JWT_DECODE_AUDIENCE") or None
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)

    CORS_ORIGINS = _csv_env("CORS_ORIGINS", ["http://localhost:3000", "http://127.0.0.1:5000"])

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Membership pricing (monthly, USD)
    MEMBERSHIP_PLAN_PRICES = {
        "basic": 29,
        "premium": 49,
        "vip": 99,
    }
    BILLING_CYCLE_DAYS = 30

    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
    NEARBY_DEFAULT_RADIUS_KM = 10


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    JWT_DECODE_AUDIENCE = None
    LOG_LEVEL = "WARNING"


class ProductionConfig(Config):
    DEBUG = False

    @classmethod
    def validate(cls):
        if cls.JWT_SECRET_KEY == DEV_JWT_SECRET:
            raise RuntimeError("JWT_SECRET_KEY must be set in production.")


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name=None):
    """Return the config class selected by ``name`` or ``FITCLUB_ENV``."""
    name = (name or os.getenv("FITCLUB_ENV", "development")).lower()
    return CONFIGS.get(name, DevelopmentConfig)
