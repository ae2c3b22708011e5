"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


def env_float(name: str, default: float) -> float:
    """Parse a float from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return float(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development-safe placeholder and should be
        overridden in production.
    JWT_ACCESS_TOKEN_SECRET: str
        HMAC key signing access tokens.
    JWT_REFRESH_TOKEN_SECRET: str
        HMAC key signing refresh tokens. Must differ from the access secret.
    JWT_ACCESS_TOKEN_EXPIRES: int
        Access token lifetime in seconds (15 minutes).
    JWT_REFRESH_TOKEN_EXPIRES: int
        Refresh token lifetime in seconds (30 days).
    ACCESS_TOKEN_COOKIE_NAME: str
        Cookie carrying the access token.
    REFRESH_TOKEN_COOKIE_NAME: str
        Cookie carrying the refresh token.
    AUTH_COOKIE_SECURE: bool
        Adds the ``Secure`` attribute to auth cookies.
    REDIS_URL: str | None
        Connection string of the shared refresh-token store.
    REDIS_SOCKET_TIMEOUT: float
        Upper bound in seconds for a single Redis command.
    REFRESH_TOKEN_SET_KEY: str
        Redis key holding the set of active refresh tokens.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    APP_ENV = "development"
    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_ACCESS_TOKEN_SECRET = os.getenv("JWT_ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    JWT_REFRESH_TOKEN_SECRET = os.getenv("JWT_REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_EXPIRES = env_int("JWT_ACCESS_TOKEN_EXPIRES", 15 * 60)
    JWT_REFRESH_TOKEN_EXPIRES = env_int("JWT_REFRESH_TOKEN_EXPIRES", 30 * 24 * 60 * 60)

    # Auth cookies
    ACCESS_TOKEN_COOKIE_NAME = os.getenv("ACCESS_TOKEN_COOKIE_NAME", "accessToken")
    REFRESH_TOKEN_COOKIE_NAME = os.getenv("REFRESH_TOKEN_COOKIE_NAME", "refreshToken")
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", False)
    AUTH_COOKIE_SAMESITE = "Strict"

    # Shared session store
    REDIS_URL: str | None = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    REDIS_SOCKET_TIMEOUT = env_float("REDIS_SOCKET_TIMEOUT", 2.0)
    REDIS_CONNECT_TIMEOUT = env_float("REDIS_CONNECT_TIMEOUT", 2.0)
    REFRESH_TOKEN_SET_KEY = os.getenv("REFRESH_TOKEN_SET_KEY", "auth:refresh_tokens")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Rate limiting
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves ``REDIS_URL`` unset so an in-process refresh store is wired.
    - Disables rate limiting so repeated logins do not trip the limiter.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    PROPAGATE_EXCEPTIONS = True
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    JWT_ACCESS_TOKEN_SECRET = "testing-access-secret-0123456789abcdef"
    JWT_REFRESH_TOKEN_SECRET = "testing-refresh-secret-0123456789abcdef"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled and always marks auth cookies
    ``Secure``.
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    AUTH_COOKIE_SECURE = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
