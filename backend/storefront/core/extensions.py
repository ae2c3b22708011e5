"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address)

REFRESH_STORE_EXTENSION = "refresh_token_store"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, rate limiting and the session store.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`storefront.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Raises
    ------
    RuntimeError
        When ``REDIS_URL`` is unset outside of testing, or Redis does not
        answer a ``PING`` at startup.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from storefront import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)

    from storefront.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore
    from storefront.services._shared.ports import InMemoryRefreshTokenStore

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        if not app.testing:
            raise RuntimeError("REDIS_URL is required: refresh sessions must live in a shared store.")
        log.warning("REDIS_URL unset; using a process-local refresh token store (testing only).")
        app.extensions[REFRESH_STORE_EXTENSION] = InMemoryRefreshTokenStore()
        return

    redis_client = redis.Redis.from_url(
        redis_url,
        socket_timeout=app.config.get("REDIS_SOCKET_TIMEOUT", 2.0),
        socket_connect_timeout=app.config.get("REDIS_CONNECT_TIMEOUT", 2.0),
    )
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client
    app.extensions[REFRESH_STORE_EXTENSION] = RedisRefreshTokenStore(
        r=redis_client,
        key=app.config.get("REFRESH_TOKEN_SET_KEY", "auth:refresh_tokens"),
    )


def get_refresh_store():
    """Return the refresh token store wired for the current application."""
    try:
        return current_app.extensions[REFRESH_STORE_EXTENSION]
    except KeyError:
        raise RuntimeError("Refresh token store is not initialized. Call init_app() first.") from None
