"""Pytest fixtures configuring an isolated database and session store.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases, and gets a fresh
fakeredis-backed refresh token store.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker
from storefront.core.config import TestingConfig
from storefront.core.extensions import REFRESH_STORE_EXTENSION
from storefront.core.extensions import db as _db  # Flask-SQLAlchemy instance
from storefront.factory import create_app  # application factory under test
from storefront.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - No ``REDIS_URL``: the refresh store is swapped per test below.
    - Rate limiting stays off so repeated logins do not trip the limiter.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    USE_PROXYFIX = False
    LOG_LEVEL = "INFO"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    with app.app_context():
        conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(autouse=True)
def app_ctx(app):
    """Push a fresh application context for each test.

    Test-client requests reuse an already pushed context, so holding one for
    the whole run would carry ``g`` from one test into the next.
    """
    with app.app_context() as ctx:
        yield ctx


@pytest.fixture(scope="function")
def session(app_ctx, db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    Mirrors the SQLAlchemy 2.0 pattern for transactional tests: a top-level
    transaction, a SAVEPOINT per test, and a new SAVEPOINT whenever
    SQLAlchemy ends one. ``db.session`` is swapped so application code (Units
    of Work, request handlers) shares this session.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture
def fake_redis():
    """Provide a fresh, isolated FakeRedis client."""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer())


@pytest.fixture(autouse=True)
def refresh_store(app, fake_redis):
    """Install a fakeredis-backed refresh store on the app for one test."""
    store = RedisRefreshTokenStore(r=fake_redis, key=app.config["REFRESH_TOKEN_SET_KEY"])
    previous = app.extensions.get(REFRESH_STORE_EXTENSION)
    app.extensions[REFRESH_STORE_EXTENSION] = store
    yield store
    app.extensions[REFRESH_STORE_EXTENSION] = previous


@pytest.fixture
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture
def runner(app, session):
    """Click runner for the application's CLI groups."""
    return app.test_cli_runner()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import bind_session

    bind_session(session)
    yield
    bind_session(None)
