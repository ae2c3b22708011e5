"""Factory Boy base bound to the per-test transactional session.

``conftest.py`` calls :func:`bind_session` before every test; factories
resolve the session lazily so they always write into the current SAVEPOINT.
"""

from __future__ import annotations

import factory
from sqlalchemy.orm import scoped_session

_bound: scoped_session | None = None


def bind_session(session: scoped_session | None) -> None:
    global _bound
    _bound = session


def current_session() -> scoped_session:
    if _bound is None:
        raise RuntimeError("No session bound for factories; request the 'session' fixture.")
    return _bound


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        sqlalchemy_session_persistence = "flush"
