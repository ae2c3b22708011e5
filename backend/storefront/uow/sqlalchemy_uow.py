"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from storefront.core.extensions import db
from storefront.repositories import UserRepository
from storefront.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent transaction.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first write.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    Installs a ``before_flush`` guard for the duration of the scope so any
    pending insert/update/delete fails loudly, and disallows ``commit()``.
    The enclosing transaction is left to the session owner (request teardown
    or the test fixture).
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._guard_installed = False
        self._guard_target: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # Listen on the concrete Session; a scoped_session target would attach
        # the guard to the factory and block writes on other threads.
        target = self.session() if isinstance(self.session, scoped_session) else self.session
        event.listen(target, "before_flush", self._before_flush)
        self._guard_target = target
        self._guard_installed = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._guard_installed:
            with suppress(Exception):
                event.remove(self._guard_target, "before_flush", self._before_flush)
            self._guard_installed = False

    @staticmethod
    def _before_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
