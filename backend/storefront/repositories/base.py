"""Generic repository base for SQLAlchemy 2.x.

Persistence-only concerns shared by repositories:

- Session resolution (injected Unit of Work session or the Flask-scoped one).
- Primary-key lookup and staging of new rows.
- No business logic, no commit/rollback: services own transactions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy.orm import Session

from storefront.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """
    Thin persistence gateway for one mapped model.

    Subclasses set :attr:`model`. This class NEVER opens, commits or rolls
    back transactions.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped session."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK.

        :param instance: New entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key."""
        return cast(E | None, self.session.get(self.model, entity_id))

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()
