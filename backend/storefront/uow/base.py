"""Transactional boundary used by the account services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.repositories import UserRepository


class UnitOfWork(ABC):
    """
    Scope in which account reads and writes share one session.

    Implementations expose ``users`` bound to that session. Leaving the
    ``with`` block cleanly commits; an exception rolls back. Read-only
    variants refuse to commit at all.
    """

    users: UserRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
