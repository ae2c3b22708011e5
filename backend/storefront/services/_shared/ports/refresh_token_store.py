from __future__ import annotations

import threading
from typing import Protocol


class RefreshTokenStore(Protocol):
    """
    Shared allow-list of the refresh tokens currently honored.

    Implementations MUST be reachable from every server instance (no
    process-local copy in production) and MUST make ``add``/``remove`` atomic
    with respect to concurrent ``contains`` calls. Every call is bounded in
    time; connectivity failures and timeouts raise
    :class:`~storefront.services._shared.errors.StoreUnavailableError` and are
    never reported as a membership answer.
    """

    def add(self, token: str) -> None:
        """Activate ``token``. Idempotent."""

    def contains(self, token: str) -> bool:
        """Return ``True`` while ``token`` is active."""

    def remove(self, token: str) -> bool:
        """
        Deactivate ``token``. Idempotent.

        :returns: ``True`` if the token was active before the call.
        """

    def size(self) -> int:
        """Return the number of active tokens."""

    def clear(self) -> int:
        """
        Deactivate every token.

        :returns: Number of tokens removed.
        """


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Process-local refresh token set.

    .. note::
       Only suitable for tests and single-process tooling; a threading lock
       provides the atomicity the protocol requires.
    """

    def __init__(self) -> None:
        self._tokens: set[str] = set()
        self._lock = threading.Lock()

    def add(self, token: str) -> None:
        with self._lock:
            self._tokens.add(token)

    def contains(self, token: str) -> bool:
        with self._lock:
            return token in self._tokens

    def remove(self, token: str) -> bool:
        with self._lock:
            if token in self._tokens:
                self._tokens.discard(token)
                return True
            return False

    def size(self) -> int:
        with self._lock:
            return len(self._tokens)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._tokens)
            self._tokens.clear()
            return removed
