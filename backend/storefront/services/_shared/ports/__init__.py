"""
storefront.services._shared.ports
=================================

Collection of *ports* (hexagonal interfaces) that define the contracts
for session token management.

These ports decouple the service layer from concrete implementations
of token signing and refresh-token storage.

Modules
-------
- :mod:`token_issuer`:
    Defines :class:`~.TokenIssuer`, the abstraction for minting and verifying
    access/refresh tokens.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore`, the shared set of active refresh
    tokens, and :class:`~.InMemoryRefreshTokenStore` for tests.

Design Notes
------------
Concrete adapters (Redis, PyJWT) implement these interfaces under
``storefront.infra``.
"""

from __future__ import annotations

from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore
from .token_issuer import TokenIssuer

__all__ = [
    "TokenIssuer",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
]
