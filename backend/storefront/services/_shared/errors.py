"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask, HTTP, or SQLAlchemy directly. They serve as stable contracts between
repositories, token adapters, stores and application services.

The translation to HTTP responses (RFC 7807) is handled by
``storefront/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    - The API layer later translates them to ``APIError``.
    """

    pass


class AuthError(ServiceError):
    """
    Base class for the authentication taxonomy.

    Each subclass carries a fixed, client-safe ``message``; callers never
    attach details that would reveal which check failed.
    """

    message = "Authentication failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


# --------------------------------------------------------------------------- #
# Authentication taxonomy
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(AuthError):
    """Unknown identity or wrong password (deliberately indistinguishable)."""

    message = "Invalid credentials"


class TokenMissingError(AuthError):
    """No refresh token was supplied."""

    message = "Token is required"


class TokenRevokedError(AuthError):
    """The refresh token is not in the active set."""

    message = "Invalid refresh token"


class TokenInvalidError(AuthError):
    """The refresh token failed signature or expiry verification."""

    message = "Token is invalid or expired"


class UnauthenticatedError(AuthError):
    """No access token was supplied for a protected resource."""

    message = "Unauthorized"


class ForbiddenError(AuthError):
    """The access token failed signature or expiry verification."""

    message = "Forbidden"


class StoreUnavailableError(ServiceError):
    """
    The shared refresh-token store could not be reached in time.

    Transient: the caller may retry with backoff. Never a substitute for
    a revocation decision.
    """

    def __init__(self, message: str = "Session store unavailable") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Token verification (raised by TokenIssuer.verify)
# --------------------------------------------------------------------------- #


class TokenVerificationError(ServiceError):
    """Base class for signature/expiry failures of a single token."""

    pass


class InvalidSignatureError(TokenVerificationError):
    """Bad signature, malformed token or missing required claims."""

    pass


class TokenExpiredError(TokenVerificationError):
    """The token is at or past its ``exp`` instant."""

    pass


# --------------------------------------------------------------------------- #
# Persistence
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"
