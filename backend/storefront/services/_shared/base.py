# storefront/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from storefront.core import errors as api_errors
from storefront.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    ServiceError,
    StoreUnavailableError,
    TokenInvalidError,
    TokenMissingError,
    TokenRevokedError,
    UnauthenticatedError,
)
from storefront.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# Authentication taxonomy → (HTTP status, stable error code)
AUTH_ERROR_STATUS: dict[type[ServiceError], tuple[int, str]] = {
    InvalidCredentialsError: (HTTPStatus.UNAUTHORIZED, "invalid_credentials"),
    TokenMissingError: (HTTPStatus.UNAUTHORIZED, "token_missing"),
    TokenRevokedError: (HTTPStatus.FORBIDDEN, "token_revoked"),
    TokenInvalidError: (HTTPStatus.FORBIDDEN, "token_invalid"),
    UnauthenticatedError: (HTTPStatus.UNAUTHORIZED, "unauthenticated"),
    ForbiddenError: (HTTPStatus.FORBIDDEN, "forbidden"),
}


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids, etc.).

    :param identity: Authenticated session identity (username).
    :param request_id: Correlation id for logging/tracing.
    """

    identity: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        # --- Authentication taxonomy ----------------------------------------
        for err_type, (status, code) in AUTH_ERROR_STATUS.items():
            if isinstance(exc, err_type):
                return api_errors.APIError(message=str(exc), status_code=status, code=code)

        if isinstance(exc, StoreUnavailableError):
            # → 503, generic message without backend detail
            return api_errors.ServiceUnavailable()

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
