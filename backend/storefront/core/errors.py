"""RFC 7807 problem responses for every error leaving the API.

Each body carries ``type``, ``title``, ``status``, ``detail``, ``instance``,
a stable snake_case ``code`` and the ``request_id`` of the request. Internal
details (database messages, token values, stack traces) never reach clients;
server-side failures are logged with their traceback instead.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from storefront.core.logger import ensure_request_id

log = logging.getLogger(__name__)

_STATUS_CODES = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.FORBIDDEN: "forbidden",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.METHOD_NOT_ALLOWED: "method_not_allowed",
    HTTPStatus.CONFLICT: "conflict",
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "payload_too_large",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    HTTPStatus.UNPROCESSABLE_ENTITY: "unprocessable_entity",
    HTTPStatus.TOO_MANY_REQUESTS: "too_many_requests",
    HTTPStatus.INTERNAL_SERVER_ERROR: "internal_server_error",
    HTTPStatus.SERVICE_UNAVAILABLE: "service_unavailable",
}


def problem_body(
    status: int, code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Return the problem details mapping for the current request."""

    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def _respond(
    status: int,
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
    exc_info: BaseException | None = None,
) -> tuple[Response, int]:
    body = problem_body(status, code, message, details)
    if status >= 500:
        log.error("request.failed", extra={"reason": code}, exc_info=exc_info)
    else:
        log.warning("request.rejected", extra={"reason": code})
    response = jsonify(body)
    response.mimetype = "application/problem+json"
    return response, int(status)


class APIError(Exception):
    """
    An error that renders directly as a problem response.

    Parameters
    ----------
    message : str
        Client-safe description placed in ``detail``.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        Stable snake_case identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Extra structured payload, e.g. per-field validation messages.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem_body(self.status_code, self.code, self.message, self.details or None)


class Conflict(APIError):
    """409 for a username or email that is already taken."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class ServiceUnavailable(APIError):
    """503 when the session store or database cannot be reached."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            code="service_unavailable",
        )


def init_app(app: Flask) -> None:
    """
    Register the problem handlers on ``app``.

    Service-layer errors that escape an endpoint untranslated go through
    :meth:`BaseService.translate_exceptions`, so the HTTP mapping of the
    auth taxonomy lives in one place.
    """
    from storefront.services._shared.base import BaseService
    from storefront.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(err.status_code, err.code, err.message, details=err.details or None)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService().translate_exceptions(err)
        if isinstance(translated, APIError):
            return handle_api_error(translated)
        return handle_unexpected_error(err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = _STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return _respond(status, code, message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        return _respond(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            details={"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.info("db.integrity_error", exc_info=err)
        return _respond(HTTPStatus.CONFLICT, "conflict", "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return _respond(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            exc_info=err,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return _respond(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            exc_info=err,
        )
