"""Shared API helpers for request wiring and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from storefront.api.cookies import read_access_token
from storefront.core.extensions import get_refresh_store
from storefront.infra.jwt.pyjwt_token_issuer import JWTTokenIssuer
from storefront.services._shared.base import ServiceContext
from storefront.services._shared.errors import ServiceError
from storefront.services.auth.dto import AuthTokenConfig
from storefront.services.auth.service import SessionManager

F = TypeVar("F", bound=Callable[..., Any])


def token_config() -> AuthTokenConfig:
    """Build the token signing configuration from ``current_app.config``."""

    cfg = current_app.config
    return AuthTokenConfig(
        access_secret=cfg["JWT_ACCESS_TOKEN_SECRET"],
        refresh_secret=cfg["JWT_REFRESH_TOKEN_SECRET"],
        access_expires=timedelta(seconds=int(cfg.get("JWT_ACCESS_TOKEN_EXPIRES", 15 * 60))),
        refresh_expires=timedelta(
            seconds=int(cfg.get("JWT_REFRESH_TOKEN_EXPIRES", 30 * 24 * 60 * 60))
        ),
        algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
    )


def service_context() -> ServiceContext:
    """Return the request-scoped context handed to services."""

    return ServiceContext(
        identity=getattr(g, "identity", None),
        request_id=getattr(g, "request_id", None),
    )


def build_session_manager() -> SessionManager:
    """Wire a :class:`SessionManager` to the application's shared store."""

    store = get_refresh_store()
    issuer = JWTTokenIssuer(cfg=token_config(), refresh_store=store)
    return SessionManager(token_issuer=issuer, refresh_store=store, ctx=service_context())


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token.

    The resolved identity is exposed as ``g.identity``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        manager = build_session_manager()
        try:
            g.identity = manager.authenticate(read_access_token())
        except ServiceError as exc:
            raise manager.translate_exceptions(exc) from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
