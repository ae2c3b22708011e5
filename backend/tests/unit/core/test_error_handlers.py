"""Unit tests for RFC 7807 error rendering and service error translation."""

from __future__ import annotations

import pytest
from storefront.core import errors as api_errors
from storefront.services._shared.base import BaseService
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


@pytest.mark.parametrize(
    ("exc", "status", "code", "message"),
    [
        (InvalidCredentialsError(), 401, "invalid_credentials", "Invalid credentials"),
        (TokenMissingError(), 401, "token_missing", "Token is required"),
        (TokenRevokedError(), 403, "token_revoked", "Invalid refresh token"),
        (TokenInvalidError(), 403, "token_invalid", "Token is invalid or expired"),
        (UnauthenticatedError(), 401, "unauthenticated", "Unauthorized"),
        (ForbiddenError(), 403, "forbidden", "Forbidden"),
        (StoreUnavailableError(), 503, "service_unavailable", "Service temporarily unavailable"),
    ],
)
def test_auth_taxonomy_translation(exc, status, code, message):
    translated = BaseService().translate_exceptions(exc)
    assert isinstance(translated, api_errors.APIError)
    assert translated.status_code == status
    assert translated.code == code
    assert translated.message == message


def test_conflict_translation():
    translated = BaseService().translate_exceptions(ConflictError("User", "taken"))
    assert isinstance(translated, api_errors.Conflict)
    assert translated.status_code == 409


def test_generic_service_error_is_bad_request():
    translated = BaseService().translate_exceptions(ServiceError("nope"))
    assert translated.status_code == 400


def test_non_service_errors_pass_through():
    exc = KeyError("x")
    assert BaseService().translate_exceptions(exc) is exc


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/does-not-exist")
    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["code"] == "not_found"
    assert body["request_id"]
