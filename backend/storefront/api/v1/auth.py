"""Authentication endpoints: registration and the cookie-based session lifecycle."""

from __future__ import annotations

from flask import Blueprint, current_app, g, request
from marshmallow import ValidationError

from storefront.api.cookies import (
    clear_auth_cookies,
    read_refresh_token,
    set_access_cookie,
    set_refresh_cookie,
)
from storefront.api.deps import (
    build_session_manager,
    json_response,
    require_auth,
    service_context,
    timing,
)
from storefront.core.extensions import limiter
from storefront.schemas import LoginSchema, RegisterSchema, UserSchema
from storefront.services._shared.errors import ServiceError
from storefront.services.auth.dto import LoginIn, LogoutIn, RefreshIn
from storefront.services.registration.dto import UserRegistrationIn
from storefront.services.registration.service import UserRegistrationService

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Register a customer account and return the created representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    service = UserRegistrationService(ctx=service_context())
    try:
        user = service.register(UserRegistrationIn(**payload))
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    except ValueError as exc:
        # Model validators are stricter than the schema in a few places.
        raise ValidationError({"_schema": [str(exc)]}) from exc
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and set the access and refresh cookies."""

    data = login_schema.load(request.get_json(silent=True) or {})
    manager = build_session_manager()
    try:
        out = manager.login(LoginIn(username=data["username"], password=data["password"]))
    except ServiceError as exc:
        raise manager.translate_exceptions(exc) from exc

    body = {"data": {"message": "Logged in successfully", "user": user_schema.dump(out.user)}}
    response = json_response(body)
    set_access_cookie(response, out.access_token)
    set_refresh_cookie(response, out.refresh_token)
    return response


@bp.post("/token")
@bp.post("/refresh-token", endpoint="refresh_token")
@timing
def token():
    """Mint a new access cookie from the refresh cookie.

    The refresh token is not rotated.
    """

    manager = build_session_manager()
    try:
        out = manager.refresh(RefreshIn(refresh_token=read_refresh_token()))
    except ServiceError as exc:
        raise manager.translate_exceptions(exc) from exc

    response = json_response({"data": {"message": "Access token refreshed"}})
    set_access_cookie(response, out.access_token)
    return response


@bp.post("/logout")
@timing
def logout():
    """Deactivate the refresh cookie and clear both auth cookies."""

    manager = build_session_manager()
    try:
        manager.logout(LogoutIn(refresh_token=read_refresh_token()))
    except ServiceError as exc:
        raise manager.translate_exceptions(exc) from exc

    response = json_response({"data": {"message": "Logged out successfully"}})
    clear_auth_cookies(response)
    return response


@bp.get("/protected")
@timing
@require_auth
def protected():
    """Return the identity resolved from the access token."""

    body = {"data": {"message": "This is a protected route", "user": {"username": g.identity}}}
    return json_response(body)
