"""Auth cookie helpers shared by the session endpoints."""

from __future__ import annotations

from flask import Response, current_app, request


def _cookie_options() -> dict[str, object]:
    cfg = current_app.config
    return {
        "httponly": True,
        "secure": bool(cfg.get("AUTH_COOKIE_SECURE", False)),
        "samesite": cfg.get("AUTH_COOKIE_SAMESITE", "Strict"),
        "path": "/",
    }


def access_cookie_name() -> str:
    return str(current_app.config.get("ACCESS_TOKEN_COOKIE_NAME", "accessToken"))


def refresh_cookie_name() -> str:
    return str(current_app.config.get("REFRESH_TOKEN_COOKIE_NAME", "refreshToken"))


def set_access_cookie(response: Response, token: str) -> None:
    """Attach the access token cookie; its max-age matches the token lifetime."""
    response.set_cookie(
        access_cookie_name(),
        token,
        max_age=int(current_app.config.get("JWT_ACCESS_TOKEN_EXPIRES", 15 * 60)),
        **_cookie_options(),
    )


def set_refresh_cookie(response: Response, token: str) -> None:
    """Attach the refresh token cookie; its max-age matches the token lifetime."""
    response.set_cookie(
        refresh_cookie_name(),
        token,
        max_age=int(current_app.config.get("JWT_REFRESH_TOKEN_EXPIRES", 30 * 24 * 60 * 60)),
        **_cookie_options(),
    )


def clear_auth_cookies(response: Response) -> None:
    """Expire both auth cookies with the attributes they were set with."""
    opts = _cookie_options()
    for name in (access_cookie_name(), refresh_cookie_name()):
        response.delete_cookie(
            name,
            path="/",
            secure=bool(opts["secure"]),
            httponly=True,
            samesite=opts["samesite"],  # type: ignore[arg-type]
        )


def read_refresh_token() -> str | None:
    """Return the refresh token cookie of the current request, if any."""
    return request.cookies.get(refresh_cookie_name()) or None


def read_access_token() -> str | None:
    """
    Return the access token of the current request.

    The cookie wins; an ``Authorization: Bearer`` header is accepted for
    non-browser clients.
    """
    token = request.cookies.get(access_cookie_name())
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None
