# storefront/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from storefront.services._shared.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Login handle.
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for access token refresh.

    :param refresh_token: Encoded refresh JWT, ``None`` when the cookie is absent.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Encoded refresh JWT, ``None`` when the cookie is absent.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO with the freshly issued token pair.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT (already active in the store).
    :type refresh_token: str
    :param user: Authenticated user.
    :type user: UserPublicOut
    """

    access_token: str
    refresh_token: str
    user: UserPublicOut


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """
    Output DTO of a refresh: a new access token only.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param identity: Identity carried by the refresh token.
    :type identity: str
    """

    access_token: str
    identity: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token signing configuration.

    :param access_secret: HMAC key for access tokens.
    :type access_secret: str
    :param refresh_secret: HMAC key for refresh tokens.
    :type refresh_secret: str
    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param algorithm: JWS algorithm.
    :type algorithm: str
    :raises ValueError: If both secrets are equal or empty.
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=30)
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Access and refresh secrets must be non-empty.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh tokens must use distinct secrets.")
