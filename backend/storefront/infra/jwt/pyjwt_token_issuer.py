# storefront/infra/jwt/pyjwt_token_issuer.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt
from jwt import InvalidTokenError

from storefront.services._shared.errors import InvalidSignatureError, TokenExpiredError
from storefront.services._shared.ports import RefreshTokenStore, TokenIssuer
from storefront.services.auth.dto import AuthTokenConfig


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class JWTTokenIssuer(TokenIssuer):
    """
    HMAC-signed JWT issuer backed by PyJWT.

    :param cfg: Secrets and lifetimes for both token kinds.
    :param refresh_store: Store receiving every refresh token minted here.
    :param clock: Source of "now" (UTC); injectable for tests.
    """

    cfg: AuthTokenConfig
    refresh_store: RefreshTokenStore
    clock: Callable[[], datetime] = field(default=_utcnow)

    @property
    def access_secret(self) -> str:
        return self.cfg.access_secret

    @property
    def refresh_secret(self) -> str:
        return self.cfg.refresh_secret

    # -------------------- issuing --------------------

    def _encode(self, identity: str, *, secret: str, lifetime: timedelta) -> str:
        now = self.clock()
        payload: dict[str, Any] = {
            "sub": str(identity),
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            # Distinguishes tokens minted for the same identity within one second.
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=self.cfg.algorithm)

    def issue_access_token(self, identity: str) -> str:
        return self._encode(
            identity, secret=self.cfg.access_secret, lifetime=self.cfg.access_expires
        )

    def issue_refresh_token(self, identity: str) -> str:
        token = self._encode(
            identity, secret=self.cfg.refresh_secret, lifetime=self.cfg.refresh_expires
        )
        # Activation is part of minting: a refresh token never leaves this
        # method without being present in the store.
        self.refresh_store.add(token)
        return token

    # -------------------- verification --------------------

    def verify(self, token: str, secret: str) -> str:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.cfg.algorithm],
                # Expiry is checked below against the injectable clock with an
                # inclusive boundary.
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp"],
                },
            )
        except InvalidTokenError as exc:
            raise InvalidSignatureError(str(exc)) from exc

        try:
            exp = int(payload["exp"])
        except (TypeError, ValueError) as exc:
            raise InvalidSignatureError("Malformed exp claim") from exc

        if self.clock().timestamp() >= exp:
            raise TokenExpiredError("Token has expired")

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            raise InvalidSignatureError("Malformed sub claim")
        return subject

    def verify_access(self, token: str) -> str:
        return self.verify(token, self.cfg.access_secret)

    def verify_refresh(self, token: str) -> str:
        return self.verify(token, self.cfg.refresh_secret)
