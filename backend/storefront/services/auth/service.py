# storefront/services/auth/service.py
from __future__ import annotations

import logging

from storefront.repositories.user import UserRepository
from storefront.services._shared.base import BaseService, ServiceContext
from storefront.services._shared.dto import UserPublicOut
from storefront.services._shared.errors import (
    ForbiddenError,
    InvalidCredentialsError,
    TokenInvalidError,
    TokenMissingError,
    TokenRevokedError,
    TokenVerificationError,
    UnauthenticatedError,
)
from storefront.services._shared.ports.refresh_token_store import RefreshTokenStore
from storefront.services._shared.ports.token_issuer import TokenIssuer

# DTOs
from storefront.services.auth.dto import (
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
    RefreshOut,
)

log = logging.getLogger(__name__)


class SessionManager(BaseService):
    """
    Authentication session lifecycle (login / refresh / logout / authenticate).

    Sessions move Anonymous → Authenticated → Refreshed* → LoggedOut. The
    manager holds no session state itself: access tokens are stateless and
    checked by signature and expiry only, while refresh tokens are honored
    only while present in the shared :class:`RefreshTokenStore`.

    Refresh does **not** rotate the refresh token; a used refresh token stays
    valid until logout or its natural expiry.
    """

    def __init__(
        self,
        *,
        token_issuer: TokenIssuer,
        refresh_store: RefreshTokenStore,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the manager with its collaborators.

        :param token_issuer: Mints and verifies access/refresh tokens. Its
            ``issue_refresh_token`` writes into ``refresh_store``.
        :param refresh_store: Shared set of active refresh tokens.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_issuer
        self.refresh_store = refresh_store

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Access/refresh tokens and the public user view.
        :raises InvalidCredentialsError: Unknown user or wrong password.
        :raises StoreUnavailableError: The refresh token could not be activated.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.username, dto.password)
            if user is None:
                log.info("auth.login.failed", extra={"reason": "invalid_credentials"})
                raise InvalidCredentialsError()
            public = UserPublicOut(
                id=user.id,
                username=user.username,
                email=user.email,
                name=user.name,
                role=user.role,
            )

        identity = public.username
        # Refresh first: it is the one with a store write, and a failure there
        # must not leave an orphan access token behind.
        refresh = self.tokens.issue_refresh_token(identity)
        access = self.tokens.issue_access_token(identity)

        log.info("auth.login.succeeded", extra={"identity": identity})
        return LoginOut(access_token=access, refresh_token=refresh, user=public)

    # ------------------------------------------------------------------ #
    # Refresh (non-rotating)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> RefreshOut:
        """
        Mint a new access token from an active refresh token.

        Checks run in order and each failure is terminal:

        1. token supplied, else :class:`TokenMissingError`;
        2. token present in the store, else :class:`TokenRevokedError`;
        3. signature and expiry valid, else :class:`TokenInvalidError`.

        :raises StoreUnavailableError: Membership could not be determined.
        """
        token = dto.refresh_token
        if not token:
            raise TokenMissingError()

        if not self.refresh_store.contains(token):
            log.info("auth.refresh.rejected", extra={"reason": "token_revoked"})
            raise TokenRevokedError()

        try:
            identity = self.tokens.verify_refresh(token)
        except TokenVerificationError as exc:
            log.info(
                "auth.refresh.rejected",
                extra={"reason": type(exc).__name__},
            )
            raise TokenInvalidError() from exc

        access = self.tokens.issue_access_token(identity)
        log.info("auth.refresh.succeeded", extra={"identity": identity})
        return RefreshOut(access_token=access, identity=identity)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> bool:
        """
        Deactivate the supplied refresh token. Idempotent.

        A missing token, or one that is no longer active, is not an error; the
        caller clears both cookies regardless.

        :returns: ``True`` if an active token was removed by this call.
        :raises StoreUnavailableError: The store could not be reached.
        """
        token = dto.refresh_token
        if not token:
            log.info("auth.logout", extra={"reason": "no_token"})
            return False
        removed = self.refresh_store.remove(token)
        log.info("auth.logout", extra={"reason": "removed" if removed else "already_inactive"})
        return removed

    # ------------------------------------------------------------------ #
    # Protected resources
    # ------------------------------------------------------------------ #

    def authenticate(self, access_token: str | None) -> str:
        """
        Resolve the identity of an access token, without any store lookup.

        Access tokens cannot be revoked before their natural expiry.

        :returns: The token identity.
        :raises UnauthenticatedError: No token supplied.
        :raises ForbiddenError: Signature or expiry check failed.
        """
        if not access_token:
            raise UnauthenticatedError()
        try:
            return self.tokens.verify_access(access_token)
        except TokenVerificationError as exc:
            raise ForbiddenError() from exc

