from __future__ import annotations

from typing import Protocol


class TokenIssuer(Protocol):
    """
    Port for minting and verifying signed session tokens.

    Access and refresh tokens are signed with two distinct secrets and carry
    the identity in the ``sub`` claim.
    """

    @property
    def access_secret(self) -> str: ...

    @property
    def refresh_secret(self) -> str: ...

    def issue_access_token(self, identity: str) -> str:
        """Sign a short-lived access token for ``identity``. No side effects."""

    def issue_refresh_token(self, identity: str) -> str:
        """
        Sign a long-lived refresh token for ``identity`` **and activate it**.

        The token string is added to the refresh token store before it is
        returned; if the store write fails nothing is returned and the store
        error propagates.
        """

    def verify(self, token: str, secret: str) -> str:
        """
        Check signature and expiry of ``token`` against ``secret``.

        Expiry is inclusive: a token is rejected at or after its ``exp``.

        :returns: The identity carried by the token.
        :raises InvalidSignatureError: Signature, format or claims are invalid.
        :raises TokenExpiredError: The token has expired.
        """

    def verify_access(self, token: str) -> str:
        """Verify ``token`` against the access secret."""

    def verify_refresh(self, token: str) -> str:
        """Verify ``token`` against the refresh secret."""
