"""User repository for persistence and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.models.user import User
from storefront.repositories.base import BaseRepository

# Hash verified when the username is unknown so that both failure paths do
# the same amount of work.
_DUMMY_PASSWORD_HASH = generate_password_hash("storefront-dummy-password")


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on lookup and password operations.
    It NEVER handles JWT or session creation; only DB-level user management.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username (trimmed, case-sensitive).

        :param username: Login handle.
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.username == username.strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """Return ``True`` when either natural key is already taken."""
        stmt = select(User.id).where(
            or_(User.username == username.strip(), User.email == email.lower().strip())
        )
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user_id: int, new_password: str) -> None:
        """Update a user's password and flush the session.

        :param user_id: Identifier of the user.
        :type user_id: int
        :param new_password: Raw password to assign; model handles hashing.
        :type new_password: str
        :raises ValueError: If the user does not exist.
        """
        user = self.get(user_id)
        if not user:
            raise ValueError(f"User {user_id} not found.")
        user.password = new_password  # invokes setter → hash
        self.flush()

    def authenticate(self, username: str, password: str) -> User | None:
        """Authenticate a user by username and password.

        Unknown usernames still pay for one hash verification, so response
        timing does not reveal whether the account exists.

        :param username: Login handle.
        :type username: str
        :param password: Raw password to verify.
        :type password: str
        :returns: Authenticated user or ``None`` when credentials fail.
        :rtype: User | None
        """
        user = self.get_by_username(username)
        if user is None:
            check_password_hash(_DUMMY_PASSWORD_HASH, password)
            return None
        if not user.verify_password(password):
            return None
        return user
