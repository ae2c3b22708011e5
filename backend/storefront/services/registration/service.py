"""
UserRegistrationService
=======================

Process-level service that creates accounts:

- Single registration with duplicate detection on username and email.
- Bulk registration that skips invalid or conflicting entries and keeps
  going, each entry in its own transaction.
- Administrative password reset for an existing account.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError

from storefront.repositories.user import UserRepository
from storefront.services._shared.base import BaseService
from storefront.services._shared.dto import UserPublicOut
from storefront.services._shared.errors import ConflictError, NotFoundError
from storefront.services.registration.dto import BulkRegistrationOut, UserRegistrationIn

log = logging.getLogger(__name__)


class UserRegistrationService(BaseService):
    """
    Orchestrates account creation.
    """

    def register(self, dto: UserRegistrationIn) -> UserPublicOut:
        """
        Create a user in one transaction.

        :param dto: Registration input.
        :type dto: :class:`UserRegistrationIn`
        :returns: Public view of the created user.
        :rtype: :class:`UserPublicOut`
        :raises ConflictError: Username or email already in use.
        :raises ValueError: A model validator rejected a field.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_username_or_email(dto.username, dto.email):
                    raise ConflictError("User", "username or email already in use")

                user = repo.model(
                    username=dto.username,
                    email=dto.email,
                    name=dto.name,
                    address=dto.address,
                    phone_number=dto.phone_number,
                    gender=dto.gender,
                    role=dto.role,
                )
                user.password = dto.password  # model setter hashes
                repo.add(user)
                out = self._to_user_public(user)
        except IntegrityError as exc:
            # Lost a race against a concurrent insert of the same natural key
            raise ConflictError("User", "username or email already in use") from exc

        log.info("user.registered", extra={"identity": out.username})
        return out

    def register_many(self, entries: Iterable[UserRegistrationIn]) -> BulkRegistrationOut:
        """
        Register a batch of users, skipping the ones that cannot be created.

        An entry is skipped when it conflicts with an existing (or earlier in
        the batch) username/email, or when a model validator rejects it.

        :param entries: Registration inputs.
        :returns: Created users and the number skipped.
        :rtype: :class:`BulkRegistrationOut`
        """
        created: list[UserPublicOut] = []
        skipped = 0
        for dto in entries:
            try:
                created.append(self.register(dto))
            except (ConflictError, ValueError) as exc:
                skipped += 1
                log.info("user.register.skipped", extra={"reason": type(exc).__name__})
        return BulkRegistrationOut(created=created, skipped=skipped)

    def reset_password(self, username: str, new_password: str) -> UserPublicOut:
        """
        Replace the password of an existing account.

        Refresh tokens already issued to the account stay active; revoke them
        with ``flask sessions flush`` when the reset follows a compromise.

        :param username: Login handle of the account.
        :param new_password: Raw password; the model setter hashes it.
        :returns: Public view of the updated user.
        :rtype: :class:`UserPublicOut`
        :raises NotFoundError: No account has this username.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_username(username)
            if user is None:
                raise NotFoundError("User", username)
            repo.update_password(user.id, new_password)
            out = self._to_user_public(user)

        log.info("user.password_reset", extra={"identity": out.username})
        return out

    # ------------------------------------------------------------------ #
    # Mapping
    # ------------------------------------------------------------------ #

    def _to_user_public(self, user) -> UserPublicOut:
        """
        Map ORM ``User`` to :class:`UserPublicOut`.

        :param user: ORM user instance.
        :type user: :class:`storefront.models.user.User`
        :returns: Public-safe DTO.
        :rtype: :class:`UserPublicOut`
        """
        return UserPublicOut(
            id=user.id,
            username=user.username,
            email=user.email,
            name=user.name,
            role=user.role,
        )
