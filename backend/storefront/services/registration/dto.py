"""
DTOs for UserRegistrationService.

Contracts for creating accounts, one at a time or in bulk.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.models.user import UserRole
from storefront.services._shared.dto import UserPublicOut

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegistrationIn:
    """
    Input payload for the registration process.

    :param username: Login handle (unique); becomes the session identity.
    :type username: str
    :param email: Contact email (normalized to lowercase+trim).
    :type email: str
    :param password: Raw password (the model setter hashes it).
    :type password: str
    :param name: Display name.
    :type name: str
    :param address: Optional shipping address.
    :type address: str | None
    :param phone_number: Optional phone number, 10 to 15 digits.
    :type phone_number: str | None
    :param gender: Optional ``male``/``female``/``other``.
    :type gender: str | None
    :param role: Account role. Self-registration always uses ``customer``.
    :type role: str
    """

    username: str
    email: str
    password: str
    name: str
    address: str | None = None
    phone_number: str | None = None
    gender: str | None = None
    role: str = UserRole.CUSTOMER.value


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class BulkRegistrationOut:
    """
    Outcome of a bulk registration.

    :param created: Users inserted by this call, in input order.
    :type created: list[UserPublicOut]
    :param skipped: Number of entries rejected as invalid or conflicting.
    :type skipped: int
    """

    created: list[UserPublicOut] = field(default_factory=list)
    skipped: int = 0
