# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe projection of a user (no password hash).

    :param id: Surrogate identifier.
    :type id: int
    :param username: Login handle; the session identity.
    :type username: str
    :param email: Normalized email.
    :type email: str
    :param name: Display name.
    :type name: str
    :param role: ``customer`` or ``admin``.
    :type role: str
    """

    id: int
    username: str
    email: str
    name: str
    role: str
