"""User model definition for the storefront backend."""

from __future__ import annotations

import re
from datetime import datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.core.extensions import db

_PHONE_RE = re.compile(r"^\d{10,15}$")
GENDERS = ("male", "female", "other")


class UserRole(StrEnum):
    """Coarse authorization role stored on the account."""

    CUSTOMER = "customer"
    ADMIN = "admin"


class User(db.Model):
    """
    Storefront account and credential record.

    The ``username`` is the session identity embedded in issued tokens, so it
    is treated as immutable once the account exists.

    Fields
    ------
    username : str
        Login handle (3-50 chars). Unique.
    email : str
        Contact email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    name : str
        Display name.
    address : str | None
        Optional shipping address.
    phone_number : str | None
        Optional phone number, 10 to 15 digits.
    gender : str | None
        ``male``, ``female`` or ``other``.
    role : str
        ``customer`` (default) or ``admin``.
    """

    __tablename__ = "users"

    # Columns
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(15), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.CUSTOMER.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        CheckConstraint("role IN ('customer', 'admin')", name="ck_users_role"),
        Index("ix_users_username", "username"),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim and validate username.

        :raises ValueError: If username is missing or shorter than 3 characters.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters long.")
        return v

    @validates("phone_number")
    def _validate_phone(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        if not _PHONE_RE.match(value):
            raise ValueError("Phone number must be between 10 and 15 digits.")
        return value

    @validates("gender")
    def _validate_gender(self, key: str, value: str | None) -> str | None:
        if value is not None and value not in GENDERS:
            raise ValueError(f"Gender must be one of {', '.join(GENDERS)}.")
        return value

    @validates("role")
    def _validate_role(self, key: str, value: str) -> str:
        return UserRole(value).value
