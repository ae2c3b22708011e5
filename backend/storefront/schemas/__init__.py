"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, RegisterSchema
from .user import PasswordResetSchema, UserImportSchema, UserSchema

__all__ = [
    "LoginSchema",
    "PasswordResetSchema",
    "RegisterSchema",
    "UserImportSchema",
    "UserSchema",
]
