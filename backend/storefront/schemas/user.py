"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from storefront.models.user import UserRole
from storefront.schemas.auth import RegisterSchema


class UserImportSchema(RegisterSchema):
    """One entry of a bulk import file; may carry a role."""

    class Meta:
        unknown = EXCLUDE

    role = fields.String(
        load_default=UserRole.CUSTOMER.value,
        validate=validate.OneOf([r.value for r in UserRole]),
    )


class PasswordResetSchema(Schema):
    """New password supplied to ``flask users set-password``."""

    password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    name = fields.String(required=True)
    address = fields.String(allow_none=True)
    phone_number = fields.String(allow_none=True)
    gender = fields.String(allow_none=True)
    role = fields.String(required=True)
