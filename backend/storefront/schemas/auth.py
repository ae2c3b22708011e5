"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from collections.abc import Mapping

from marshmallow import Schema, fields, pre_load, validate

from storefront.models.user import GENDERS

PHONE_PATTERN = r"^\d{10,15}$"


class RegisterSchema(Schema):
    """Input payload for account self-registration."""

    username = fields.String(required=True, validate=validate.Length(min=3, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True, load_only=True, validate=validate.Length(min=8, max=128)
    )
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    address = fields.String(load_default=None, validate=validate.Length(max=255))
    phone_number = fields.String(
        load_default=None,
        validate=validate.Regexp(PHONE_PATTERN, error="Phone number must be 10 to 15 digits."),
    )
    gender = fields.String(load_default=None, validate=validate.OneOf(GENDERS))

    @pre_load
    def _strip_natural_keys(self, data, **kwargs):
        # Length rules apply to the value the model will store.
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        for key in ("username", "email"):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    No password length rule here: a short password is a failed login, not a
    malformed request.
    """

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))
