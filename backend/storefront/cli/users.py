"""Flask CLI commands for user account management."""

from __future__ import annotations

import json
import logging

import click
from flask.cli import with_appcontext
from marshmallow import ValidationError

from storefront.models.user import UserRole
from storefront.schemas import PasswordResetSchema, UserImportSchema
from storefront.services._shared.errors import NotFoundError
from storefront.services.registration.dto import UserRegistrationIn
from storefront.services.registration.service import UserRegistrationService

LOGGER = logging.getLogger(__name__)

import_schema = UserImportSchema()
password_schema = PasswordResetSchema()


@click.group("users")
def users_cli() -> None:
    """User account commands."""


@users_cli.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--allow-admin",
    is_flag=True,
    help="Keep 'admin' roles from the file instead of downgrading them to customer.",
)
@with_appcontext
def import_command(source, allow_admin: bool) -> None:
    """Register every user listed in SOURCE, a JSON array of objects.

    Entries failing validation or clashing with an existing username/email
    are skipped.
    """
    try:
        raw = json.load(source)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise click.ClickException("Expected a JSON array of user objects.")

    entries: list[UserRegistrationIn] = []
    invalid = 0
    for index, item in enumerate(raw):
        try:
            data = import_schema.load(item if isinstance(item, dict) else {})
        except ValidationError as exc:
            invalid += 1
            LOGGER.info("users.import.invalid", extra={"reason": f"entry {index}: {exc.messages}"})
            continue
        if not allow_admin:
            data["role"] = UserRole.CUSTOMER.value
        entries.append(UserRegistrationIn(**data))

    result = UserRegistrationService().register_many(entries)
    click.echo(f"Created {len(result.created)} user(s), skipped {result.skipped + invalid}.")


@users_cli.command("set-password")
@click.argument("username")
@click.password_option("--password", help="New password (8 to 128 characters).")
@with_appcontext
def set_password_command(username: str, password: str) -> None:
    """Replace the password of USERNAME."""
    try:
        data = password_schema.load({"password": password})
    except ValidationError as exc:
        message = "; ".join(exc.messages["password"])
        raise click.BadParameter(message, param_hint="--password") from exc

    try:
        UserRegistrationService().reset_password(username, data["password"])
    except NotFoundError as exc:
        raise click.ClickException(f"No user named '{username}'.") from exc
    click.echo(f"Password updated for {username}.")
