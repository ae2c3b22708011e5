"""Flask CLI commands for inspecting and resetting the active session set."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from storefront.core.extensions import get_refresh_store
from storefront.services._shared.errors import StoreUnavailableError

LOGGER = logging.getLogger(__name__)


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    app_env = str(config.get("APP_ENV", "production")).lower()
    if app_env == "production" and not config.get("DEBUG"):
        raise click.UsageError(
            "The 'flask sessions flush' command is restricted to non-production environments."
        )


@click.group("sessions")
def sessions_cli() -> None:
    """Manage active refresh-token sessions."""


@sessions_cli.command("count")
@with_appcontext
def count_command() -> None:
    """Print how many refresh tokens are currently active."""
    try:
        total = get_refresh_store().size()
    except StoreUnavailableError as exc:
        raise click.ClickException("Session store unavailable.") from exc
    click.echo(f"Active sessions: {total}")


@sessions_cli.command("flush")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def flush_command(yes: bool) -> None:
    """Revoke every session by emptying the active refresh-token set.

    Access tokens already issued stay valid until they expire.
    """
    _ensure_non_production()
    if not yes:
        click.confirm("This will log out EVERY user. Continue?", abort=True)
    try:
        removed = get_refresh_store().clear()
    except StoreUnavailableError as exc:
        raise click.ClickException("Session store unavailable.") from exc
    LOGGER.warning("sessions.flushed", extra={"count": removed})
    click.echo(f"Revoked {removed} session(s).")
