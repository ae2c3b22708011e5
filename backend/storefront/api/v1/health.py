"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.api.deps import json_response, timing
from storefront.core.extensions import db, get_refresh_store
from storefront.services._shared.errors import StoreUnavailableError

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and session-store health information.

    Always answers 200; the per-dependency fields tell which one is down.
    """

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    store_status = "ok"
    active_sessions: int | None = None
    try:
        active_sessions = get_refresh_store().size()
    except StoreUnavailableError:
        store_status = "fail"

    status = "ok" if db_status == store_status == "ok" else "degraded"
    payload = {
        "status": status,
        "db": db_status,
        "session_store": store_status,
        "active_sessions": active_sessions,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload)
