"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for API endpoints based on application config.

    Auth travels in cookies, so credentialed requests are only allowed for
    an explicit origin list. A blank or ``"*"`` ``CORS_ORIGINS`` allows any
    origin without credentials, which leaves cookie auth unusable
    cross-origin.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
