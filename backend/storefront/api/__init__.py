"""HTTP surface of the storefront backend, grouped by API version."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask, g


def _join_prefix(*segments: str) -> str:
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount versioned blueprints beneath ``base_prefix``.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Version root such as ``"/api/v1"``.
    entries:
        ``(blueprint, relative_prefix)`` pairs; an empty relative prefix
        mounts the blueprint at the version root.
    """

    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=_join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Register the available API versions on the Flask app."""

    from storefront.api.v1 import API_VERSION as V1
    from storefront.api.v1 import REGISTRY as V1_REGISTRY

    api_base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=_join_prefix(api_base, V1), entries=V1_REGISTRY)

    @app.before_request
    def _reset_identity() -> None:
        g.pop("identity", None)


__all__ = ["init_app", "register_blueprint_group"]
