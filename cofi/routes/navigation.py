"""Back stack endpoints used by the client to move between pages."""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from cofi.navigation import NavEntry, UnknownRouteError
from cofi.shell import current_shell
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.nav_routes")

bp = Blueprint("navigation", __name__, url_prefix="/nav")


def _entry(entry: NavEntry) -> dict:
    return {
        "destination": entry.destination,
        "route": entry.route,
        "arguments": entry.arguments,
        "graph": entry.graph,
    }


def _snapshot(**extra: Any):
    nav = current_shell().nav
    return jsonify({
        "current": _entry(nav.current),
        "back_stack": [_entry(e) for e in nav.back_stack],
        **extra,
    })


@bp.route("", methods=["GET"])
def show():
    return _snapshot()


@bp.route("/navigate", methods=["POST"])
def navigate():
    payload = request.get_json(silent=True) or {}
    route = payload.get("route")
    if not route:
        return jsonify({"error": "route_required"}), 400
    try:
        current_shell().nav.navigate(
            str(route),
            pop_up_to=payload.get("pop_up_to"),
            inclusive=bool(payload.get("inclusive", False)),
        )
    except UnknownRouteError as exc:
        return jsonify({"error": str(exc)}), 404
    return _snapshot()


@bp.route("/back", methods=["POST"])
def back():
    popped = current_shell().nav.pop_back_stack()
    return _snapshot(popped=popped)


@bp.route("/deeplink", methods=["POST"])
def deep_link():
    payload = request.get_json(silent=True) or {}
    entry = current_shell().nav.handle_deep_link(str(payload.get("url") or ""))
    if entry is None:
        return jsonify({"error": "deep_link_unrecognized"}), 404
    return _snapshot()


def register_navigation(app: Any) -> None:
    if getattr(app, "_cofi_navigation", False):  # idempotent
        return
    app.register_blueprint(bp)
    setattr(app, "_cofi_navigation", True)
    LOG.debug("navigation blueprint registered")


__all__ = ["register_navigation", "bp"]
