"""Lifecycle endpoints the host platform calls into.

The native wrapper around the shell forwards two OS callbacks here
(user leaving the foreground, PiP mode change) and polls
``/lifecycle/commands`` for the platform commands the coordinator queued.
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from cofi.platform import CommandQueuePlatform
from cofi.shell import current_shell
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.lifecycle")

bp = Blueprint("lifecycle", __name__, url_prefix="/lifecycle")


@bp.route("/user-leave-hint", methods=["POST"])
def user_leave_hint():
    requested = current_shell().coordinator.on_user_leaving_foreground()
    return jsonify({"pip_requested": requested})


@bp.route("/pip-mode", methods=["POST"])
def pip_mode_changed():
    payload = request.get_json(silent=True) or {}
    in_pip = payload.get("in_pip") if isinstance(payload, dict) else None
    if not isinstance(in_pip, bool):
        return jsonify({"error": "in_pip_required"}), 400
    coordinator = current_shell().coordinator
    coordinator.on_pip_mode_changed(in_pip)
    return jsonify(coordinator.state())


@bp.route("/state", methods=["GET"])
def state():
    shell = current_shell()
    payload = shell.coordinator.state()
    payload["platform"] = {
        "supports_pip": shell.platform.supports_pip,
        "supports_auto_enter": shell.platform.supports_auto_enter,
    }
    return jsonify(payload)


@bp.route("/commands", methods=["GET"])
def drain_commands():
    platform = current_shell().platform
    if not isinstance(platform, CommandQueuePlatform):
        return jsonify({"commands": []})
    commands = [command.as_dict() for command in platform.drain()]
    if commands:
        LOG.debug("Host drained %d platform commands", len(commands))
    return jsonify({"commands": commands})


def register_lifecycle(app: Any) -> None:
    if getattr(app, "_cofi_lifecycle", False):  # idempotent
        return
    app.register_blueprint(bp)
    setattr(app, "_cofi_lifecycle", True)
    LOG.debug("lifecycle blueprint registered")


__all__ = ["register_lifecycle", "bp"]
