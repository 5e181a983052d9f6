"""Application initialization / wiring.

Orchestrates: DB init, settings cache warm-up, PiP coordinator and
navigation graph construction, route registration.
"""
from __future__ import annotations
from typing import Any, Optional

from flask import Flask

from cofi import config as app_config
from cofi.db import init_engine_once
from cofi.navigation import NavGraph
from cofi.platform import CommandQueuePlatform, PlatformAdapter
from cofi.routes.inject import register_all as register_routes
from cofi.services.settings_store import SettingsStore
from cofi.shell import Shell, install_shell
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.startup")


def default_platform() -> PlatformAdapter:
    return CommandQueuePlatform(
        supports_pip=app_config.pip_supported(),
        supports_auto_enter=app_config.pip_auto_enter_supported(),
        max_commands=app_config.platform_queue_size(),
    )


def init_app(app: Any, platform: Optional[PlatformAdapter] = None) -> Shell:
    LOG.debug("init_app starting")
    init_engine_once()
    LOG.debug("DB engine initialized")
    settings = SettingsStore()
    if not settings.refresh():
        LOG.warning("Starting with default settings; stored preferences unavailable")
    shell = Shell.build(
        platform=platform or default_platform(),
        settings=settings,
        graph=NavGraph(app_config.deep_link_url()),
    )
    install_shell(app, shell)
    register_routes(app)
    LOG.info("App startup wiring complete %s", app_config.summarize_runtime_config())
    return shell


def create_app(platform: Optional[PlatformAdapter] = None) -> Flask:
    app = Flask("cofi")
    app.config["SECRET_KEY"] = app_config.secret_key()
    init_app(app, platform)
    return app

__all__ = ["init_app", "create_app", "default_platform"]
