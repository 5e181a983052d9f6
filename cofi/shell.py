"""Application-scoped shell state shared by the route blueprints."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import current_app

from cofi.navigation import NavController, NavGraph
from cofi.platform import PlatformAdapter
from cofi.services.pip_coordinator import PiPCoordinator
from cofi.services.settings_store import SettingsStore

EXTENSION_KEY = "cofi"


@dataclass
class Shell:
    settings: SettingsStore
    platform: PlatformAdapter
    coordinator: PiPCoordinator
    graph: NavGraph
    nav: NavController

    @classmethod
    def build(cls, platform: PlatformAdapter, settings: SettingsStore, graph: NavGraph) -> "Shell":
        coordinator = PiPCoordinator(platform, settings.pip_enabled_provider())
        return cls(
            settings=settings,
            platform=platform,
            coordinator=coordinator,
            graph=graph,
            nav=NavController(graph),
        )


def install_shell(app: Any, shell: Shell) -> None:
    app.extensions[EXTENSION_KEY] = shell


def current_shell() -> Shell:
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError as exc:
        raise RuntimeError("cofi shell not initialized; call init_app first") from exc


__all__ = ["Shell", "install_shell", "current_shell"]
