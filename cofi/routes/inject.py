"""Blueprint registration, called from startup wiring."""
from __future__ import annotations
from typing import Any

from .health import register_health
from .lifecycle import register_lifecycle
from .navigation import register_navigation
from .pages import register_pages


def register_all(app: Any) -> None:
    register_pages(app)
    register_lifecycle(app)
    register_navigation(app)
    register_health(app)

__all__ = ["register_all"]
