"""Service exports."""

from .recipes_service import (
    RecipeError,
    RecipeValidationError,
    RecipeNotFoundError,
)
from .settings_store import SettingsStore, SettingsValidationError
from .pip_coordinator import PiPCoordinator
from . import recipes_service, settings_store, pip_coordinator

__all__ = [
    "RecipeError",
    "RecipeValidationError",
    "RecipeNotFoundError",
    "SettingsStore",
    "SettingsValidationError",
    "PiPCoordinator",
    "recipes_service",
    "settings_store",
    "pip_coordinator",
]
