"""Boolean preference store with an in-memory snapshot cache.

Reads through `snapshot` never touch the database, so they are safe to
call from time-boxed lifecycle callbacks. The cache is filled by
`refresh` (at startup) and kept current by `set`.
"""
from __future__ import annotations

import threading
from typing import Callable, Dict, List

from cofi.db.repositories import settings_repo
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.settings")

PIP_ENABLED = "pip_enabled"
STEP_SOUND_ENABLED = "step_sound_enabled"
STEP_VIBRATION_ENABLED = "step_vibration_enabled"

DEFAULTS: Dict[str, bool] = {
    PIP_ENABLED: True,
    STEP_SOUND_ENABLED: True,
    STEP_VIBRATION_ENABLED: True,
}


class SettingsValidationError(ValueError):
    """Raised for unknown keys or non-boolean values."""


def _require_key(key: str) -> str:
    if key not in DEFAULTS:
        raise SettingsValidationError("unknown_setting")
    return key


def _coerce_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise SettingsValidationError("setting_value_invalid")


class SettingsStore:
    def __init__(self) -> None:
        self._cache: Dict[str, bool] = dict(DEFAULTS)
        self._lock = threading.Lock()
        self._listeners: List[Callable[[str, bool], None]] = []

    def snapshot(self, key: str) -> bool:
        """Current cached value (or its default) without any I/O."""
        _require_key(key)
        return self._cache.get(key, DEFAULTS[key])

    def all(self) -> Dict[str, bool]:
        with self._lock:
            return dict(self._cache)

    def refresh(self) -> bool:
        """Reload the cache from the database.

        Returns False when the load failed; the previous cache is kept.
        """
        try:
            stored = settings_repo.load_all()
        except Exception:
            LOG.warning("Settings refresh failed; keeping cached values", exc_info=True)
            return False
        fresh = dict(DEFAULTS)
        for key, value in stored.items():
            if key not in DEFAULTS:
                LOG.debug("Ignoring stored unknown setting key=%s", key)
                continue
            try:
                fresh[key] = _coerce_bool(value)
            except SettingsValidationError:
                LOG.warning("Ignoring invalid stored value key=%s value=%r", key, value)
        with self._lock:
            self._cache = fresh
        return True

    def set(self, key: str, value) -> bool:
        _require_key(key)
        coerced = _coerce_bool(value)
        settings_repo.upsert(key, coerced)
        with self._lock:
            self._cache[key] = coerced
        LOG.info("Setting updated key=%s value=%s", key, coerced)
        for listener in list(self._listeners):
            try:
                listener(key, coerced)
            except Exception:
                LOG.exception("Settings listener failed key=%s", key)
        return coerced

    def add_listener(self, listener: Callable[[str, bool], None]) -> None:
        self._listeners.append(listener)

    def pip_enabled_provider(self) -> Callable[[], bool]:
        return lambda: self.snapshot(PIP_ENABLED)


__all__ = [
    "PIP_ENABLED",
    "STEP_SOUND_ENABLED",
    "STEP_VIBRATION_ENABLED",
    "DEFAULTS",
    "SettingsStore",
    "SettingsValidationError",
]
