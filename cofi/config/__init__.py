"""Application configuration accessors.

Centralizes environment variable parsing & defaults so the rest of the
package never reads ``os.environ`` directly.
"""
from __future__ import annotations

import os
from functools import lru_cache

APP_NAME = "cofi"
APP_VERSION = "0.4.0"
APP_DESCRIPTION = "Coffee brewing timer shell"

DEFAULT_DB_PATH = "cofi.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_DEEP_LINK_URL = "https://rozpierog.github.io"
DEFAULT_PLATFORM_QUEUE_SIZE = 100
_TRUE = {"1", "true", "yes", "on"}


def _raw_env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def env_bool(name: str, default: bool = False) -> bool:
    raw = _raw_env(name, str(default).lower())
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def env_int(name: str, default: int) -> int:
    raw = _raw_env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_db_path() -> str:
    raw = _raw_env("COFI_DB_PATH", DEFAULT_DB_PATH)
    if raw and raw != ":memory:" and not os.path.isabs(raw):
        data_dir = os.getenv("COFI_DATA_DIR")
        if data_dir:
            return os.path.join(data_dir, raw)
    return raw  # type: ignore[return-value]


def log_level_name() -> str:
    return _raw_env("COFI_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()  # type: ignore[union-attr]


def secret_key() -> str:
    return os.getenv("COFI_SECRET_KEY", "cofi-dev-secret")


def deep_link_url() -> str:
    """Base URL whose ``/recipe/{id}`` paths open recipe details.

    Environment Variable: COFI_DEEP_LINK_URL
    Trailing slashes are stripped.
    """
    return (os.getenv("COFI_DEEP_LINK_URL") or DEFAULT_DEEP_LINK_URL).rstrip("/")


def pip_supported() -> bool:
    """Whether the host platform can show Picture-in-Picture at all."""
    return env_bool("COFI_PIP_SUPPORTED", default=True)


def pip_auto_enter_supported() -> bool:
    """Whether the host platform supports auto-enter / seamless resize."""
    return env_bool("COFI_PIP_AUTO_ENTER_SUPPORTED", default=True)


def platform_queue_size() -> int:
    size = env_int("COFI_PLATFORM_QUEUE_SIZE", DEFAULT_PLATFORM_QUEUE_SIZE)
    return size if size > 0 else DEFAULT_PLATFORM_QUEUE_SIZE


@lru_cache(maxsize=1)
def metadata() -> dict:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
    }


def summarize_runtime_config() -> dict:
    return {
        "db_path": get_db_path(),
        "log_level": log_level_name(),
        "deep_link_url": deep_link_url(),
        "pip_supported": pip_supported(),
        "pip_auto_enter_supported": pip_auto_enter_supported(),
    }


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "env_bool",
    "env_int",
    "get_db_path",
    "log_level_name",
    "secret_key",
    "deep_link_url",
    "pip_supported",
    "pip_auto_enter_supported",
    "platform_queue_size",
    "metadata",
    "summarize_runtime_config",
]
