"""Environment-driven configuration accessors."""
from __future__ import annotations

import os

from cofi import config


def test_db_path_joined_to_data_dir(monkeypatch):
    monkeypatch.setenv("COFI_DB_PATH", "recipes.db")
    monkeypatch.setenv("COFI_DATA_DIR", "/var/lib/cofi")
    assert config.get_db_path() == os.path.join("/var/lib/cofi", "recipes.db")


def test_memory_db_path_untouched(monkeypatch):
    monkeypatch.setenv("COFI_DB_PATH", ":memory:")
    monkeypatch.setenv("COFI_DATA_DIR", "/var/lib/cofi")
    assert config.get_db_path() == ":memory:"


def test_pip_capability_flags(monkeypatch):
    monkeypatch.setenv("COFI_PIP_SUPPORTED", "off")
    monkeypatch.delenv("COFI_PIP_AUTO_ENTER_SUPPORTED", raising=False)
    assert config.pip_supported() is False
    assert config.pip_auto_enter_supported() is True


def test_deep_link_url_strips_trailing_slash(monkeypatch):
    monkeypatch.setenv("COFI_DEEP_LINK_URL", "https://example.org/cofi/")
    assert config.deep_link_url() == "https://example.org/cofi"


def test_queue_size_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("COFI_PLATFORM_QUEUE_SIZE", "many")
    assert config.platform_queue_size() == config.DEFAULT_PLATFORM_QUEUE_SIZE
    monkeypatch.setenv("COFI_PLATFORM_QUEUE_SIZE", "5")
    assert config.platform_queue_size() == 5
