"""Tests for the preference store and its snapshot cache."""
from __future__ import annotations

import pytest

from cofi.db.engine import init_engine_once, reset_for_tests
from cofi.db.repositories import settings_repo
from cofi.services import settings_store
from cofi.services.settings_store import PIP_ENABLED, SettingsStore, SettingsValidationError


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("COFI_DB_PATH", ":memory:")
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def test_snapshot_defaults_without_stored_rows():
    store = SettingsStore()
    assert store.refresh() is True
    assert store.snapshot(PIP_ENABLED) is True
    assert store.all() == settings_store.DEFAULTS


def test_set_persists_and_survives_new_store():
    SettingsStore().set(PIP_ENABLED, False)

    fresh = SettingsStore()
    assert fresh.snapshot(PIP_ENABLED) is True  # cache not loaded yet
    fresh.refresh()
    assert fresh.snapshot(PIP_ENABLED) is False


def test_snapshot_never_touches_database(monkeypatch):
    store = SettingsStore()
    store.set(PIP_ENABLED, False)

    def boom():
        raise AssertionError("database read during snapshot")

    monkeypatch.setattr(settings_store.settings_repo, "load_all", boom)
    assert store.snapshot(PIP_ENABLED) is False


def test_refresh_failure_keeps_previous_cache(monkeypatch):
    store = SettingsStore()
    store.set(PIP_ENABLED, False)

    def failing_load():
        raise RuntimeError("disk gone")

    monkeypatch.setattr(settings_store.settings_repo, "load_all", failing_load)
    assert store.refresh() is False
    assert store.snapshot(PIP_ENABLED) is False


def test_refresh_ignores_invalid_and_unknown_rows():
    settings_repo.upsert(PIP_ENABLED, "not-a-bool")
    settings_repo.upsert("legacy_key", True)
    store = SettingsStore()
    store.refresh()

    assert store.snapshot(PIP_ENABLED) is True
    assert "legacy_key" not in store.all()


def test_unknown_key_rejected():
    store = SettingsStore()
    with pytest.raises(SettingsValidationError):
        store.snapshot("dark_mode")
    with pytest.raises(SettingsValidationError):
        store.set("dark_mode", True)


def test_string_values_are_coerced():
    store = SettingsStore()
    assert store.set(PIP_ENABLED, "off") is False
    assert store.set(PIP_ENABLED, "1") is True
    with pytest.raises(SettingsValidationError):
        store.set(PIP_ENABLED, "maybe")


def test_provider_reflects_updates_and_listeners_fire():
    store = SettingsStore()
    provider = store.pip_enabled_provider()
    changes: list = []
    store.add_listener(lambda key, value: changes.append((key, value)))

    store.set(PIP_ENABLED, False)

    assert provider() is False
    assert changes == [(PIP_ENABLED, False)]


def test_setting_timestamps_are_timezone_aware():
    from datetime import timezone

    from cofi.db.models import recipes as models

    stamp = models._utcnow()
    assert stamp.tzinfo is timezone.utc
