"""Tests for recipes_repo helpers using in-memory SQLite."""
from __future__ import annotations

import pytest

from cofi.db import app_session
from cofi.db.engine import init_engine_once, reset_for_tests
from cofi.db.models import Step
from cofi.db.repositories import recipes_repo


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("COFI_DB_PATH", ":memory:")
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def _count_steps() -> int:
    with app_session() as session:
        return session.query(Step).count()


def test_insert_and_fetch_recipe():
    recipe_id = recipes_repo.insert_recipe(name="V60", description="Light roast")

    fetched = recipes_repo.get_recipe(recipe_id)
    assert fetched is not None
    assert fetched.name == "V60"
    assert fetched.description == "Light roast"
    assert fetched.last_finished == 0


def test_get_missing_recipe_returns_none():
    assert recipes_repo.get_recipe(404) is None


def test_update_recipe_ignores_unknown_fields():
    recipe_id = recipes_repo.insert_recipe(name="Aeropress", description="")

    updated = recipes_repo.update_recipe(recipe_id, name="Aeropress inverted", bogus="x")
    assert updated is not None
    assert updated.name == "Aeropress inverted"
    assert recipes_repo.update_recipe(9999, name="nope") is None


def test_list_recipes_orders_by_last_finished():
    older = recipes_repo.insert_recipe(name="Chemex", description="")
    newer = recipes_repo.insert_recipe(name="French press", description="")
    never = recipes_repo.insert_recipe(name="Moka", description="")
    recipes_repo.update_recipe(older, last_finished=1_000)
    recipes_repo.update_recipe(newer, last_finished=2_000)

    ids = [r.id for r in recipes_repo.list_recipes()]
    assert ids == [newer, older, never]


def test_steps_are_bound_and_ordered():
    recipe_id = recipes_repo.insert_recipe(name="V60", description="")
    inserted = recipes_repo.insert_steps(
        recipe_id,
        [
            {"name": "Bloom", "type": "WATER", "time_ms": 30_000, "value": 60},
            {"name": "Pour", "type": "WATER", "time_ms": 60_000, "value": 190},
        ],
    )

    assert inserted == 2
    steps = recipes_repo.list_steps(recipe_id)
    assert [s.name for s in steps] == ["Bloom", "Pour"]
    assert [s.order_in_recipe for s in steps] == [0, 1]
    assert all(s.recipe_id == recipe_id for s in steps)


def test_delete_recipe_and_steps():
    recipe_id = recipes_repo.insert_recipe(name="V60", description="")
    recipes_repo.insert_steps(recipe_id, [{"name": "Bloom", "type": "WATER"}])

    assert recipes_repo.delete_recipe(recipe_id) is True
    assert recipes_repo.delete_recipe(recipe_id) is False
    assert recipes_repo.delete_steps_for_recipe(recipe_id) == 1
    assert _count_steps() == 0


def test_file_database_schema_created_under_lock(monkeypatch, tmp_path):
    reset_for_tests(drop=True)
    db_file = tmp_path / "nested" / "cofi.db"
    monkeypatch.setenv("COFI_DB_PATH", str(db_file))
    init_engine_once()

    recipe_id = recipes_repo.insert_recipe(name="Kalita", description="")

    assert db_file.exists()
    assert recipes_repo.get_recipe(recipe_id).icon == "Infusion"
