"""Tests for recipes_service workflows."""
from __future__ import annotations

import pytest

from cofi.db.engine import init_engine_once, reset_for_tests
from cofi.services import recipes_service
from cofi.services.recipes_service import RecipeNotFoundError, RecipeValidationError


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("COFI_DB_PATH", ":memory:")
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def _v60_steps():
    return [
        {"name": "Add coffee", "type": "add_coffee", "value": 15},
        {"name": "Bloom", "type": "WATER", "time_ms": 30000, "value": 45},
        {"name": "Wait", "type": "WAIT", "time_ms": 15000},
    ]


def test_add_recipe_binds_steps_to_new_id():
    recipe_id = recipes_service.add_recipe({"name": " V60 ", "description": "Hoffmann"}, _v60_steps())

    view = recipes_service.get_recipe(recipe_id)
    assert view.recipe["name"] == "V60"
    assert [s["type"] for s in view.steps] == ["ADD_COFFEE", "WATER", "WAIT"]
    assert all(s["recipe_id"] == recipe_id for s in view.steps)


def test_save_recipe_replaces_steps():
    recipe_id = recipes_service.add_recipe({"name": "V60"}, _v60_steps())

    view = recipes_service.save_recipe(
        recipe_id,
        {"name": "V60 (strong)", "description": "more coffee"},
        [{"name": "Pour", "type": "WATER", "time_ms": 90000, "value": 250}],
    )

    assert view.recipe["name"] == "V60 (strong)"
    assert [s["name"] for s in view.steps] == ["Pour"]


def test_save_missing_recipe_raises():
    with pytest.raises(RecipeNotFoundError):
        recipes_service.save_recipe(123, {"name": "Ghost"}, [])


@pytest.mark.parametrize(
    "recipe, steps, code",
    [
        ({"name": "  "}, [], "recipe_name_required"),
        (None, [], "recipe_invalid"),
        ({"name": "x"}, [{"name": "Pour", "type": "STIR"}], "step_type_invalid"),
        ({"name": "x"}, [{"name": "Pour", "time_ms": -5}], "step_time_invalid"),
        ({"name": "x"}, [{"name": ""}], "step_name_required"),
        ({"name": "x"}, "pour", "steps_invalid"),
    ],
)
def test_add_recipe_validation(recipe, steps, code):
    with pytest.raises(RecipeValidationError) as excinfo:
        recipes_service.add_recipe(recipe, steps)
    assert str(excinfo.value) == code


def test_recipe_for_edit_defaults_to_blank_recipe():
    view = recipes_service.recipe_for_edit(77)

    assert view.exists is False
    assert view.recipe["name"] == ""
    assert view.recipe["description"] == ""
    assert view.steps == []


def test_delete_recipe_removes_steps():
    recipe_id = recipes_service.add_recipe({"name": "Chemex"}, _v60_steps())

    assert recipes_service.delete_recipe(recipe_id) is True
    with pytest.raises(RecipeNotFoundError):
        recipes_service.get_recipe(recipe_id)
    assert recipes_service.recipe_for_edit(recipe_id).steps == []


def test_finish_recipe_stamps_time(monkeypatch):
    recipe_id = recipes_service.add_recipe({"name": "Aeropress"}, [])
    monkeypatch.setattr(recipes_service, "_now_ms", lambda: 1_700_000_000_000)

    recipe = recipes_service.finish_recipe(recipe_id)

    assert recipe["last_finished"] == 1_700_000_000_000
    assert recipes_service.list_recipes()[0]["last_finished"] == 1_700_000_000_000


def test_finish_missing_recipe_raises():
    with pytest.raises(RecipeNotFoundError):
        recipes_service.finish_recipe(5)
