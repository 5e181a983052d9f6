"""Repository helpers for recipes and their steps."""
from __future__ import annotations

from typing import Iterable, List, Optional

from cofi.db import app_session
from cofi.db.models import Recipe, Step
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.recipes_repo")

_RECIPE_FIELDS = ("name", "description", "icon", "last_finished")
_STEP_FIELDS = ("name", "time_ms", "type", "value", "order_in_recipe")


def list_recipes() -> List[Recipe]:
    """All recipes, most recently finished first (never-finished last, by id)."""
    with app_session() as session:
        return (
            session.query(Recipe)
            .order_by(Recipe.last_finished.desc(), Recipe.id.asc())
            .all()
        )


def get_recipe(recipe_id: int) -> Optional[Recipe]:
    with app_session() as session:
        return session.get(Recipe, recipe_id)


def insert_recipe(**fields) -> int:
    """Insert a recipe row and return its generated id."""
    values = {k: v for k, v in fields.items() if k in _RECIPE_FIELDS and v is not None}
    with app_session() as session:
        record = Recipe(**values)
        session.add(record)
        session.flush()
        new_id = int(record.id)
    LOG.debug("Inserted recipe id=%s", new_id)
    return new_id


def update_recipe(recipe_id: int, **fields) -> Optional[Recipe]:
    """Update the given columns; returns None when the recipe does not exist."""
    with app_session() as session:
        record = session.get(Recipe, recipe_id)
        if record is None:
            return None
        for key, value in fields.items():
            if key in _RECIPE_FIELDS and value is not None:
                setattr(record, key, value)
        return record


def delete_recipe(recipe_id: int) -> bool:
    with app_session() as session:
        deleted = session.query(Recipe).filter(Recipe.id == recipe_id).delete(synchronize_session=False)
        return bool(deleted)


def list_steps(recipe_id: int) -> List[Step]:
    with app_session() as session:
        return (
            session.query(Step)
            .filter(Step.recipe_id == recipe_id)
            .order_by(Step.order_in_recipe.asc(), Step.id.asc())
            .all()
        )


def insert_steps(recipe_id: int, steps: Iterable[dict]) -> int:
    """Insert steps bound to `recipe_id`; returns the number inserted."""
    count = 0
    with app_session() as session:
        for index, step in enumerate(steps):
            values = {k: step.get(k) for k in _STEP_FIELDS}
            if values.get("order_in_recipe") is None:
                values["order_in_recipe"] = index
            session.add(Step(recipe_id=recipe_id, **values))
            count += 1
    return count


def delete_steps_for_recipe(recipe_id: int) -> int:
    with app_session() as session:
        deleted = session.query(Step).filter(Step.recipe_id == recipe_id).delete(synchronize_session=False)
        return int(deleted or 0)


__all__ = [
    "list_recipes",
    "get_recipe",
    "insert_recipe",
    "update_recipe",
    "delete_recipe",
    "list_steps",
    "insert_steps",
    "delete_steps_for_recipe",
]
