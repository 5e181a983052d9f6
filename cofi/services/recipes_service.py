"""Recipe operations wired into the list, details and edit pages."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cofi.db.models import STEP_TYPES
from cofi.db.repositories import recipes_repo
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.recipes")


class RecipeError(ValueError):
    """Base error for recipe workflows."""


class RecipeValidationError(RecipeError):
    """Raised when recipe or step input fails validation."""


class RecipeNotFoundError(RecipeError):
    """Raised when the recipe id does not exist."""


@dataclass
class RecipeView:
    recipe: Dict[str, Any]
    steps: List[Dict[str, Any]] = field(default_factory=list)
    exists: bool = True

    def as_dict(self) -> Dict[str, Any]:
        return {"recipe": self.recipe, "steps": self.steps, "exists": self.exists}


def _now_ms() -> int:
    return int(time.time() * 1000)


def _clean_recipe(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise RecipeValidationError("recipe_invalid")
    name = (data.get("name") or "").strip()
    if not name:
        raise RecipeValidationError("recipe_name_required")
    cleaned: Dict[str, Any] = {
        "name": name,
        "description": (data.get("description") or "").strip(),
    }
    icon = data.get("icon")
    if icon:
        cleaned["icon"] = str(icon)
    return cleaned


def _optional_int(value: Any, error: str) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise RecipeValidationError(error) from exc
    if number < 0:
        raise RecipeValidationError(error)
    return number


def _clean_steps(steps: Any) -> List[Dict[str, Any]]:
    if steps is None:
        return []
    if not isinstance(steps, list):
        raise RecipeValidationError("steps_invalid")
    cleaned: List[Dict[str, Any]] = []
    for index, step in enumerate(steps):
        if not isinstance(step, dict):
            raise RecipeValidationError("steps_invalid")
        name = (step.get("name") or "").strip()
        if not name:
            raise RecipeValidationError("step_name_required")
        step_type = (step.get("type") or "OTHER").strip().upper()
        if step_type not in STEP_TYPES:
            raise RecipeValidationError("step_type_invalid")
        cleaned.append({
            "name": name,
            "type": step_type,
            "time_ms": _optional_int(step.get("time_ms"), "step_time_invalid"),
            "value": _optional_int(step.get("value"), "step_value_invalid"),
            "order_in_recipe": index,
        })
    return cleaned


def list_recipes() -> List[Dict[str, Any]]:
    return [record.as_dict() for record in recipes_repo.list_recipes()]


def get_recipe(recipe_id: int) -> RecipeView:
    record = recipes_repo.get_recipe(recipe_id)
    if record is None:
        raise RecipeNotFoundError("recipe_not_found")
    steps = [step.as_dict() for step in recipes_repo.list_steps(recipe_id)]
    return RecipeView(recipe=record.as_dict(), steps=steps)


def recipe_for_edit(recipe_id: int) -> RecipeView:
    """Recipe and steps for the editor; a blank recipe when missing."""
    record = recipes_repo.get_recipe(recipe_id)
    if record is None:
        return RecipeView(
            recipe={"id": recipe_id, "name": "", "description": "", "icon": "Infusion", "last_finished": 0},
            steps=[],
            exists=False,
        )
    steps = [step.as_dict() for step in recipes_repo.list_steps(recipe_id)]
    return RecipeView(recipe=record.as_dict(), steps=steps)


def add_recipe(recipe: Dict[str, Any], steps: Any = None) -> int:
    cleaned = _clean_recipe(recipe)
    cleaned_steps = _clean_steps(steps)
    recipe_id = recipes_repo.insert_recipe(**cleaned)
    recipes_repo.insert_steps(recipe_id, cleaned_steps)
    LOG.info("Added recipe id=%s steps=%d", recipe_id, len(cleaned_steps))
    return recipe_id


def save_recipe(recipe_id: int, recipe: Dict[str, Any], steps: Any = None) -> RecipeView:
    """Update the recipe and replace all of its steps."""
    cleaned = _clean_recipe(recipe)
    cleaned_steps = _clean_steps(steps)
    if recipes_repo.update_recipe(recipe_id, **cleaned) is None:
        raise RecipeNotFoundError("recipe_not_found")
    recipes_repo.delete_steps_for_recipe(recipe_id)
    recipes_repo.insert_steps(recipe_id, cleaned_steps)
    LOG.info("Saved recipe id=%s steps=%d", recipe_id, len(cleaned_steps))
    return get_recipe(recipe_id)


def delete_recipe(recipe_id: int) -> bool:
    removed = recipes_repo.delete_recipe(recipe_id)
    steps_removed = recipes_repo.delete_steps_for_recipe(recipe_id)
    LOG.info("Deleted recipe id=%s removed=%s steps=%d", recipe_id, removed, steps_removed)
    return removed


def finish_recipe(recipe_id: int, *, finished_at_ms: Optional[int] = None) -> Dict[str, Any]:
    """Stamp the recipe's last finished time (epoch ms)."""
    stamp = finished_at_ms if finished_at_ms is not None else _now_ms()
    record = recipes_repo.update_recipe(recipe_id, last_finished=stamp)
    if record is None:
        raise RecipeNotFoundError("recipe_not_found")
    return record.as_dict()


__all__ = [
    "RecipeError",
    "RecipeValidationError",
    "RecipeNotFoundError",
    "RecipeView",
    "list_recipes",
    "get_recipe",
    "recipe_for_edit",
    "add_recipe",
    "save_recipe",
    "delete_recipe",
    "finish_recipe",
]
