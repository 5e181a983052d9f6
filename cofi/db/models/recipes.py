"""ORM models for the recipe database (recipes, steps, settings)."""
from __future__ import annotations

import datetime

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

STEP_TYPES = ("ADD_COFFEE", "WATER", "WAIT", "OTHER")


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Recipe(Base):
    """A brewing recipe. `last_finished` is epoch milliseconds (0 = never)."""

    __tablename__ = "recipe"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    icon = Column(String(32), nullable=False, default="Infusion")
    last_finished = Column(BigInteger, nullable=False, default=0)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description or "",
            "icon": self.icon,
            "last_finished": self.last_finished or 0,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Recipe id={self.id} name={self.name!r}>"


class Step(Base):
    """One timed step of a recipe; `time_ms` is optional for manual steps."""

    __tablename__ = "step"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    time_ms = Column(Integer, nullable=True)
    type = Column(String(16), nullable=False, default="OTHER")
    value = Column(Integer, nullable=True)
    order_in_recipe = Column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_step_recipe_order", "recipe_id", "order_in_recipe"),
    )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "recipe_id": self.recipe_id,
            "name": self.name,
            "time_ms": self.time_ms,
            "type": self.type,
            "value": self.value,
            "order_in_recipe": self.order_in_recipe,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Step id={self.id} recipe_id={self.recipe_id} type={self.type}>"


class Setting(Base):
    """Key/value preference row; `value` holds JSON text."""

    __tablename__ = "settings"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )


__all__ = ["Base", "Recipe", "Step", "Setting", "STEP_TYPES"]
