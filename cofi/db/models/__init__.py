"""ORM models aggregate exports."""
from .recipes import (  # noqa: F401
	Base,
	Recipe,
	Step,
	Setting,
	STEP_TYPES,
)

__all__ = [
	"Base",
	"Recipe",
	"Step",
	"Setting",
	"STEP_TYPES",
]
