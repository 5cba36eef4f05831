"""Pydantic models for RecipeBox domain objects."""

from recipebox.models.duplicate import (
    DuplicateDetectionOptions,
    DuplicateDetectionResult,
    DuplicateGroup,
    DuplicateRecipe,
    DuplicateScanResult,
    DuplicateStats,
    MatchType,
    MergeResult,
)
from recipebox.models.recipe import (
    Difficulty,
    Ingredient,
    Instruction,
    PyObjectId,
    Recipe,
    RecipeCreate,
    SourceType,
)

__all__ = [
    "Difficulty",
    "DuplicateDetectionOptions",
    "DuplicateDetectionResult",
    "DuplicateGroup",
    "DuplicateRecipe",
    "DuplicateScanResult",
    "DuplicateStats",
    "Ingredient",
    "Instruction",
    "MatchType",
    "MergeResult",
    "PyObjectId",
    "Recipe",
    "RecipeCreate",
    "SourceType",
]
