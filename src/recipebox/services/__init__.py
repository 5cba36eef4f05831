"""Services for RecipeBox business logic."""

from recipebox.services.database import RecipeRepository
from recipebox.services.duplicate_detection import DuplicateDetectionService
from recipebox.services.duplicate_merge import (
    DuplicateMergeError,
    DuplicateMergeService,
    InvalidMergeRequestError,
    RecipeNotFoundError,
)

__all__ = [
    "DuplicateDetectionService",
    "DuplicateMergeError",
    "DuplicateMergeService",
    "InvalidMergeRequestError",
    "RecipeNotFoundError",
    "RecipeRepository",
]
