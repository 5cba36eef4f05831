"""FastAPI dependencies for repositories and duplicate services."""

from fastapi import Depends

from recipebox.config import settings
from recipebox.services.database import RecipeRepository, get_collection
from recipebox.services.duplicate_detection import DuplicateDetectionService
from recipebox.services.duplicate_merge import DuplicateMergeService


# Dependency to get recipe repository
def get_recipe_repository() -> RecipeRepository:
    """Get recipe repository instance.

    Returns:
        RecipeRepository bound to the configured collection
    """
    return RecipeRepository(get_collection(settings.recipes_collection))


def get_duplicate_detection_service(
    recipe_repo: RecipeRepository = Depends(get_recipe_repository),
) -> DuplicateDetectionService:
    """Get duplicate detection service instance."""
    return DuplicateDetectionService(recipe_repository=recipe_repo)


def get_duplicate_merge_service(
    recipe_repo: RecipeRepository = Depends(get_recipe_repository),
    detection_service: DuplicateDetectionService = Depends(
        get_duplicate_detection_service
    ),
) -> DuplicateMergeService:
    """Get duplicate merge service instance."""
    return DuplicateMergeService(
        recipe_repository=recipe_repo,
        detection_service=detection_service,
    )
