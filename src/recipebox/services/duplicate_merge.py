"""Collection-wide duplicate scanning and duplicate merge workflow."""

from typing import Optional

import structlog
from bson import ObjectId

from recipebox.models.duplicate import (
    DuplicateDetectionOptions,
    DuplicateGroup,
    DuplicateScanResult,
    MergeResult,
)
from recipebox.models.recipe import Recipe
from recipebox.services.database import RecipeRepository
from recipebox.services.duplicate_detection import DuplicateDetectionService

logger = structlog.get_logger(__name__)


class DuplicateMergeError(Exception):
    """Base exception for duplicate merge errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidMergeRequestError(DuplicateMergeError):
    """Raised when the recipe to keep is not among the recipes to merge."""

    pass


class RecipeNotFoundError(DuplicateMergeError):
    """Raised when the recipe to keep does not resolve to an active recipe."""

    def __init__(self, recipe_id: ObjectId):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class DuplicateMergeService:
    """Service for finding duplicate groups and collapsing them.

    This service:
    1. Scans a user's recipes for groups of mutual duplicates
    2. Merges a group by keeping one recipe and soft-deleting the rest
    """

    def __init__(
        self,
        recipe_repository: RecipeRepository,
        detection_service: Optional[DuplicateDetectionService] = None,
    ):
        """Initialize duplicate merge service.

        Args:
            recipe_repository: Repository for recipe operations
            detection_service: Detection service used for the scan
        """
        self.recipe_repo = recipe_repository
        self.detection_service = detection_service or DuplicateDetectionService(
            recipe_repository
        )

    async def find_all_duplicates(
        self,
        user_id: Optional[str] = None,
        similarity_threshold: float = 0.7,
        limit: int = 50,
    ) -> DuplicateScanResult:
        """Group the first ``limit`` recipes into duplicate clusters.

        Each unprocessed recipe, in creation order, is checked against every
        other unprocessed recipe. A seed with matches forms a group with them
        and every member is marked processed. Grouping is one hop from the
        seed; matches of matches are not followed.

        The pool is fetched once, so the loop performs no I/O. Cost is
        O(n^2) detector comparisons over at most ``limit`` recipes.

        Args:
            user_id: Restrict the scan to this owner's recipes
            similarity_threshold: Minimum score for a match
            limit: Maximum number of recipes to scan

        Returns:
            DuplicateScanResult with the discovered groups
        """
        pool = await self.recipe_repo.list_active(user_id=user_id, limit=limit)
        options = DuplicateDetectionOptions(similarity_threshold=similarity_threshold)

        logger.info(
            "Scanning recipes for duplicates",
            user_id=user_id,
            pool_size=len(pool),
            threshold=similarity_threshold,
        )

        processed: set[ObjectId] = set()
        groups: list[DuplicateGroup] = []

        for seed in pool:
            if seed.id in processed:
                continue

            remaining = [recipe for recipe in pool if recipe.id not in processed]
            result = self.detection_service.detect_in_pool(
                seed,
                remaining,
                options=options,
                exclude_id=seed.id,
            )

            if not result.has_duplicates:
                continue

            members = [seed] + [match.recipe for match in result.duplicates]
            groups.append(
                DuplicateGroup(
                    recipes=members,
                    similarity_score=result.highest_similarity_score,
                    match_type=result.duplicates[0].match_type,
                )
            )
            processed.update(recipe.id for recipe in members)

            logger.debug(
                "Formed duplicate group",
                seed_id=str(seed.id),
                group_size=len(members),
            )

        logger.info(
            "Duplicate scan complete",
            user_id=user_id,
            group_count=len(groups),
        )

        return DuplicateScanResult(groups=groups, total_groups=len(groups))

    async def merge_duplicate_recipes(
        self,
        recipe_ids: list[ObjectId],
        keep_recipe_id: ObjectId,
    ) -> MergeResult:
        """Keep one recipe of a duplicate group and soft-delete the others.

        IDs that do not resolve to an active recipe, or that are no longer active
        when the soft delete runs, are skipped, logged as a warning and
        reported in ``skipped_recipe_ids``.

        Args:
            recipe_ids: IDs of the duplicate group
            keep_recipe_id: ID of the recipe to keep

        Returns:
            MergeResult with the kept and deleted recipes

        Raises:
            InvalidMergeRequestError: If keep_recipe_id is not in recipe_ids
            RecipeNotFoundError: If the recipe to keep cannot be resolved
        """
        if keep_recipe_id not in recipe_ids:
            raise InvalidMergeRequestError(
                "Recipe to keep must be one of the recipes being merged"
            )

        logger.info(
            "Merging duplicate recipes",
            keep_id=str(keep_recipe_id),
            recipe_ids=[str(rid) for rid in recipe_ids],
        )

        resolved = await self.recipe_repo.get_active_by_ids(recipe_ids)
        by_id: dict[ObjectId, Recipe] = {recipe.id: recipe for recipe in resolved}

        kept_recipe = by_id.get(keep_recipe_id)
        if kept_recipe is None:
            raise RecipeNotFoundError(keep_recipe_id)

        deleted: list[Recipe] = []
        skipped: list[ObjectId] = []
        seen: set[ObjectId] = {keep_recipe_id}

        for recipe_id in recipe_ids:
            if recipe_id in seen:
                continue
            seen.add(recipe_id)

            if recipe_id not in by_id:
                logger.warning(
                    "Recipe not found for merge, skipping",
                    recipe_id=str(recipe_id),
                )
                skipped.append(recipe_id)
                continue

            deleted_recipe = await self.recipe_repo.soft_delete(recipe_id)
            if deleted_recipe is None:
                logger.warning(
                    "Recipe was not soft-deleted, skipping",
                    recipe_id=str(recipe_id),
                )
                skipped.append(recipe_id)
                continue

            deleted.append(deleted_recipe)

        logger.info(
            "Duplicate recipes merged",
            keep_id=str(keep_recipe_id),
            deleted_count=len(deleted),
            skipped_count=len(skipped),
        )

        return MergeResult(
            kept_recipe=kept_recipe,
            deleted_recipes=deleted,
            skipped_recipe_ids=skipped,
        )
