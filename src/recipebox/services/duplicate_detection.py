"""Duplicate detection service for identifying recipes that are already saved.

Detection is rule-based and explainable. Five independent detectors compare a
candidate recipe against the pool of active recipes:

1. exact_title -- normalized title equality (score 1.0)
2. fuzzy_title -- Levenshtein similarity of normalized titles (>= 0.8)
3. ingredient_similarity -- Jaccard index of ingredient names (>= 0.7)
4. source_url -- normalized source URL equality (score 1.0)
5. content_fingerprint -- SHA-256 content digest equality (score 1.0)

Detectors always run in that order. When several detectors match the same
existing recipe only the first match is kept, so the order decides which
match type is reported.
"""

from collections import Counter
from typing import Optional

import structlog
from bson import ObjectId

from recipebox.models.duplicate import (
    DuplicateDetectionOptions,
    DuplicateDetectionResult,
    DuplicateRecipe,
    DuplicateStats,
    MatchType,
)
from recipebox.models.recipe import Ingredient, Recipe, RecipeCreate
from recipebox.services.database import RecipeRepository
from recipebox.services.normalization import (
    normalize_ingredients,
    normalize_text,
    normalize_url,
)
from recipebox.services.similarity import (
    confidence_level,
    content_fingerprint,
    ingredient_similarity,
    string_similarity,
)

logger = structlog.get_logger(__name__)


class DuplicateDetectionService:
    """Service for detecting duplicate recipes."""

    EXACT_TITLE_SCORE = 1.0
    FUZZY_TITLE_THRESHOLD = 0.8
    INGREDIENT_SIMILARITY_THRESHOLD = 0.7
    SOURCE_URL_SCORE = 1.0
    CONTENT_FINGERPRINT_SCORE = 1.0

    def __init__(self, recipe_repository: RecipeRepository):
        """Initialize duplicate detection service.

        Args:
            recipe_repository: Repository used to fetch the comparison pool
        """
        self.recipe_repo = recipe_repository

    async def detect_duplicates(
        self,
        candidate: RecipeCreate,
        user_id: Optional[str] = None,
        options: Optional[DuplicateDetectionOptions] = None,
    ) -> DuplicateDetectionResult:
        """Detect existing recipes that duplicate a candidate recipe.

        Fetches the active recipe pool once, then runs the enabled detectors
        against it. Repository failures propagate to the caller.

        Args:
            candidate: Recipe being checked
            user_id: Restrict comparison to this owner's recipes
            options: Detector toggles and score threshold

        Returns:
            DuplicateDetectionResult with ranked matches
        """
        pool = await self.recipe_repo.list_active(user_id=user_id)

        logger.info(
            "Detecting duplicates for recipe",
            title=candidate.title,
            user_id=user_id,
            pool_size=len(pool),
        )

        result = self.detect_in_pool(candidate, pool, options=options)

        logger.info(
            "Duplicate detection complete",
            title=candidate.title,
            duplicate_count=result.total_duplicates,
            highest_score=result.highest_similarity_score,
        )

        return result

    def detect_in_pool(
        self,
        candidate: RecipeCreate,
        pool: list[Recipe],
        options: Optional[DuplicateDetectionOptions] = None,
        exclude_id: Optional[ObjectId] = None,
    ) -> DuplicateDetectionResult:
        """Run the detectors against an in-memory pool.

        Performs no I/O. Soft-deleted recipes and ``exclude_id`` are skipped.

        Args:
            candidate: Recipe being checked
            pool: Existing recipes to compare against
            options: Detector toggles and score threshold
            exclude_id: Recipe ID to leave out of the pool (the candidate itself)

        Returns:
            DuplicateDetectionResult with ranked matches
        """
        options = options or DuplicateDetectionOptions()
        eligible = [
            recipe
            for recipe in pool
            if not recipe.is_deleted
            and (exclude_id is None or recipe.id != exclude_id)
        ]

        matches: list[DuplicateRecipe] = []

        if options.check_exact_title:
            matches.extend(self.check_exact_title(candidate.title, eligible))

        if options.check_fuzzy_title:
            matches.extend(self.check_fuzzy_title(candidate.title, eligible))

        if options.check_ingredient_similarity:
            matches.extend(
                self.check_ingredient_similarity(candidate.ingredients, eligible)
            )

        if options.check_source_url and candidate.source:
            matches.extend(self.check_source_url(candidate.source, eligible))

        if options.check_content_fingerprint:
            matches.extend(self.check_content_fingerprint(candidate, eligible))

        unique = self._remove_duplicate_entries(matches)
        filtered = [
            match
            for match in unique
            if match.similarity_score >= options.similarity_threshold
        ]
        filtered.sort(key=lambda m: m.similarity_score, reverse=True)

        return DuplicateDetectionResult(
            duplicates=filtered,
            has_duplicates=bool(filtered),
            total_duplicates=len(filtered),
            highest_similarity_score=filtered[0].similarity_score if filtered else 0.0,
        )

    def check_exact_title(
        self, title: str, pool: list[Recipe]
    ) -> list[DuplicateRecipe]:
        """Match recipes whose normalized title equals the candidate's."""
        normalized = normalize_text(title)
        return [
            DuplicateRecipe(
                recipe=recipe,
                similarity_score=self.EXACT_TITLE_SCORE,
                match_type=MatchType.EXACT_TITLE,
                confidence="high",
            )
            for recipe in pool
            if normalize_text(recipe.title) == normalized
        ]

    def check_fuzzy_title(
        self, title: str, pool: list[Recipe]
    ) -> list[DuplicateRecipe]:
        """Match recipes whose normalized title is within edit distance."""
        normalized = normalize_text(title)
        matches = []

        for recipe in pool:
            similarity = string_similarity(normalized, normalize_text(recipe.title))
            if similarity >= self.FUZZY_TITLE_THRESHOLD:
                matches.append(
                    DuplicateRecipe(
                        recipe=recipe,
                        similarity_score=similarity,
                        match_type=MatchType.FUZZY_TITLE,
                        confidence=confidence_level(similarity),
                    )
                )

        return matches

    def check_ingredient_similarity(
        self, ingredients: list[Ingredient], pool: list[Recipe]
    ) -> list[DuplicateRecipe]:
        """Match recipes sharing most of their ingredient names."""
        normalized = normalize_ingredients(ingredients)
        matches = []

        for recipe in pool:
            similarity = ingredient_similarity(
                normalized, normalize_ingredients(recipe.ingredients)
            )
            if similarity >= self.INGREDIENT_SIMILARITY_THRESHOLD:
                matches.append(
                    DuplicateRecipe(
                        recipe=recipe,
                        similarity_score=similarity,
                        match_type=MatchType.INGREDIENT_SIMILARITY,
                        confidence=confidence_level(similarity),
                    )
                )

        return matches

    def check_source_url(
        self, source: str, pool: list[Recipe]
    ) -> list[DuplicateRecipe]:
        """Match recipes imported from the same URL.

        Recipes without a source never match.
        """
        normalized = normalize_url(source)
        return [
            DuplicateRecipe(
                recipe=recipe,
                similarity_score=self.SOURCE_URL_SCORE,
                match_type=MatchType.SOURCE_URL,
                confidence="high",
            )
            for recipe in pool
            if recipe.source and normalize_url(recipe.source) == normalized
        ]

    def check_content_fingerprint(
        self, candidate: RecipeCreate, pool: list[Recipe]
    ) -> list[DuplicateRecipe]:
        """Match recipes with byte-identical content fingerprints."""
        fingerprint = content_fingerprint(candidate)
        return [
            DuplicateRecipe(
                recipe=recipe,
                similarity_score=self.CONTENT_FINGERPRINT_SCORE,
                match_type=MatchType.CONTENT_FINGERPRINT,
                confidence="high",
            )
            for recipe in pool
            if content_fingerprint(recipe) == fingerprint
        ]

    @staticmethod
    def _remove_duplicate_entries(
        matches: list[DuplicateRecipe],
    ) -> list[DuplicateRecipe]:
        """Keep the first match per existing recipe."""
        seen: set = set()
        unique = []
        for match in matches:
            key = match.recipe.id if match.recipe.id is not None else id(match.recipe)
            if key in seen:
                continue
            seen.add(key)
            unique.append(match)
        return unique

    async def get_duplicate_stats(
        self,
        user_id: Optional[str] = None,
    ) -> DuplicateStats:
        """Count likely duplicates by normalized title.

        Titles are grouped after ``normalize_text``, so case, punctuation and
        spacing variants share a bucket. Every recipe beyond the first in a
        bucket counts as a potential duplicate. This is a cheap proxy, not a
        pairwise scan.

        Args:
            user_id: Restrict counts to this owner's recipes

        Returns:
            DuplicateStats
        """
        total_recipes = await self.recipe_repo.count_active(user_id=user_id)
        titles = await self.recipe_repo.list_titles(user_id=user_id)
        title_counts = Counter(normalize_text(title) for title in titles)

        potential_duplicates = sum(
            count - 1 for count in title_counts.values() if count > 1
        )
        percentage = (
            potential_duplicates / total_recipes * 100 if total_recipes > 0 else 0.0
        )

        logger.info(
            "Computed duplicate stats",
            user_id=user_id,
            total_recipes=total_recipes,
            potential_duplicates=potential_duplicates,
        )

        return DuplicateStats(
            total_recipes=total_recipes,
            potential_duplicates=potential_duplicates,
            duplicate_percentage=percentage,
        )

