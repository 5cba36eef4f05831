"""Models for duplicate recipe detection."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from recipebox.models.recipe import PyObjectId, Recipe

Confidence = Literal["high", "medium", "low"]


class MatchType(str, Enum):
    """Signal that identified a duplicate."""

    EXACT_TITLE = "exact_title"
    FUZZY_TITLE = "fuzzy_title"
    INGREDIENT_SIMILARITY = "ingredient_similarity"
    SOURCE_URL = "source_url"
    CONTENT_FINGERPRINT = "content_fingerprint"


class DuplicateDetectionOptions(BaseModel):
    """Which detectors to run and the minimum score to report."""

    check_exact_title: bool = Field(default=True)
    check_fuzzy_title: bool = Field(default=True)
    check_ingredient_similarity: bool = Field(default=True)
    check_source_url: bool = Field(default=True)
    check_content_fingerprint: bool = Field(default=True)
    similarity_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Matches scoring below this are dropped",
    )


class DuplicateRecipe(BaseModel):
    """A single existing recipe matched against a candidate."""

    model_config = ConfigDict(use_enum_values=True)

    recipe: Recipe = Field(
        ...,
        description="The matched existing recipe",
    )
    similarity_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Similarity score (0-1)",
    )
    match_type: MatchType = Field(
        ...,
        description="Detector that produced the match",
    )
    confidence: Confidence = Field(
        ...,
        description="Confidence tier derived from the score",
    )


class DuplicateDetectionResult(BaseModel):
    """Ranked duplicates for one candidate recipe."""

    duplicates: list[DuplicateRecipe] = Field(
        default_factory=list,
        description="Matches sorted by descending score, one per recipe",
    )
    has_duplicates: bool = Field(default=False)
    total_duplicates: int = Field(default=0, ge=0)
    highest_similarity_score: float = Field(default=0.0, ge=0.0, le=1.0)


class DuplicateGroup(BaseModel):
    """Recipes judged to be duplicates of one another during a scan."""

    model_config = ConfigDict(use_enum_values=True)

    recipes: list[Recipe] = Field(
        ...,
        min_length=2,
        description="Seed recipe followed by its matches",
    )
    similarity_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Highest score among the seed's matches",
    )
    match_type: MatchType = Field(
        ...,
        description="Match type of the seed's top-ranked match",
    )


class DuplicateScanResult(BaseModel):
    """Output of a collection-wide duplicate scan."""

    groups: list[DuplicateGroup] = Field(default_factory=list)
    total_groups: int = Field(default=0, ge=0)


class DuplicateStats(BaseModel):
    """Cheap title-only duplicate statistics."""

    total_recipes: int = Field(default=0, ge=0)
    potential_duplicates: int = Field(default=0, ge=0)
    duplicate_percentage: float = Field(default=0.0, ge=0.0)


class MergeResult(BaseModel):
    """Result of collapsing a duplicate group into one recipe."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kept_recipe: Recipe = Field(
        ...,
        description="The surviving recipe",
    )
    deleted_recipes: list[Recipe] = Field(
        default_factory=list,
        description="Recipes that were soft-deleted",
    )
    skipped_recipe_ids: list[PyObjectId] = Field(
        default_factory=list,
        description="Requested ids that did not resolve to an active recipe",
    )
