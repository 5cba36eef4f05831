"""Similarity primitives used by the duplicate detectors."""

import hashlib
import json
from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein

from recipebox.models.duplicate import Confidence
from recipebox.models.recipe import RecipeCreate
from recipebox.services.normalization import normalize_ingredients, normalize_text

HIGH_CONFIDENCE_THRESHOLD = 0.9
MEDIUM_CONFIDENCE_THRESHOLD = 0.7


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost insertions, deletions and substitutions."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str) -> float:
    """Levenshtein similarity in [0, 1].

    Two empty strings are identical (1.0).
    """
    return Levenshtein.normalized_similarity(a, b)


def ingredient_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    """Jaccard index of two ingredient-name collections.

    Returns 0.0 when both are empty, so two recipes without ingredients are
    never matched by this measure.
    """
    set_a = set(a)
    set_b = set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def content_fingerprint(recipe: RecipeCreate) -> str:
    """SHA-256 digest over a canonical form of the recipe content.

    Covers title, ingredient names (sorted), instruction text (in order),
    servings and cooking time. Works for candidate and persisted recipes.

    Args:
        recipe: Recipe to fingerprint

    Returns:
        Hex digest string
    """
    content = {
        "title": normalize_text(recipe.title),
        "ingredients": "|".join(normalize_ingredients(recipe.ingredients)),
        "instructions": "|".join(
            normalize_text(step.instruction) for step in recipe.instructions
        ),
        "servings": recipe.servings,
        "cooking_time": recipe.cooking_time,
    }
    payload = json.dumps(content, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def confidence_level(score: float) -> Confidence:
    """Bucket a similarity score into a confidence tier."""
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return "high"
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return "medium"
    return "low"
