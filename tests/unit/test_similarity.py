"""Unit tests for similarity primitives."""

import pytest

from recipebox.services.similarity import (
    confidence_level,
    content_fingerprint,
    ingredient_similarity,
    levenshtein_distance,
    string_similarity,
)
from tests.factories import make_candidate, make_recipe


@pytest.mark.unit
class TestLevenshtein:
    """Test edit distance."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("", "", 0),
            ("abc", "", 3),
            ("", "abc", 3),
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("same", "same", 0),
        ],
    )
    def test_distance(self, a: str, b: str, expected: int) -> None:
        assert levenshtein_distance(a, b) == expected

    def test_symmetric(self) -> None:
        assert levenshtein_distance("pancakes", "pan cake") == levenshtein_distance(
            "pan cake", "pancakes"
        )


@pytest.mark.unit
class TestStringSimilarity:
    """Test Levenshtein-based string similarity."""

    @pytest.mark.parametrize("text", ["", "a", "chocolate chip cookies"])
    def test_identical_strings(self, text: str) -> None:
        assert string_similarity(text, text) == 1.0

    def test_both_empty(self) -> None:
        assert string_similarity("", "") == 1.0

    def test_one_empty(self) -> None:
        assert string_similarity("abc", "") == 0.0

    def test_partial_similarity(self) -> None:
        # one deletion over 22 characters
        assert string_similarity(
            "chocolate chip cookies", "chocolate chip cookie"
        ) == pytest.approx(1 - 1 / 22)

    def test_appended_word_lowers_score(self) -> None:
        score = string_similarity(
            "chocolate chip cookies", "chocolate chip cookie recipe"
        )
        assert score == pytest.approx(0.75)


@pytest.mark.unit
class TestIngredientSimilarity:
    """Test Jaccard ingredient similarity."""

    def test_identical_sets(self) -> None:
        assert ingredient_similarity(["flour", "sugar"], ["sugar", "flour"]) == 1.0

    def test_both_empty_is_zero(self) -> None:
        assert ingredient_similarity([], []) == 0.0

    def test_three_of_four(self) -> None:
        a = ["flour", "sugar", "chocolate chips"]
        b = ["flour", "sugar", "chocolate chips", "vanilla"]
        assert ingredient_similarity(a, b) == 0.75

    def test_symmetric(self) -> None:
        a = ["eggs", "milk", "flour"]
        b = ["eggs", "butter"]
        assert ingredient_similarity(a, b) == ingredient_similarity(b, a)

    def test_duplicates_within_list_are_collapsed(self) -> None:
        assert ingredient_similarity(["salt", "salt"], ["salt"]) == 1.0


@pytest.mark.unit
class TestContentFingerprint:
    """Test content fingerprinting."""

    def test_deterministic(self) -> None:
        candidate = make_candidate()
        assert content_fingerprint(candidate) == content_fingerprint(candidate)

    def test_is_sha256_hex(self) -> None:
        fingerprint = content_fingerprint(make_candidate())
        assert len(fingerprint) == 64
        int(fingerprint, 16)

    def test_ingredient_order_does_not_matter(self) -> None:
        a = make_candidate(ingredients=["flour", "sugar", "eggs"])
        b = make_candidate(ingredients=["eggs", "flour", "sugar"])
        assert content_fingerprint(a) == content_fingerprint(b)

    def test_instruction_order_matters(self) -> None:
        a = make_candidate(instructions=["Mix", "Bake"])
        b = make_candidate(instructions=["Bake", "Mix"])
        assert content_fingerprint(a) != content_fingerprint(b)

    def test_title_change_changes_fingerprint(self) -> None:
        assert content_fingerprint(make_candidate(title="Brownies")) != content_fingerprint(
            make_candidate(title="Blondies")
        )

    def test_servings_change_changes_fingerprint(self) -> None:
        assert content_fingerprint(make_candidate(servings=12)) != content_fingerprint(
            make_candidate(servings=24)
        )

    def test_ignores_fields_outside_content(self) -> None:
        a = make_candidate(source="https://a.example.com/x", description="one")
        b = make_candidate(source=None, description="two", is_vegan=True)
        assert content_fingerprint(a) == content_fingerprint(b)

    def test_candidate_and_persisted_recipe_agree(self) -> None:
        assert content_fingerprint(make_candidate()) == content_fingerprint(make_recipe())


@pytest.mark.unit
class TestConfidenceLevel:
    """Test confidence tiers."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (1.0, "high"),
            (0.9, "high"),
            (0.89, "medium"),
            (0.7, "medium"),
            (0.69, "low"),
            (0.0, "low"),
        ],
    )
    def test_tiers(self, score: float, expected: str) -> None:
        assert confidence_level(score) == expected
