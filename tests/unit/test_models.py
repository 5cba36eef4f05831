"""Unit tests for Pydantic models (Recipe, duplicate results, etc.)."""

import pytest
from datetime import datetime, timezone
from bson import ObjectId
from pydantic import ValidationError

from recipebox.models.recipe import (
    Ingredient,
    Instruction,
    PyObjectId,
    Recipe,
    RecipeCreate,
)
from recipebox.models.duplicate import (
    DuplicateDetectionOptions,
    DuplicateGroup,
    DuplicateRecipe,
    MatchType,
    MergeResult,
)
from tests.factories import make_recipe


@pytest.mark.unit
class TestPyObjectId:
    """Test PyObjectId custom type."""

    def test_validate_object_id(self):
        """Test validating ObjectId instance."""
        obj_id = ObjectId()
        assert PyObjectId.validate(obj_id) == obj_id

    def test_validate_string_object_id(self):
        """Test validating string ObjectId."""
        obj_id = ObjectId()
        result = PyObjectId.validate(str(obj_id))
        assert result == obj_id
        assert isinstance(result, ObjectId)

    def test_validate_invalid_string_raises_error(self):
        """Test validating invalid string raises ValueError."""
        with pytest.raises(ValueError, match="Invalid ObjectId"):
            PyObjectId.validate("invalid_id")

    def test_validate_invalid_type_raises_error(self):
        """Test validating invalid type raises ValueError."""
        with pytest.raises(ValueError, match="Invalid ObjectId type"):
            PyObjectId.validate(12345)


@pytest.mark.unit
class TestRecipeModels:
    """Test recipe and ingredient models."""

    def test_recipe_create_defaults(self):
        """Test a minimal candidate recipe."""
        recipe = RecipeCreate(title="Toast")

        assert recipe.ingredients == []
        assert recipe.instructions == []
        assert recipe.source is None
        assert recipe.is_vegan is False

    def test_title_required(self):
        """Test empty titles are rejected."""
        with pytest.raises(ValidationError):
            RecipeCreate(title="")

    def test_title_length_limit(self):
        """Test titles longer than 200 characters are rejected."""
        with pytest.raises(ValidationError):
            RecipeCreate(title="x" * 201)

    def test_ingredient_quantity_must_be_positive(self):
        """Test non-positive quantities are rejected."""
        with pytest.raises(ValidationError):
            Ingredient(name="flour", quantity=0)

    def test_instruction_step_must_be_positive(self):
        """Test step numbers start at 1."""
        with pytest.raises(ValidationError):
            Instruction(step=0, instruction="Mix")

    def test_enum_values_are_stored(self):
        """Test enum fields hold plain values."""
        recipe = RecipeCreate(title="Pho", difficulty="hard", source_type="blog")

        assert recipe.difficulty == "hard"
        assert recipe.source_type == "blog"

    def test_recipe_from_document(self):
        """Test building a Recipe from a MongoDB document."""
        obj_id = ObjectId()
        recipe = Recipe(
            _id=obj_id,
            title="Toast",
            user_id="user-1",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

        assert recipe.id == obj_id
        assert recipe.is_deleted is False

    def test_soft_deleted_recipe(self):
        """Test is_deleted reflects deleted_at."""
        recipe = make_recipe(deleted_at=datetime.now(timezone.utc))

        assert recipe.is_deleted is True

    def test_json_dump_serializes_id(self):
        """Test ObjectIds serialize as strings."""
        recipe = make_recipe()

        data = recipe.model_dump(mode="json")

        assert data["id"] == str(recipe.id)


@pytest.mark.unit
class TestDuplicateModels:
    """Test duplicate detection result models."""

    def test_options_defaults(self):
        """Test every detector is enabled by default."""
        options = DuplicateDetectionOptions()

        assert options.check_exact_title
        assert options.check_fuzzy_title
        assert options.check_ingredient_similarity
        assert options.check_source_url
        assert options.check_content_fingerprint
        assert options.similarity_threshold == 0.5

    def test_options_threshold_bounds(self):
        """Test thresholds must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            DuplicateDetectionOptions(similarity_threshold=1.1)
        with pytest.raises(ValidationError):
            DuplicateDetectionOptions(similarity_threshold=-0.1)

    def test_duplicate_recipe_score_bounds(self):
        """Test scores above 1 are rejected."""
        with pytest.raises(ValidationError):
            DuplicateRecipe(
                recipe=make_recipe(),
                similarity_score=1.5,
                match_type=MatchType.EXACT_TITLE,
                confidence="high",
            )

    def test_duplicate_recipe_confidence_values(self):
        """Test confidence must be high, medium or low."""
        with pytest.raises(ValidationError):
            DuplicateRecipe(
                recipe=make_recipe(),
                similarity_score=0.9,
                match_type=MatchType.EXACT_TITLE,
                confidence="certain",
            )

    def test_group_needs_two_recipes(self):
        """Test a duplicate group has at least two members."""
        with pytest.raises(ValidationError):
            DuplicateGroup(
                recipes=[make_recipe()],
                similarity_score=1.0,
                match_type=MatchType.EXACT_TITLE,
            )

    def test_group_match_type_serializes_as_value(self):
        """Test match types dump as their string value."""
        group = DuplicateGroup(
            recipes=[make_recipe(), make_recipe()],
            similarity_score=1.0,
            match_type=MatchType.SOURCE_URL,
        )

        assert group.model_dump(mode="json")["match_type"] == "source_url"

    def test_merge_result_serializes_skipped_ids(self):
        """Test skipped IDs dump as strings."""
        missing = ObjectId()
        result = MergeResult(
            kept_recipe=make_recipe(),
            skipped_recipe_ids=[missing],
        )

        assert result.model_dump(mode="json")["skipped_recipe_ids"] == [str(missing)]
