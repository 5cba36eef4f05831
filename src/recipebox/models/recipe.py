"""Recipe models for candidate and persisted recipes."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class PyObjectId(ObjectId):
    """Custom ObjectId type for Pydantic v2."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        """Define Pydantic schema for ObjectId."""
        from pydantic_core import core_schema

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(ObjectId),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.no_info_plain_validator_function(cls.validate),
                    ]
                ),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: str(x)
            ),
        )

    @classmethod
    def validate(cls, v: Any) -> ObjectId:
        """Validate and convert to ObjectId."""
        if isinstance(v, ObjectId):
            return v
        if isinstance(v, str):
            try:
                return ObjectId(v)
            except Exception as e:
                raise ValueError(f"Invalid ObjectId: {v}") from e
        raise ValueError(f"Invalid ObjectId type: {type(v)}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Difficulty(str, Enum):
    """Recipe difficulty level."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SourceType(str, Enum):
    """Where a recipe was imported from."""

    INSTAGRAM = "instagram"
    BLOG = "blog"
    MANUAL = "manual"
    EVERNOTE = "evernote"
    APPLE_NOTES = "apple-notes"
    EMAIL = "email"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    PINTEREST = "pinterest"
    WHATSAPP = "whatsapp"


class Ingredient(BaseModel):
    """A single ingredient line."""

    name: str = Field(
        ...,
        min_length=1,
        description="Ingredient name",
    )
    quantity: Optional[float] = Field(
        default=None,
        gt=0,
        description="Amount of the ingredient",
    )
    unit: Optional[str] = Field(
        default=None,
        description="Unit of measure (cups, g, tsp, ...)",
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-text preparation notes",
    )


class Instruction(BaseModel):
    """A numbered preparation step."""

    step: int = Field(
        ...,
        gt=0,
        description="Step number",
    )
    instruction: str = Field(
        ...,
        min_length=1,
        description="Instruction text",
    )
    time: Optional[float] = Field(
        default=None,
        gt=0,
        description="Time for this step in minutes",
    )
    temperature: Optional[float] = Field(
        default=None,
        gt=0,
        description="Temperature in Celsius",
    )
    notes: Optional[str] = Field(
        default=None,
        description="Additional notes for this step",
    )


class RecipeCreate(BaseModel):
    """Schema for a new (candidate) recipe.

    This is the shape checked for duplicates before it is saved.
    """

    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Recipe title",
    )
    description: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Short description",
    )
    ingredients: list[Ingredient] = Field(
        default_factory=list,
        description="Ordered ingredient list",
    )
    instructions: list[Instruction] = Field(
        default_factory=list,
        description="Ordered instruction list",
    )
    cooking_time: Optional[int] = Field(
        default=None,
        gt=0,
        description="Total cooking time in minutes",
    )
    servings: Optional[int] = Field(
        default=None,
        gt=0,
        description="Number of servings",
    )
    difficulty: Optional[Difficulty] = Field(
        default=None,
        description="Difficulty level",
    )
    cuisine: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Cuisine name",
    )
    source: Optional[str] = Field(
        default=None,
        description="Source URL the recipe came from",
    )
    source_type: Optional[SourceType] = Field(
        default=None,
        description="Kind of source the recipe was imported from",
    )
    is_vegetarian: bool = Field(default=False)
    is_gluten_free: bool = Field(default=False)
    is_vegan: bool = Field(default=False)


class Recipe(RecipeCreate):
    """Persisted recipe document.

    Recipes are never hard-deleted; ``deleted_at`` marks a soft delete and
    soft-deleted recipes are excluded from duplicate comparison.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    id: Optional[PyObjectId] = Field(
        default=None,
        alias="_id",
        description="MongoDB document ID",
    )
    user_id: Optional[str] = Field(
        default=None,
        description="Owner of the recipe",
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the recipe was created",
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        description="When the recipe was last updated",
    )
    deleted_at: Optional[datetime] = Field(
        default=None,
        description="Soft-delete timestamp",
    )

    @property
    def is_deleted(self) -> bool:
        """Whether the recipe has been soft-deleted."""
        return self.deleted_at is not None
