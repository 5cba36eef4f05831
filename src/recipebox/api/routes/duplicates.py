"""API routes for duplicate recipe detection, scanning and merging.

Every response uses the envelope ``{success, data | error, details?}``.
Invalid input is reported with status 400, an unknown recipe to keep with
404, and any other failure with 500.
"""

import json
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError, field_validator

from recipebox.api.dependencies import (
    get_duplicate_detection_service,
    get_duplicate_merge_service,
)
from recipebox.config import settings
from recipebox.models.duplicate import DuplicateDetectionOptions
from recipebox.models.recipe import PyObjectId, RecipeCreate
from recipebox.services.duplicate_detection import DuplicateDetectionService
from recipebox.services.duplicate_merge import (
    DuplicateMergeService,
    InvalidMergeRequestError,
    RecipeNotFoundError,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/recipes/duplicates", tags=["Duplicates"])


# ============================================================================
# Request Models
# ============================================================================


class DuplicateCheckRequest(BaseModel):
    """Request body for checking a single recipe."""

    recipe: RecipeCreate
    user_id: Optional[str] = None
    similarity_threshold: float = Field(
        default=settings.duplicate_check_threshold, ge=0.0, le=1.0
    )
    check_exact_title: bool = True
    check_fuzzy_title: bool = True
    check_ingredient_similarity: bool = True
    check_source_url: bool = True
    check_content_fingerprint: bool = True

    @field_validator("recipe")
    @classmethod
    def require_ingredients_and_instructions(cls, v: RecipeCreate) -> RecipeCreate:
        """Reject recipes without any ingredient or instruction."""
        if not v.ingredients:
            raise ValueError("At least one ingredient is required")
        if not v.instructions:
            raise ValueError("At least one instruction is required")
        return v

    def to_options(self) -> DuplicateDetectionOptions:
        """Detector options carried by this request."""
        return DuplicateDetectionOptions(
            **self.model_dump(exclude={"recipe", "user_id"})
        )


class DuplicateScanParams(BaseModel):
    """Query parameters for a collection-wide scan."""

    user_id: Optional[str] = None
    similarity_threshold: float = Field(
        default=settings.duplicate_scan_threshold, ge=0.0, le=1.0
    )
    limit: int = Field(default=settings.duplicate_scan_limit, ge=1, le=100)


class MergeDuplicatesRequest(BaseModel):
    """Request body for merging a duplicate group."""

    recipe_ids: list[PyObjectId] = Field(..., min_length=2)
    keep_recipe_id: PyObjectId


# ============================================================================
# Helper Functions
# ============================================================================


def _success(data: Any, message: Optional[str] = None) -> JSONResponse:
    content: dict[str, Any] = {"success": True, "data": data}
    if message:
        content["message"] = message
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)


def _failure(
    status_code: int,
    error: str,
    details: Any = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _validation_details(error: ValidationError) -> list[dict[str, Any]]:
    """JSON-safe list of validation errors."""
    return json.loads(error.json(include_url=False))


# ============================================================================
# Routes
# ============================================================================


@router.post(
    "",
    summary="Check a recipe for duplicates",
    description="Compares a candidate recipe with the user's saved recipes.",
)
async def check_duplicates(
    request: Request,
    detection_service: DuplicateDetectionService = Depends(
        get_duplicate_detection_service
    ),
) -> JSONResponse:
    """Check a candidate recipe for duplicates."""
    try:
        body = await request.json()
        payload = DuplicateCheckRequest.model_validate(body)
    except ValidationError as e:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request data",
            _validation_details(e),
        )
    except ValueError:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request data",
            "Request body must be valid JSON",
        )

    try:
        result = await detection_service.detect_duplicates(
            payload.recipe,
            user_id=payload.user_id,
            options=payload.to_options(),
        )
    except Exception as e:
        logger.error("Failed to check duplicates", error=str(e))
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to check duplicates",
        )

    return _success(result.model_dump(mode="json"))


@router.get(
    "",
    summary="Find duplicate groups",
    description="Scans saved recipes and groups those that duplicate each other.",
)
async def find_duplicates(
    user_id: Optional[str] = None,
    similarity_threshold: Optional[str] = None,
    limit: Optional[str] = None,
    merge_service: DuplicateMergeService = Depends(get_duplicate_merge_service),
) -> JSONResponse:
    """Scan recipes for duplicate groups."""
    raw_params = {
        "user_id": user_id or None,
        "similarity_threshold": similarity_threshold,
        "limit": limit,
    }
    try:
        params = DuplicateScanParams.model_validate(
            {k: v for k, v in raw_params.items() if v is not None}
        )
    except ValidationError as e:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request parameters",
            _validation_details(e),
        )

    try:
        result = await merge_service.find_all_duplicates(
            user_id=params.user_id,
            similarity_threshold=params.similarity_threshold,
            limit=params.limit,
        )
    except Exception as e:
        logger.error("Failed to find duplicates", error=str(e))
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to find duplicates",
        )

    return _success(result.model_dump(mode="json"))


@router.put(
    "",
    summary="Merge duplicate recipes",
    description="Keeps one recipe of a duplicate group and soft-deletes the rest.",
)
async def merge_duplicates(
    request: Request,
    merge_service: DuplicateMergeService = Depends(get_duplicate_merge_service),
) -> JSONResponse:
    """Merge a group of duplicate recipes."""
    try:
        body = await request.json()
        payload = MergeDuplicatesRequest.model_validate(body)
    except ValidationError as e:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request data",
            _validation_details(e),
        )
    except ValueError:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request data",
            "Request body must be valid JSON",
        )

    try:
        result = await merge_service.merge_duplicate_recipes(
            recipe_ids=payload.recipe_ids,
            keep_recipe_id=payload.keep_recipe_id,
        )
    except InvalidMergeRequestError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, "Invalid request data", e.message)
    except RecipeNotFoundError as e:
        return _failure(status.HTTP_404_NOT_FOUND, "Recipe not found", e.message)
    except Exception as e:
        logger.error("Failed to merge duplicates", error=str(e))
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to merge duplicates",
        )

    return _success(
        result.model_dump(mode="json"),
        message=f"Successfully merged {len(result.deleted_recipes)} duplicate recipes",
    )


@router.get(
    "/stats",
    summary="Duplicate statistics",
    description="Title-based estimate of how many saved recipes are duplicates.",
)
async def get_duplicate_stats(
    user_id: Optional[str] = None,
    detection_service: DuplicateDetectionService = Depends(
        get_duplicate_detection_service
    ),
) -> JSONResponse:
    """Get duplicate statistics."""
    try:
        stats = await detection_service.get_duplicate_stats(user_id=user_id or None)
    except Exception as e:
        logger.error("Failed to get duplicate stats", error=str(e))
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to get duplicate statistics",
        )

    return _success(stats.model_dump(mode="json"))
