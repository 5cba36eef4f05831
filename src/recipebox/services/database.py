"""Database service for MongoDB operations using Motor (async)."""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ReturnDocument

from recipebox.models.recipe import Recipe, RecipeCreate

# Global MongoDB client (initialized at startup)
_mongodb_client: Optional[AsyncIOMotorClient] = None
_mongodb_database: Optional[AsyncIOMotorDatabase] = None


async def connect_to_mongodb(uri: str, database_name: str) -> None:
    """Connect to MongoDB and initialize global client.

    Args:
        uri: MongoDB connection URI
        database_name: Database name to use
    """
    global _mongodb_client, _mongodb_database
    _mongodb_client = AsyncIOMotorClient(uri)
    _mongodb_database = _mongodb_client[database_name]


async def close_mongodb_connection() -> None:
    """Close MongoDB connection."""
    global _mongodb_client, _mongodb_database
    if _mongodb_client:
        _mongodb_client.close()
    _mongodb_client = None
    _mongodb_database = None


def get_database() -> AsyncIOMotorDatabase:
    """Get MongoDB database instance.

    Returns:
        AsyncIOMotorDatabase instance

    Raises:
        RuntimeError: If database not initialized
    """
    if _mongodb_database is None:
        raise RuntimeError("Database not initialized. Call connect_to_mongodb first.")
    return _mongodb_database


def get_collection(name: str) -> AsyncIOMotorCollection:
    """Get MongoDB collection by name.

    Args:
        name: Collection name

    Returns:
        AsyncIOMotorCollection instance
    """
    db = get_database()
    return db[name]


class RecipeRepository:
    """Repository for recipe CRUD operations.

    Every read excludes soft-deleted recipes.
    """

    def __init__(self, collection: Optional[AsyncIOMotorCollection] = None):
        """Initialize recipe repository.

        Args:
            collection: Motor collection instance (optional, uses default if not provided)
        """
        self.collection = collection if collection is not None else get_collection("recipes")

    @staticmethod
    def _active_query(user_id: Optional[str] = None) -> dict[str, Any]:
        query: dict[str, Any] = {"deleted_at": None}
        if user_id:
            query["user_id"] = user_id
        return query

    async def create(
        self,
        recipe_data: RecipeCreate,
        user_id: Optional[str] = None,
    ) -> Recipe:
        """Create a new recipe document.

        Args:
            recipe_data: Recipe creation data
            user_id: Owner of the recipe

        Returns:
            Created Recipe instance with ID
        """
        recipe = Recipe(**recipe_data.model_dump(), user_id=user_id)

        recipe_dict = recipe.model_dump(by_alias=True, exclude={"id"})

        result = await self.collection.insert_one(recipe_dict)
        recipe.id = result.inserted_id

        return recipe

    async def get_by_id(self, recipe_id: ObjectId) -> Optional[Recipe]:
        """Get an active recipe by ObjectId.

        Args:
            recipe_id: Recipe ObjectId

        Returns:
            Recipe instance or None if missing or soft-deleted
        """
        doc = await self.collection.find_one({"_id": recipe_id, "deleted_at": None})
        if doc:
            return Recipe(**doc)
        return None

    async def list_active(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Recipe]:
        """List active recipes in creation order.

        Args:
            user_id: Only return recipes owned by this user
            limit: Maximum number of recipes to return

        Returns:
            List of Recipe instances
        """
        cursor = self.collection.find(self._active_query(user_id)).sort(
            [("created_at", 1), ("_id", 1)]
        )
        if limit:
            cursor = cursor.limit(limit)

        recipes = []
        async for doc in cursor:
            recipes.append(Recipe(**doc))

        return recipes

    async def get_active_by_ids(self, recipe_ids: list[ObjectId]) -> list[Recipe]:
        """Resolve IDs to active recipes; unknown or deleted IDs are absent.

        Args:
            recipe_ids: Recipe ObjectIds

        Returns:
            List of Recipe instances
        """
        cursor = self.collection.find(
            {"_id": {"$in": list(recipe_ids)}, "deleted_at": None}
        )

        recipes = []
        async for doc in cursor:
            recipes.append(Recipe(**doc))

        return recipes

    async def soft_delete(self, recipe_id: ObjectId) -> Optional[Recipe]:
        """Mark an active recipe as deleted.

        Already deleted recipes keep their original ``deleted_at``.

        Args:
            recipe_id: Recipe ObjectId

        Returns:
            Updated Recipe instance or None if not found or already deleted
        """
        now = datetime.now(timezone.utc)
        result = await self.collection.find_one_and_update(
            {"_id": recipe_id, "deleted_at": None},
            {"$set": {"deleted_at": now, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if result:
            return Recipe(**result)
        return None

    async def count_active(self, user_id: Optional[str] = None) -> int:
        """Count active recipes.

        Args:
            user_id: Only count recipes owned by this user

        Returns:
            Number of active recipes
        """
        return await self.collection.count_documents(self._active_query(user_id))

    async def list_titles(self, user_id: Optional[str] = None) -> list[str]:
        """Stored titles of active recipes.

        Args:
            user_id: Only return titles of recipes owned by this user

        Returns:
            List of titles, one per recipe
        """
        cursor = self.collection.find(
            self._active_query(user_id), projection={"title": 1, "_id": 0}
        )

        titles = []
        async for doc in cursor:
            titles.append(doc.get("title", ""))

        return titles
