"""
Recipes API Recipe Repository
Create, read, update, delete and search operations on the recipes collection
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
import math
import re

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
import structlog

from core.exceptions import InvalidRecipeId, RecipeNotFound
from models.recipe_models import Recipe, WRITABLE_FIELDS, apply_defaults, is_valid_object_id

logger = structlog.get_logger()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_pagination(page: Any = None, limit: Any = None) -> Tuple[int, int]:
    """
    Normalize raw page/limit query values

    Missing, non-numeric and non-positive values fall back to page 1 and
    10 items per page. ``limit`` has no upper bound.
    """
    return _positive_int(page, DEFAULT_PAGE), _positive_int(limit, DEFAULT_LIMIT)


def _utcnow() -> datetime:
    # Store resolution is milliseconds
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass
class RecipePage:
    """One page of recipes plus the totals needed to page through the rest"""
    recipes: List[Recipe] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class RecipeRepository:
    """Persistence gateway for recipe documents"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @staticmethod
    def _object_id(recipe_id: str) -> ObjectId:
        if not is_valid_object_id(recipe_id):
            raise InvalidRecipeId(recipe_id)
        return ObjectId(recipe_id)

    async def create(self, fields: Mapping[str, Any]) -> Recipe:
        """Apply defaults, stamp timestamps and insert a new recipe"""
        document = apply_defaults(
            {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}
        )
        now = _utcnow()
        document["createdAt"] = now
        document["updatedAt"] = now

        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id

        logger.info("Recipe created", recipe_id=str(result.inserted_id), name=document.get("name"))
        return Recipe.from_document(document)

    async def list(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> RecipePage:
        """Return one page of recipes, newest first"""
        skip = (page - 1) * limit
        cursor = self.collection.find({}, sort=NEWEST_FIRST, skip=skip, limit=limit)
        recipes = [Recipe.from_document(document) async for document in cursor]
        total = await self.collection.count_documents({})
        return RecipePage(recipes=recipes, total=total, page=page, limit=limit)

    async def get_by_id(self, recipe_id: str) -> Recipe:
        object_id = self._object_id(recipe_id)
        document = await self.collection.find_one({"_id": object_id})
        if document is None:
            raise RecipeNotFound(recipe_id)
        return Recipe.from_document(document)

    async def update(self, recipe_id: str, fields: Mapping[str, Any]) -> Recipe:
        """
        Apply a partial update to an existing recipe

        Only allow-listed fields present in ``fields`` are written;
        ``updatedAt`` is always refreshed.
        """
        object_id = self._object_id(recipe_id)
        changes: Dict[str, Any] = {
            key: value for key, value in fields.items() if key in WRITABLE_FIELDS
        }
        changes["updatedAt"] = _utcnow()

        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise RecipeNotFound(recipe_id)

        logger.info("Recipe updated", recipe_id=recipe_id, fields=sorted(changes))
        return Recipe.from_document(document)

    async def delete(self, recipe_id: str) -> Recipe:
        """Remove a recipe and return its last stored state"""
        object_id = self._object_id(recipe_id)
        document = await self.collection.find_one_and_delete({"_id": object_id})
        if document is None:
            raise RecipeNotFound(recipe_id)

        logger.info("Recipe deleted", recipe_id=recipe_id)
        return Recipe.from_document(document)

    async def search(
        self,
        cuisine: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
    ) -> List[Recipe]:
        """
        Find recipes by cuisine and/or tags

        ``cuisine`` is a case-insensitive substring match. A recipe matches
        ``tags`` when any of its tags equals one of the supplied values.
        Results are neither paginated nor ordered.
        """
        query: Dict[str, Any] = {}
        if cuisine:
            query["cuisine"] = {"$regex": re.escape(cuisine), "$options": "i"}
        if tags:
            query["tags"] = {"$in": list(tags)}

        return [Recipe.from_document(document) async for document in self.collection.find(query)]

    async def ping(self) -> bool:
        """Round-trip to the store"""
        await self.collection.find_one({}, {"_id": 1})
        return True


__all__ = [
    "RecipeRepository",
    "RecipePage",
    "parse_pagination",
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
]
