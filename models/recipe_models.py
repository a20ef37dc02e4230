"""
Recipes API Recipe Models
Document shape, enumerations and creation defaults for stored recipes
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Unit(str, Enum):
    GRAM = "g"
    KILOGRAM = "kg"
    MILLILITER = "ml"
    LITER = "l"
    TABLESPOON = "tbsp"
    TEASPOON = "tsp"
    CUP = "cup"
    PIECE = "piece"
    PIECES = "pieces"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


UNIT_VALUES = [unit.value for unit in Unit]
DIFFICULTY_VALUES = [level.value for level in Difficulty]

# Values filled in for optional fields omitted at creation
RECIPE_DEFAULTS: Dict[str, Any] = {
    "prepTime": 15,
    "cookTime": 30,
    "servings": 4,
    "difficulty": Difficulty.MEDIUM.value,
    "cuisine": "International",
    "tags": [],
    "rating": 0,
}

# Fields a client may write; everything else is owned by the store
WRITABLE_FIELDS = (
    "name",
    "description",
    "ingredients",
    "instructions",
    "prepTime",
    "cookTime",
    "servings",
    "difficulty",
    "cuisine",
    "tags",
    "rating",
)

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_object_id(value: Any) -> bool:
    """True when ``value`` is a 24 character hexadecimal string"""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def apply_defaults(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``fields`` with omitted optional values filled in"""
    document = dict(fields)
    for key, default in RECIPE_DEFAULTS.items():
        if document.get(key) is None:
            document[key] = list(default) if isinstance(default, list) else default
    return document


class Ingredient(BaseModel):
    """Ingredient line embedded in a recipe"""
    item: str
    quantity: float
    unit: Unit


class Instruction(BaseModel):
    """Numbered preparation step"""
    step: int
    description: str


class Recipe(BaseModel):
    """Recipe as returned to API clients"""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str
    name: str
    description: Optional[str] = None
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[Instruction] = Field(default_factory=list)
    prep_time: int = Field(default=15, alias="prepTime")
    cook_time: int = Field(default=30, alias="cookTime")
    servings: int = 4
    difficulty: Difficulty = Difficulty.MEDIUM
    cuisine: str = "International"
    tags: List[str] = Field(default_factory=list)
    rating: float = 0
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Drivers without tz_aware return naive UTC values
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Recipe":
        """Build a recipe from a raw store document"""
        data = {key: value for key, value in document.items() if key != "_id"}
        data["id"] = str(document["_id"])
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert recipe to its JSON wire representation"""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "Unit",
    "Difficulty",
    "UNIT_VALUES",
    "DIFFICULTY_VALUES",
    "RECIPE_DEFAULTS",
    "WRITABLE_FIELDS",
    "OBJECT_ID_PATTERN",
    "is_valid_object_id",
    "apply_defaults",
    "Ingredient",
    "Instruction",
    "Recipe",
]
