"""
Recipes API Recipe Schemas
Pydantic models for recipe create and update requests
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from models.recipe_models import Difficulty, Unit

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

# Fields that may be sent as null
NULLABLE_FIELDS = {"description"}


class IngredientInput(BaseModel):
    """Ingredient line as supplied by a client"""
    item: str
    quantity: float = Field(..., gt=0, allow_inf_nan=False)
    unit: Unit

    @field_validator("item")
    @classmethod
    def validate_item(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Each ingredient must have item, quantity, and unit")
        return v


class InstructionInput(BaseModel):
    """Instruction step as supplied by a client"""
    step: int = Field(..., ge=1)
    description: str

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Each instruction must have step and description")
        return v


class RecipeFields(BaseModel):
    """Per-field rules shared by create and update requests"""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None and info.field_name not in NULLABLE_FIELDS:
            raise PydanticCustomError("null_value", "Field cannot be null")
        return v

    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Recipe name is required")
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise ValueError("Recipe name must be between 3 and 100 characters")
        return v

    @field_validator("description", check_fields=False)
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError("Description must not exceed 500 characters")
        return v

    @field_validator("ingredients", check_fields=False)
    @classmethod
    def validate_ingredients(cls, v: List[IngredientInput]) -> List[IngredientInput]:
        if not v:
            raise ValueError("At least one ingredient is required")
        return v

    @field_validator("instructions", check_fields=False)
    @classmethod
    def validate_instructions(cls, v: List[InstructionInput]) -> List[InstructionInput]:
        if not v:
            raise ValueError("At least one instruction is required")
        return v

    @field_validator("cuisine", check_fields=False)
    @classmethod
    def strip_cuisine(cls, v: str) -> str:
        return v.strip()

    @field_validator("tags", check_fields=False)
    @classmethod
    def strip_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip() for tag in v]

    def to_document(self) -> Dict[str, Any]:
        """Supplied fields only, keyed by their stored names"""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class RecipeCreate(RecipeFields):
    """Schema for recipe creation"""
    name: str
    description: Optional[str] = None
    ingredients: List[IngredientInput]
    instructions: List[InstructionInput]
    prep_time: Optional[int] = Field(default=None, ge=1, alias="prepTime")
    cook_time: Optional[int] = Field(default=None, ge=1, alias="cookTime")
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = None
    tags: Optional[List[str]] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)


class RecipeUpdate(RecipeFields):
    """Schema for partial recipe updates"""
    name: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[IngredientInput]] = None
    instructions: Optional[List[InstructionInput]] = None
    prep_time: Optional[int] = Field(default=None, ge=1, alias="prepTime")
    cook_time: Optional[int] = Field(default=None, ge=1, alias="cookTime")
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = None
    tags: Optional[List[str]] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
