"""
Recipes API Validation Service
Structural checks applied to request bodies before anything reaches the store
"""

from typing import Any, Dict, List, Sequence, Type, Union

from pydantic import ValidationError
import structlog

from core.exceptions import RecipeValidationError
from models.recipe_models import UNIT_VALUES
from schemas.recipe_schemas import RecipeCreate, RecipeFields, RecipeUpdate

logger = structlog.get_logger()

UNIT_MESSAGE = "Invalid unit. Use: " + ", ".join(UNIT_VALUES[:-1]) + f", or {UNIT_VALUES[-1]}"

# Message for a wrong type or out-of-range value, keyed by top-level field
FIELD_MESSAGES = {
    "name": "Recipe name must be between 3 and 100 characters",
    "description": "Description must not exceed 500 characters",
    "ingredients": "Ingredients must be an array",
    "instructions": "Instructions must be an array",
    "prepTime": "Prep time must be a positive integer",
    "cookTime": "Cook time must be a positive integer",
    "servings": "Servings must be a positive integer",
    "difficulty": "Difficulty must be Easy, Medium, or Hard",
    "cuisine": "Cuisine must be a string",
    "tags": "Tags must be an array",
    "rating": "Rating must be between 0 and 5",
}

REQUIRED_MESSAGES = {
    "name": "Recipe name is required",
}

# Message for a malformed element inside a list field
ELEMENT_MESSAGES = {
    "ingredients": "Each ingredient must have item, quantity, and unit",
    "instructions": "Each instruction must have step and description",
    "tags": "Each tag must be a string",
}

NESTED_MESSAGES = {
    ("ingredients", "unit", "enum"): UNIT_MESSAGE,
    ("ingredients", "quantity", "greater_than"): "Quantity must be greater than 0",
}

BODY_MESSAGE = "Request body must be a JSON object"


def _field_path(loc: Sequence[Union[str, int]]) -> str:
    return ".".join(str(part) for part in loc)


def _translate(error: Dict[str, Any]) -> Dict[str, Any]:
    """Turn one pydantic error into a ``{field, message, value}`` entry"""
    loc = error["loc"]
    field = str(loc[0]) if loc else "body"
    error_type = error["type"]

    if error_type == "value_error":
        message = str(error["ctx"]["error"])
    elif len(loc) > 1:
        key = (field, str(loc[-1]), error_type)
        message = NESTED_MESSAGES.get(key) or ELEMENT_MESSAGES.get(field, FIELD_MESSAGES.get(field, error["msg"]))
    elif error_type in ("missing", "null_value"):
        message = REQUIRED_MESSAGES.get(field) or FIELD_MESSAGES.get(field, error["msg"])
    else:
        message = FIELD_MESSAGES.get(field, error["msg"])

    return {
        "field": _field_path(loc),
        "message": message,
        "value": error.get("input") if error_type != "missing" else None,
    }


def _schema_for(partial: bool) -> Type[RecipeFields]:
    return RecipeUpdate if partial else RecipeCreate


def check_recipe(payload: Any, partial: bool = False) -> List[Dict[str, Any]]:
    """
    Check a request body against the recipe field rules

    Args:
        payload: Decoded JSON body
        partial: Update mode; every field is optional and only supplied
            fields are checked

    Returns:
        Ordered list of field errors, empty when the body is valid
    """
    try:
        validate_recipe(payload, partial=partial)
    except RecipeValidationError as e:
        return e.errors
    return []


def validate_recipe(payload: Any, partial: bool = False) -> Union[RecipeCreate, RecipeUpdate]:
    """
    Validate a request body and return the parsed schema

    Raises:
        RecipeValidationError: With the ordered field errors
    """
    if not isinstance(payload, dict):
        raise RecipeValidationError([
            {"field": "body", "message": BODY_MESSAGE, "value": None}
        ])

    try:
        return _schema_for(partial).model_validate(payload)
    except ValidationError as e:
        errors = [_translate(error) for error in e.errors(include_url=False)]
        logger.debug(
            "Recipe validation failed",
            mode="update" if partial else "create",
            fields=[error["field"] for error in errors],
        )
        raise RecipeValidationError(errors)


__all__ = [
    "check_recipe",
    "validate_recipe",
    "UNIT_MESSAGE",
]
