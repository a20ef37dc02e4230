"""
Recipes API Core Dependencies
FastAPI dependencies for store access and request body validation
"""

from fastapi import Depends, Request
from typing import Annotated, Any, Optional, Tuple
import json

from core.exceptions import RecipeValidationError
from schemas.recipe_schemas import RecipeCreate, RecipeUpdate
from services.recipe_repository import RecipeRepository, parse_pagination
from services.recipe_validation import validate_recipe


def get_recipe_repository(request: Request) -> RecipeRepository:
    """Repository bound to the application's database"""
    repository = getattr(request.app.state, "recipe_repository", None)
    if repository is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return repository


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON

    An empty body decodes to an empty object so that missing required
    fields are reported individually.
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RecipeValidationError([
            {"field": "body", "message": "Request body must be valid JSON", "value": None}
        ])


async def validate_recipe_creation(request: Request) -> RecipeCreate:
    """Reject invalid create bodies before the handler runs"""
    return validate_recipe(await read_json_body(request), partial=False)


async def validate_recipe_update(request: Request) -> RecipeUpdate:
    """Reject invalid update bodies before the handler runs"""
    return validate_recipe(await read_json_body(request), partial=True)


def get_pagination_params(page: Optional[str] = None, limit: Optional[str] = None) -> Tuple[int, int]:
    """
    Get pagination parameters from the query string

    Raw strings are accepted so that non-numeric values fall back to
    the defaults instead of failing the request.
    """
    return parse_pagination(page, limit)


# Type aliases for common dependencies
Repository = Annotated[RecipeRepository, Depends(get_recipe_repository)]
ValidRecipeCreate = Annotated[RecipeCreate, Depends(validate_recipe_creation)]
ValidRecipeUpdate = Annotated[RecipeUpdate, Depends(validate_recipe_update)]
PaginationParams = Annotated[Tuple[int, int], Depends(get_pagination_params)]
