"""
Recipes API Recipe Management Endpoints
Recipe CRUD operations and search
"""

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, List, Optional
import structlog

from core.dependencies import PaginationParams, Repository, ValidRecipeCreate, ValidRecipeUpdate
from core.exceptions import RecipeAPIError

logger = structlog.get_logger()
router = APIRouter()


def _success(message: str, data: Any = None, status_code: int = status.HTTP_200_OK, **extra: Any) -> JSONResponse:
    content: Dict[str, Any] = {"success": True, "message": message}
    content.update(extra)
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


def _failure(message: str, exc: Exception, **context: Any) -> JSONResponse:
    logger.error(message, error=str(exc), error_type=type(exc).__name__, **context)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": message, "error": str(exc)},
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_recipe(recipe_data: ValidRecipeCreate, repository: Repository):
    """Create new recipe"""
    try:
        recipe = await repository.create(recipe_data.to_document())
    except RecipeAPIError:
        raise
    except Exception as e:
        return _failure("Error creating recipe", e)

    return _success(
        "Recipe created successfully",
        data=recipe.to_dict(),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("")
@router.get("/", include_in_schema=False)
async def get_recipes(pagination: PaginationParams, repository: Repository):
    """Get recipes with pagination, newest first"""
    page, limit = pagination
    try:
        result = await repository.list(page=page, limit=limit)
    except RecipeAPIError:
        raise
    except Exception as e:
        return _failure("Error retrieving recipes", e, page=page, limit=limit)

    return _success(
        "Recipes retrieved successfully",
        data=[recipe.to_dict() for recipe in result.recipes],
        totalRecipes=result.total,
        currentPage=result.page,
        totalPages=result.total_pages,
    )


@router.get("/search")
async def search_recipes(
    repository: Repository,
    cuisine: Optional[str] = Query(None, description="Case-insensitive cuisine substring"),
    tags: Optional[List[str]] = Query(None, description="Match recipes carrying any of these tags"),
):
    """Search recipes by cuisine or tags"""
    try:
        recipes = await repository.search(cuisine=cuisine, tags=tags)
    except RecipeAPIError:
        raise
    except Exception as e:
        return _failure("Error searching recipes", e, cuisine=cuisine, tags=tags)

    return _success(
        "Recipes searched successfully",
        data=[recipe.to_dict() for recipe in recipes],
        count=len(recipes),
    )


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, repository: Repository):
    """Get specific recipe"""
    try:
        recipe = await repository.get_by_id(recipe_id)
    except RecipeAPIError:
        raise
    except Exception as e:
        return _failure("Error retrieving recipe", e, recipe_id=recipe_id)

    return _success("Recipe retrieved successfully", data=recipe.to_dict())


@router.put("/{recipe_id}")
async def update_recipe(recipe_id: str, recipe_data: ValidRecipeUpdate, repository: Repository):
    """Update existing recipe"""
    try:
        recipe = await repository.update(recipe_id, recipe_data.to_document())
    except RecipeAPIError:
        raise
    except Exception as e:
        return _failure("Error updating recipe", e, recipe_id=recipe_id)

    return _success("Recipe updated successfully", data=recipe.to_dict())


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, repository: Repository):
    """Delete recipe"""
    try:
        recipe = await repository.delete(recipe_id)
    except RecipeAPIError:
        raise
    except Exception as e:
        return _failure("Error deleting recipe", e, recipe_id=recipe_id)

    return _success("Recipe deleted successfully", data=recipe.to_dict())
