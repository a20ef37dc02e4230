"""
Recipes API Services Module
Validation and persistence for recipe records
"""

from .recipe_repository import RecipeRepository, RecipePage, parse_pagination
from .recipe_validation import check_recipe, validate_recipe

__all__ = [
    # Persistence
    "RecipeRepository",
    "RecipePage",
    "parse_pagination",

    # Validation
    "check_recipe",
    "validate_recipe",
]
