"""
Recipes API Models
Central import module for the recipe document model
"""

from .recipe_models import (
    Recipe,
    Ingredient,
    Instruction,
    Unit,
    Difficulty,
    RECIPE_DEFAULTS,
    apply_defaults,
    is_valid_object_id,
)

__all__ = [
    "Recipe",
    "Ingredient",
    "Instruction",
    "Unit",
    "Difficulty",
    "RECIPE_DEFAULTS",
    "apply_defaults",
    "is_valid_object_id",
]
