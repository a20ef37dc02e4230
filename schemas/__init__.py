"""
Recipes API Schemas
Request models for recipe create and update bodies
"""

from .recipe_schemas import RecipeCreate, RecipeUpdate, IngredientInput, InstructionInput

__all__ = [
    "RecipeCreate",
    "RecipeUpdate",
    "IngredientInput",
    "InstructionInput",
]
