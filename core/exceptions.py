"""
Recipes API Exceptions
Error taxonomy shared by the persistence layer and the API handlers
"""

from typing import Any, Dict, List, Optional


class RecipeAPIError(Exception):
    """Base error carrying the HTTP status it maps to"""

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class RecipeValidationError(RecipeAPIError):
    """Request body failed field validation"""

    status_code = 400
    message = "Validation errors"

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__()
        self.errors = errors

    def to_envelope(self) -> Dict[str, Any]:
        envelope = super().to_envelope()
        envelope["errors"] = self.errors
        return envelope


class InvalidRecipeId(RecipeAPIError):
    """Identifier is not a well-formed ObjectId"""

    status_code = 400
    message = "Invalid recipe ID format"

    def __init__(self, recipe_id: str):
        super().__init__()
        self.recipe_id = recipe_id


class RecipeNotFound(RecipeAPIError):
    """No stored recipe has the requested id"""

    status_code = 404
    message = "Recipe not found"

    def __init__(self, recipe_id: str):
        super().__init__()
        self.recipe_id = recipe_id


__all__ = [
    "RecipeAPIError",
    "RecipeValidationError",
    "InvalidRecipeId",
    "RecipeNotFound",
]
