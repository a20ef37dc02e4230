"""
Recipes API Core Module
Central configuration and utilities
"""

from .config import settings
from .database import init_db, close_db

__all__ = [
    "settings",
    "init_db",
    "close_db",
]
