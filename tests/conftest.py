from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from core.config import settings
from main import create_app
from services.recipe_repository import RecipeRepository

BASE_RECIPE = {
    "name": "Spaghetti Carbonara",
    "description": "Classic Roman pasta.",
    "ingredients": [
        {"item": "spaghetti", "quantity": 400, "unit": "g"},
        {"item": "eggs", "quantity": 4, "unit": "pieces"},
    ],
    "instructions": [
        {"step": 1, "description": "Boil the pasta."},
        {"step": 2, "description": "Whisk eggs with cheese and toss."},
    ],
}


@pytest.fixture
def make_recipe():
    """Return a factory producing fresh, valid recipe bodies"""

    def factory(**overrides):
        body = copy.deepcopy(BASE_RECIPE)
        body.update(overrides)
        return body

    return factory


@pytest.fixture
def database():
    return AsyncMongoMockClient()["recipes_test"]


@pytest.fixture
def repository(database):
    return RecipeRepository(database[settings.MONGODB_COLLECTION])


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
