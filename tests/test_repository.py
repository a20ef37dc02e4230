from __future__ import annotations

import asyncio

import pytest

from core.exceptions import InvalidRecipeId, RecipeNotFound
from models.recipe_models import is_valid_object_id
from services.recipe_repository import RecipePage, parse_pagination

MISSING_ID = "0123456789abcdef01234567"


def run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("2", "5", (2, 5)),
        ("abc", "xyz", (1, 10)),
        ("0", "-3", (1, 10)),
        (3, 500, (3, 500)),
    ],
)
def test_parse_pagination(page, limit, expected):
    assert parse_pagination(page, limit) == expected


def test_total_pages_rounds_up():
    assert RecipePage(total=12, limit=5).total_pages == 3
    assert RecipePage(total=0, limit=10).total_pages == 0


def test_create_applies_defaults_and_timestamps(repository, make_recipe):
    recipe = run(repository.create(make_recipe()))

    assert len(recipe.id) == 24
    assert recipe.prep_time == 15
    assert recipe.cook_time == 30
    assert recipe.servings == 4
    assert recipe.difficulty == "Medium"
    assert recipe.cuisine == "International"
    assert recipe.tags == []
    assert recipe.rating == 0
    assert recipe.created_at is not None
    assert recipe.created_at == recipe.updated_at


def test_create_ignores_store_owned_fields(repository, make_recipe):
    body = make_recipe(_id="ffffffffffffffffffffffff", createdAt="yesterday")

    recipe = run(repository.create(body))

    assert recipe.id != "ffffffffffffffffffffffff"
    assert recipe.created_at is not None


def test_get_by_id_round_trips(repository, make_recipe):
    created = run(repository.create(make_recipe(cuisine="Italian")))

    fetched = run(repository.get_by_id(created.id))

    assert fetched.id == created.id
    assert fetched.cuisine == "Italian"
    assert [ingredient.item for ingredient in fetched.ingredients] == ["spaghetti", "eggs"]


def test_get_by_id_rejects_malformed_id(repository):
    with pytest.raises(InvalidRecipeId):
        run(repository.get_by_id("abc"))


def test_get_by_id_missing_record(repository):
    with pytest.raises(RecipeNotFound):
        run(repository.get_by_id(MISSING_ID))


def test_list_is_newest_first_and_paginated(repository, make_recipe):
    async def seed():
        for index in range(12):
            await repository.create(make_recipe(name=f"Recipe {index:02d}"))

    run(seed())

    first = run(repository.list(page=1, limit=5))
    last = run(repository.list(page=3, limit=5))

    assert first.total == 12
    assert first.total_pages == 3
    assert [recipe.name for recipe in first.recipes] == [f"Recipe {index:02d}" for index in range(11, 6, -1)]
    assert [recipe.name for recipe in last.recipes] == ["Recipe 01", "Recipe 00"]


def test_update_writes_only_supplied_fields(repository, make_recipe):
    created = run(repository.create(make_recipe(tags=["pasta"])))

    async def later_update():
        await asyncio.sleep(0.01)
        return await repository.update(created.id, {"rating": 4.5, "createdAt": "never"})

    updated = run(later_update())

    assert updated.rating == 4.5
    assert updated.name == created.name
    assert updated.tags == ["pasta"]
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_update_missing_and_malformed_ids(repository):
    with pytest.raises(InvalidRecipeId):
        run(repository.update("not-an-id", {"rating": 1}))
    with pytest.raises(RecipeNotFound):
        run(repository.update(MISSING_ID, {"rating": 1}))


def test_delete_returns_snapshot_and_removes_record(repository, make_recipe):
    created = run(repository.create(make_recipe()))

    deleted = run(repository.delete(created.id))

    assert deleted.id == created.id
    with pytest.raises(RecipeNotFound):
        run(repository.get_by_id(created.id))
    with pytest.raises(RecipeNotFound):
        run(repository.delete(created.id))


def test_search_by_cuisine_and_tags(repository, make_recipe):
    async def seed():
        await repository.create(make_recipe(name="Lasagne", cuisine="Italian", tags=["pasta", "baked"]))
        await repository.create(make_recipe(name="Risotto", cuisine="Northern Italian", tags=["rice"]))
        await repository.create(make_recipe(name="Ramen", cuisine="Japanese", tags=["noodles"]))

    run(seed())

    by_cuisine = run(repository.search(cuisine="italian"))
    by_tag = run(repository.search(tags=["noodles"]))
    combined = run(repository.search(cuisine="ITALIAN", tags=["rice"]))
    everything = run(repository.search())

    assert sorted(recipe.name for recipe in by_cuisine) == ["Lasagne", "Risotto"]
    assert [recipe.name for recipe in by_tag] == ["Ramen"]
    assert [recipe.name for recipe in combined] == ["Risotto"]
    assert len(everything) == 3


def test_search_treats_cuisine_as_literal_text(repository, make_recipe):
    run(repository.create(make_recipe(cuisine="Tex-Mex")))

    assert run(repository.search(cuisine="(")) == []
    assert len(run(repository.search(cuisine="x-m"))) == 1


@pytest.mark.parametrize(
    "value, expected",
    [
        (MISSING_ID, True),
        (MISSING_ID.upper(), True),
        (MISSING_ID + "\n", False),
        (MISSING_ID[:-1], False),
        ("g" * 24, False),
        (None, False),
    ],
)
def test_is_valid_object_id(value, expected):
    assert is_valid_object_id(value) is expected


def test_get_by_id_rejects_trailing_newline(repository):
    with pytest.raises(InvalidRecipeId):
        run(repository.get_by_id(MISSING_ID + "\n"))
