from __future__ import annotations

import copy

import pytest

from core.exceptions import RecipeValidationError
from schemas.recipe_schemas import RecipeCreate, RecipeUpdate
from services.recipe_validation import UNIT_MESSAGE, check_recipe, validate_recipe


def _messages(errors):
    return [error["message"] for error in errors]


def test_valid_create_body_has_no_errors(make_recipe):
    assert check_recipe(make_recipe()) == []


def test_create_returns_parsed_schema_with_trimmed_text(make_recipe):
    recipe = validate_recipe(make_recipe(name="  Pad Thai  ", cuisine=" Thai ", tags=[" noodles "]))

    assert isinstance(recipe, RecipeCreate)
    assert recipe.name == "Pad Thai"
    assert recipe.cuisine == "Thai"
    assert recipe.tags == ["noodles"]


def test_create_only_documents_supplied_fields(make_recipe):
    document = validate_recipe(make_recipe()).to_document()

    assert "prepTime" not in document
    assert "rating" not in document
    assert document["ingredients"][1] == {"item": "eggs", "quantity": 4.0, "unit": "pieces"}


def test_create_requires_name_ingredients_and_instructions():
    errors = check_recipe({})

    assert [error["field"] for error in errors] == ["name", "ingredients", "instructions"]
    assert _messages(errors) == [
        "Recipe name is required",
        "Ingredients must be an array",
        "Instructions must be an array",
    ]


@pytest.mark.parametrize("name", ["ab", "x" * 101, "   "])
def test_create_rejects_bad_name_length(make_recipe, name):
    errors = check_recipe(make_recipe(name=name))

    assert len(errors) == 1
    assert errors[0]["field"] == "name"


def test_create_rejects_long_description(make_recipe):
    errors = check_recipe(make_recipe(description="d" * 501))

    assert _messages(errors) == ["Description must not exceed 500 characters"]


def test_create_rejects_empty_ingredients_and_instructions(make_recipe):
    errors = check_recipe(make_recipe(ingredients=[], instructions=[]))

    assert errors == [
        {"field": "ingredients", "message": "At least one ingredient is required", "value": []},
        {"field": "instructions", "message": "At least one instruction is required", "value": []},
    ]


def test_create_rejects_unit_outside_enumeration(make_recipe):
    body = make_recipe(ingredients=[{"item": "flour", "quantity": 2, "unit": "handful"}])

    errors = check_recipe(body)

    assert errors == [{"field": "ingredients.0.unit", "message": UNIT_MESSAGE, "value": "handful"}]
    assert UNIT_MESSAGE == "Invalid unit. Use: g, kg, ml, l, tbsp, tsp, cup, piece, or pieces"


def test_create_rejects_incomplete_ingredient(make_recipe):
    body = make_recipe(ingredients=[{"item": "salt", "unit": "tsp"}])

    errors = check_recipe(body)

    assert errors[0]["field"] == "ingredients.0.quantity"
    assert errors[0]["message"] == "Each ingredient must have item, quantity, and unit"


def test_create_rejects_non_positive_quantity(make_recipe):
    body = make_recipe(ingredients=[{"item": "salt", "quantity": 0, "unit": "tsp"}])

    assert _messages(check_recipe(body)) == ["Quantity must be greater than 0"]


def test_create_rejects_instruction_without_description(make_recipe):
    body = make_recipe(instructions=[{"step": 1, "description": "  "}])

    assert _messages(check_recipe(body)) == ["Each instruction must have step and description"]


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("prepTime", 0, "Prep time must be a positive integer"),
        ("cookTime", "soon", "Cook time must be a positive integer"),
        ("servings", 2.5, "Servings must be a positive integer"),
        ("difficulty", "Extreme", "Difficulty must be Easy, Medium, or Hard"),
        ("tags", "vegan", "Tags must be an array"),
        ("rating", 5.5, "Rating must be between 0 and 5"),
        ("rating", -1, "Rating must be between 0 and 5"),
    ],
)
def test_create_checks_optional_fields_when_present(make_recipe, field, value, message):
    errors = check_recipe(make_recipe(**{field: value}))

    assert errors == [{"field": field, "message": message, "value": value}]


def test_create_rejects_explicit_null(make_recipe):
    errors = check_recipe(make_recipe(servings=None))

    assert _messages(errors) == ["Servings must be a positive integer"]


def test_create_allows_null_description(make_recipe):
    assert check_recipe(make_recipe(description=None)) == []


def test_non_object_body_is_rejected():
    errors = check_recipe(["not", "a", "recipe"])

    assert errors == [{"field": "body", "message": "Request body must be a JSON object", "value": None}]


def test_validation_never_mutates_input(make_recipe):
    body = make_recipe(name="  Padded name  ", rating=9)
    snapshot = copy.deepcopy(body)

    check_recipe(body)
    validate_recipe(make_recipe(name="  Padded name  "))

    assert body == snapshot


def test_update_accepts_empty_body():
    recipe = validate_recipe({}, partial=True)

    assert isinstance(recipe, RecipeUpdate)
    assert recipe.to_document() == {}


def test_update_only_checks_supplied_fields():
    assert check_recipe({"rating": 4.5}, partial=True) == []
    assert _messages(check_recipe({"rating": 7}, partial=True)) == ["Rating must be between 0 and 5"]


def test_update_applies_same_rules_to_lists():
    errors = check_recipe({"ingredients": []}, partial=True)

    assert _messages(errors) == ["At least one ingredient is required"]


def test_update_rejects_null_for_required_field():
    errors = check_recipe({"name": None}, partial=True)

    assert errors == [{"field": "name", "message": "Recipe name is required", "value": None}]


def test_update_drops_fields_outside_allow_list():
    recipe = validate_recipe(
        {"id": "abc", "createdAt": "2020-01-01", "prepTime": 20},
        partial=True,
    )

    assert recipe.to_document() == {"prepTime": 20}


def test_validate_recipe_raises_with_errors(make_recipe):
    with pytest.raises(RecipeValidationError) as exc_info:
        validate_recipe(make_recipe(ingredients=[]))

    assert exc_info.value.status_code == 400
    assert exc_info.value.to_envelope()["message"] == "Validation errors"
    assert exc_info.value.errors[0]["field"] == "ingredients"


@pytest.mark.parametrize("quantity", [float("inf"), float("nan")])
def test_create_rejects_non_finite_quantity(make_recipe, quantity):
    body = make_recipe(ingredients=[{"item": "water", "quantity": quantity, "unit": "ml"}])

    errors = check_recipe(body)

    assert [error["field"] for error in errors] == ["ingredients.0.quantity"]
