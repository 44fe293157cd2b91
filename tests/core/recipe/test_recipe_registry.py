# tests/core/recipe/test_recipe_registry.py
"""
Testes do registro de recipes por nome.

Invariantes:
    - Nomes são únicos e não vazios
    - A ordem de registro é preservada
"""

import pytest

from crucible_kitchen.core.recipe.recipe import Recipe
from crucible_kitchen.core.recipe.registry import DuplicateRecipeError, RecipeRegistry
from crucible_kitchen.recipes import SupervisedFineTuning, builtin_registry

from tests.fixtures.recipes import StaticRecipe


def test_add_and_get_by_name():
    registry = RecipeRegistry()
    recipe = StaticRecipe(workflow=[], name="distillation")

    registry.add(recipe)

    assert "distillation" in registry
    assert registry.get("distillation") is recipe


def test_unknown_name_raises_key_error():
    with pytest.raises(KeyError):
        RecipeRegistry().get("absent")


def test_duplicate_name_is_rejected():
    registry = RecipeRegistry()
    registry.add(StaticRecipe(workflow=[], name="sft"))

    with pytest.raises(DuplicateRecipeError):
        registry.add(StaticRecipe(workflow=[], name="sft"))


@pytest.mark.parametrize("name", ["", "  "])
def test_empty_name_is_rejected(name):
    with pytest.raises(ValueError):
        RecipeRegistry().add(StaticRecipe(workflow=[], name=name))


def test_list_preserves_registration_order():
    registry = RecipeRegistry()
    names = ["c", "a", "b"]
    for name in names:
        registry.add(StaticRecipe(workflow=[], name=name))

    assert [r.name() for r in registry.list()] == names


def test_builtin_registry_contains_sft():
    registry = builtin_registry()
    assert isinstance(registry.get("supervised_finetuning"), SupervisedFineTuning)


def test_recipe_is_abstract():
    with pytest.raises(TypeError):
        Recipe()  # type: ignore[abstract]


def test_recipe_defaults():
    class MinimalRecipe(Recipe):
        def name(self):
            return "minimal"

        def description(self):
            return ""

        def default_config(self):
            return {}

        def required_adapters(self):
            return []

        def workflow(self):
            return []

    recipe = MinimalRecipe()
    assert recipe.optional_adapters() == []
    assert recipe.validate_config({"anything": 1}) is None
