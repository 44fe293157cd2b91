"""Recipes built-in do Crucible Kitchen."""

from crucible_kitchen.core.recipe.registry import RecipeRegistry

from .supervised_finetuning import SupervisedFineTuning

__all__ = ["SupervisedFineTuning", "builtin_registry"]


def builtin_registry() -> RecipeRegistry:
    """Novo registro contendo as recipes built-in."""
    registry = RecipeRegistry()
    registry.add(SupervisedFineTuning())
    return registry
