# src/crucible_kitchen/core/recipe/__init__.py
"""Recipes: descritor abstrato e registro por nome."""

from .recipe import Recipe
from .registry import DuplicateRecipeError, RecipeRegistry

__all__ = ["DuplicateRecipeError", "Recipe", "RecipeRegistry"]
