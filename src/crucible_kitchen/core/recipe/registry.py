# src/crucible_kitchen/core/recipe/registry.py
"""
Registro de Recipes por nome.

Permite que o orquestrador receba o nome de uma recipe (ex.:
"supervised_finetuning") em vez da instância.

Decisões arquiteturais:
    - Nomes duplicados são tratados como erro fatal no registro
    - A ordem de registro é preservada

Invariantes:
    - Cada recipe registrada possui `name()` único e não vazio
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .recipe import Recipe


class DuplicateRecipeError(ValueError):
    """
    Exceção levantada ao registrar duas recipes com o mesmo nome.

    Limites explícitos:
        - Não tenta renomear ou substituir a recipe existente
    """


@dataclass
class RecipeRegistry:
    """Registro de recipes indexado por `Recipe.name()`."""

    _recipes: Dict[str, Recipe] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, recipe: Recipe) -> None:
        name = recipe.name()
        if not isinstance(name, str) or not name.strip():
            raise ValueError("recipe.name() must be a non-empty string")

        if name in self._recipes:
            raise DuplicateRecipeError(f"Duplicate recipe name: {name}")

        self._recipes[name] = recipe
        self._order.append(name)

    def get(self, name: str) -> Recipe:
        return self._recipes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    def list(self) -> List[Recipe]:
        return [self._recipes[n] for n in self._order]
