# src/crucible_kitchen/core/recipe/recipe.py
"""
Descritor canônico de Recipe do Crucible Kitchen.

Uma Recipe é a definição nomeada e reutilizável de um job de treino:
configuração padrão, ports exigidos/opcionais, workflow e validação de
configuração. Recipes são descritores passivos e sem estado: várias runs
concorrentes podem compartilhar a mesma instância.

Ordem de uso pelo orquestrador:
    1. `deep_merge(default_config(), config_do_usuario)`
    2. `validate_config(config_efetiva)`
    3. validação de adapters contra `required_adapters()` / `optional_adapters()`
    4. `workflow()` entregue ao Interpreter sem modificação

Funções de iteração referenciadas por nome em `Loop.over` (ex.:
"epochs_range") são métodos da própria recipe que recebem o Context.

Limites explícitos:
    - Não executa Stages
    - Não resolve adapters
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from ..pipeline.workflow import Step


class Recipe(ABC):
    """
    Contrato de uma Recipe.

    Invariantes:
        - `name()` é estável e único no `RecipeRegistry`
        - `default_config()` retorna um novo dict a cada chamada
        - `validate_config` levanta `InvalidConfig` em caso de erro;
          retornar normalmente significa configuração válida
    """

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def description(self) -> str:
        ...

    @abstractmethod
    def default_config(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def required_adapters(self) -> List[str]:
        ...

    def optional_adapters(self) -> List[str]:
        return []

    @abstractmethod
    def workflow(self) -> List[Step]:
        ...

    def validate_config(self, config: Mapping[str, Any]) -> None:
        """Validação de domínio da configuração efetiva (padrão: aceita tudo)."""
        return None
