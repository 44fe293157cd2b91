# src/crucible_kitchen/kitchen.py
"""
Orquestrador de runs do Crucible Kitchen.

Ponto de entrada para executar uma recipe (ver `run`).

Sequência de uma run:
    1. resolver a recipe (instância, classe ou nome registrado)
    2. deep-merge de `default_config()` com a config do usuário
    3. `validate_config` da recipe
    4. validação dos adapters contra ports obrigatórios/opcionais
    5. validação estrutural do workflow
    6. criação do Context inicial
    7. execução do workflow pelo Interpreter

Erros de config e de adapters são retornados como `RunResult` FAILED
antes de qualquer Stage executar: a run nunca começa em configuração
sabidamente inválida. Erros de programação (entrada malformada no
adapter map, workflow estruturalmente inválido) são levantados.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from crucible_kitchen.core.config.errors import ConfigTypeConflictError
from crucible_kitchen.core.config.loader import load_config
from crucible_kitchen.core.config.merge import deep_merge
from crucible_kitchen.core.engine.interpreter import RunResult, run_workflow
from crucible_kitchen.core.errors import KitchenErrorPayload, invalid_config
from crucible_kitchen.core.exceptions import InvalidConfig
from crucible_kitchen.core.pipeline.context import Clock, Context, IdGenerator, normalize_adapters
from crucible_kitchen.core.pipeline.types import RunStatus
from crucible_kitchen.core.pipeline.workflow import check_workflow
from crucible_kitchen.core.ports import resolver
from crucible_kitchen.core.recipe.recipe import Recipe
from crucible_kitchen.core.recipe.registry import RecipeRegistry


RecipeRef = Union[Recipe, type, str]
UserConfig = Union[Mapping[str, Any], str, Path, None]


def resolve_recipe(recipe: RecipeRef, registry: Optional[RecipeRegistry] = None) -> Recipe:
    """
    Normaliza a referência de recipe para uma instância.

    Raises:
        KeyError: Se o nome não estiver registrado.
        TypeError: Se a referência não for Recipe, subclasse de Recipe ou nome.
    """
    if isinstance(recipe, str):
        if registry is None:
            from crucible_kitchen.recipes import builtin_registry

            registry = builtin_registry()
        return registry.get(recipe)

    if isinstance(recipe, type) and issubclass(recipe, Recipe):
        return recipe()

    if isinstance(recipe, Recipe):
        return recipe

    raise TypeError(f"recipe must be a Recipe, a Recipe subclass or a registered name, got {recipe!r}")


def _user_config(config: UserConfig) -> Dict[str, Any]:
    if config is None:
        return {}
    if isinstance(config, (str, Path)):
        return load_config(config)
    if isinstance(config, Mapping):
        return dict(config)
    raise TypeError(f"config must be a mapping or a path to a YAML/JSON file, got {type(config).__name__}")


def validate(
    recipe: RecipeRef,
    config: UserConfig,
    adapters: Any,
    *,
    registry: Optional[RecipeRegistry] = None,
) -> Tuple[Dict[str, Any], List[KitchenErrorPayload]]:
    """
    Valida uma run sem executá-la.

    Returns:
        (config_efetiva, erros): lista de erros vazia quando a run pode começar.
        Se a config for inválida, os adapters não chegam a ser validados.

    Raises:
        MalformedAdapterEntry: Se alguma entrada do adapter map tiver formato inválido.
    """
    resolved = resolve_recipe(recipe, registry)

    try:
        merged = deep_merge(resolved.default_config(), _user_config(config))
    except ConfigTypeConflictError as e:
        return {}, [invalid_config(message=str(e), details={"source": "merge"})]

    try:
        resolved.validate_config(merged)
    except InvalidConfig as e:
        return merged, [e.to_payload()]

    errors = resolver.validate(
        normalize_adapters(adapters),
        resolved.required_adapters(),
        resolved.optional_adapters(),
    )
    return merged, errors


def run(
    recipe: RecipeRef,
    config: UserConfig = None,
    *,
    adapters: Any,
    registry: Optional[RecipeRegistry] = None,
    id_generator: Optional[IdGenerator] = None,
    clock: Optional[Clock] = None,
    keep_snapshots: bool = False,
) -> RunResult:
    """
    Valida e executa uma recipe.

    Args:
        recipe: instância, subclasse de Recipe ou nome registrado.
        config: config do usuário (dict ou caminho YAML/JSON), sobreposta aos defaults.
        adapters: adapter map (ou objeto com `all()`).
        registry: registro usado para resolver nomes (padrão: recipes built-in).
        id_generator: gerador de run_id (injetável para testes).
        clock: relógio UTC (injetável para testes).
        keep_snapshots: reter o Context após cada Stage concluído.

    Returns:
        RunResult: COMPLETED com o Context final, ou FAILED com os erros.

    Raises:
        MalformedAdapterEntry: entrada do adapter map com formato inválido.
        InvalidWorkflowError: workflow da recipe estruturalmente inválido.
    """
    resolved = resolve_recipe(recipe, registry)

    merged, errors = validate(resolved, config, adapters)
    if errors:
        return RunResult(status=RunStatus.FAILED, errors=tuple(errors))

    check_workflow(resolved.workflow())

    ctx = Context.new(merged, adapters, id_generator=id_generator, clock=clock)
    ctx = ctx.put_metadata("recipe", resolved.name())

    return run_workflow(resolved, ctx, keep_snapshots=keep_snapshots)
