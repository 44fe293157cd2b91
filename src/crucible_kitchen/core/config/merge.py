# src/crucible_kitchen/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial usada pelo Crucible Kitchen para
resolver a configuração efetiva de uma run a partir do `default_config()`
da recipe e da configuração fornecida pelo usuário.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - None (em qualquer lado) → sobrescrita direta
    - int ↔ float → sobrescrita direta
    - demais conflitos de tipo → erro estrutural explícito

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida semântica de domínio
    - Não realiza coerção de tipos
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compatible(base_value: Any, override_value: Any) -> bool:
    if base_value is None or override_value is None:
        return True
    if _is_number(base_value) and _is_number(override_value):
        return True
    return type(base_value) is type(override_value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Defaults de recipe costumam declarar campos obrigatórios como `None`
    (ex.: `model`, `dataset`), que o usuário então preenche; por isso
    `None` nunca é tratado como conflito de tipo.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(base_value, list) and isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if not _compatible(base_value, override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
