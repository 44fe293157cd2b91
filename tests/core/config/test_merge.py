# tests/core/config/test_merge.py
"""
Testes do deep-merge canônico de configuração.

Os testes asseguram que:
- defaults da recipe são sobrepostos pela config do usuário
- dicionários aninhados são mesclados recursivamente
- listas são sobrescritas integralmente
- `None` e pares int/float nunca são conflito
- demais conflitos de tipo são rejeitados explicitamente

Invariantes:
    - Nenhum input é mutado pelo merge
"""

import pytest

try:
    from crucible_kitchen.core.config.merge import deep_merge
    from crucible_kitchen.core.config.errors import ConfigTypeConflictError
except Exception as e:  # noqa: BLE001
    deep_merge = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de config estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `deep_merge`
    e/ou `ConfigTypeConflictError` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge modules. Implement:\n"
            "- src/crucible_kitchen/core/config/merge.py (deep_merge)\n"
            "- src/crucible_kitchen/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_user_config_overrides_defaults_without_mutation():
    """
    Verifica que a config do usuário tem prioridade sobre os defaults
    e que nenhum dos dois inputs é alterado.
    """
    _require_imports()
    defaults = {"epochs": 1, "batch_size": 4}
    user = {"epochs": 3}

    out = deep_merge(defaults, user)

    assert out == {"epochs": 3, "batch_size": 4}
    assert defaults == {"epochs": 1, "batch_size": 4}
    assert user == {"epochs": 3}


def test_merge_nested_dict():
    _require_imports()
    base = {"lora": {"rank": 16, "alpha": 32}}
    override = {"lora": {"rank": 8}}

    assert deep_merge(base, override) == {"lora": {"rank": 8, "alpha": 32}}


def test_merge_list_override_total():
    _require_imports()
    base = {"eval_splits": ["validation", "test"]}
    override = {"eval_splits": ["test"]}

    assert deep_merge(base, override) == {"eval_splits": ["test"]}


def test_none_default_is_filled_by_user():
    """
    Defaults de recipe declaram campos obrigatórios como `None`;
    preenchê-los com qualquer tipo não é conflito.
    """
    _require_imports()
    out = deep_merge({"model": None, "max_steps": None}, {"model": "llama", "max_steps": 10})
    assert out == {"model": "llama", "max_steps": 10}


def test_user_may_reset_value_to_none():
    _require_imports()
    assert deep_merge({"lora_rank": 16}, {"lora_rank": None}) == {"lora_rank": None}


def test_int_and_float_are_interchangeable():
    _require_imports()
    out = deep_merge({"learning_rate": 2.0e-5, "epochs": 1}, {"learning_rate": 1, "epochs": 2.0})
    assert out == {"learning_rate": 1, "epochs": 2.0}


def test_new_keys_are_added():
    _require_imports()
    assert deep_merge({"a": 1}, {"custom": {"x": [1]}}) == {"a": 1, "custom": {"x": [1]}}


def test_merge_result_does_not_share_nested_references():
    _require_imports()
    base = {"lora": {"rank": 16}}
    out = deep_merge(base, {})

    out["lora"]["rank"] = 1
    assert base["lora"]["rank"] == 16


def test_merge_type_conflict_raises():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"lora": {"rank": 16}}, {"lora": "disabled"})


def test_bool_is_not_a_number_for_merge():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"epochs": 1}, {"epochs": True})


def test_non_dict_root_is_rejected():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["a"])
