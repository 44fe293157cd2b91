# tests/core/pipeline/test_context_state.py
"""
Testes de estado, config, adapters e metadata do Context.

Os testes asseguram que:
- o Context inicial é criado com run_id e started_at
- atualizações retornam um novo Context e preservam o original
- cada atualização altera apenas o campo alvo
- campos do tipo mapping não aceitam mutação in-place

Decisões arquiteturais:
    - O Context é um valor imutável; snapshots são independentes
"""

import dataclasses
import re

import pytest

try:
    from crucible_kitchen.core.pipeline.context import Context, generate_run_id
    from crucible_kitchen.core.exceptions import MalformedAdapterEntry
except Exception as e:  # noqa: BLE001
    Context = None
    generate_run_id = None
    MalformedAdapterEntry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None

from tests.conftest import FIXED_NOW, FIXED_RUN_ID
from tests.fixtures.adapters import FakeDatasetStore, FakeTrainingClient


def _require_imports():
    """
    Garante que a API do Context esteja disponível para os testes.

    Invariantes:
        - Se a API existe, a função não produz efeitos colaterais
        - Se a API está ausente, o teste falha imediatamente
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing Context API. Implement:\n"
            "- src/crucible_kitchen/core/pipeline/context.py (Context, generate_run_id)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_new_context_has_run_identity(ctx):
    _require_imports()
    assert ctx.get_metadata("run_id") == FIXED_RUN_ID
    assert ctx.get_metadata("started_at") == FIXED_NOW
    assert dict(ctx.state) == {}
    assert ctx.metrics == ()
    assert ctx.current_stage is None


def test_generated_run_id_format(fixed_clock):
    _require_imports()
    run_id = generate_run_id(fixed_clock)

    assert re.fullmatch(rf"run_{int(FIXED_NOW.timestamp())}_[0-9a-f]{{8}}", run_id)


def test_default_run_ids_are_distinct(fixed_clock):
    _require_imports()
    a = Context.new({}, {}, clock=fixed_clock)
    b = Context.new({}, {}, clock=fixed_clock)

    assert a.get_metadata("run_id") != b.get_metadata("run_id")


def test_get_config_with_default(ctx):
    _require_imports()
    assert ctx.get_config("epochs") == 2
    assert ctx.get_config("max_steps") is None
    assert ctx.get_config("max_steps", 100) == 100


def test_put_state_returns_new_context_and_preserves_original(ctx):
    """
    Verifica que `put_state` produz um novo Context e que o original
    permanece observável sem alteração (snapshot independente).
    """
    _require_imports()
    updated = ctx.put_state("session", "s-1")

    assert updated is not ctx
    assert updated.get_state("session") == "s-1"
    assert ctx.get_state("session") is None


def test_put_state_touches_only_state(ctx):
    _require_imports()
    updated = ctx.put_state("current_epoch", 0)

    assert updated.config is ctx.config
    assert updated.adapters is ctx.adapters
    assert updated.metadata is ctx.metadata
    assert updated.metrics is ctx.metrics


def test_merge_state_overrides_existing_keys(ctx):
    _require_imports()
    updated = ctx.put_state("a", 1).merge_state({"a": 2, "b": 3})

    assert dict(updated.state) == {"a": 2, "b": 3}


def test_put_metadata_keeps_run_identity(ctx):
    _require_imports()
    updated = ctx.put_metadata("recipe", "supervised_finetuning")

    assert updated.get_metadata("recipe") == "supervised_finetuning"
    assert updated.get_metadata("run_id") == FIXED_RUN_ID
    assert ctx.get_metadata("recipe") is None


def test_mappings_are_read_only(ctx):
    _require_imports()
    with pytest.raises(TypeError):
        ctx.state["x"] = 1  # type: ignore[index]
    with pytest.raises(TypeError):
        ctx.config["epochs"] = 10  # type: ignore[index]


def test_fields_cannot_be_reassigned(ctx):
    _require_imports()
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.state = {}  # type: ignore[misc]


def test_config_is_copied_on_creation(fixed_clock, run_id_generator):
    _require_imports()
    config = {"epochs": 1}
    ctx = Context.new(config, {}, id_generator=run_id_generator, clock=fixed_clock)

    config["epochs"] = 99

    assert ctx.get_config("epochs") == 1


def test_adapters_are_resolved_to_bindings(fixed_clock, run_id_generator):
    _require_imports()
    ctx = Context.new(
        {},
        {"training_client": (FakeTrainingClient, {"api_key": "k"}), "dataset_store": FakeDatasetStore},
        id_generator=run_id_generator,
        clock=fixed_clock,
    )

    binding = ctx.get_adapter("training_client")
    assert binding.implementation is FakeTrainingClient
    assert dict(binding.options) == {"api_key": "k"}
    assert ctx.get_adapter("dataset_store").implementation is FakeDatasetStore
    assert ctx.get_adapter("metrics_store") is None


def test_adapters_may_come_from_an_object_with_all(fixed_clock):
    _require_imports()

    class AdapterProvider:
        def all(self):
            return {"dataset_store": FakeDatasetStore}

    ctx = Context.new({}, AdapterProvider(), clock=fixed_clock)

    assert ctx.get_adapter("dataset_store").implementation is FakeDatasetStore


def test_invalid_adapter_source_raises(fixed_clock):
    _require_imports()
    with pytest.raises(TypeError):
        Context.new({}, ["dataset_store"], clock=fixed_clock)


def test_malformed_adapter_entry_aborts_creation(fixed_clock):
    _require_imports()
    with pytest.raises(MalformedAdapterEntry):
        Context.new({}, {"dataset_store": "FakeDatasetStore"}, clock=fixed_clock)
