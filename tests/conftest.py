# tests/conftest.py
"""
Fixtures compartilhados para testes do Crucible Kitchen.

Este módulo define fixtures reutilizáveis que fornecem:
- relógio e gerador de run_id determinísticos
- adapter maps válidos para a recipe de SFT
- Context inicial controlado

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa workflow
    - Nenhuma fixture realiza I/O
"""

from datetime import datetime, timedelta, timezone

import pytest


FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
FIXED_RUN_ID = "run-test-001"


class TickingClock:
    """Relógio determinístico que avança um segundo a cada leitura."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def ticking_clock():
    return TickingClock()


@pytest.fixture
def run_id_generator():
    return lambda: FIXED_RUN_ID


@pytest.fixture
def sft_adapters():
    """Adapter map completo para os ports obrigatórios da recipe de SFT."""
    from tests.fixtures.adapters import FakeDatasetStore, FakeTrainingClient

    return {
        "training_client": (FakeTrainingClient, {"api_key": "test-key"}),
        "dataset_store": FakeDatasetStore,
    }


@pytest.fixture
def sft_config():
    return {"model": "meta-llama/Llama-2-7b", "dataset": "my_instructions", "epochs": 2}


@pytest.fixture
def ctx(fixed_clock, run_id_generator):
    """Context inicial com config mínima e sem adapters."""
    from crucible_kitchen.core.pipeline.context import Context

    return Context.new(
        {"epochs": 2, "batch_size": 4},
        {},
        id_generator=run_id_generator,
        clock=fixed_clock,
    )
