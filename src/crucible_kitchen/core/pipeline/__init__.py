# src/crucible_kitchen/core/pipeline/__init__.py
"""
# Pipeline Core — Crucible Kitchen

Este pacote define as estruturas que o Interpreter percorre durante uma run.

## Componentes

- **types**
  - `RunStatus`: estados terminais de uma run
  - `MetricEvent`: evento de métrica imutável

- **context**
  - `Context`: estado imutável e versionado da run (config, adapters,
    state, metrics, metadata, events)

- **step**
  - `StageHandler` (Protocol): contrato `execute(ctx, opts) -> Context`

- **workflow**
  - `Stage`, `Loop`: vocabulário fechado de Steps
  - `check_workflow`: validação estrutural da árvore de Steps

## Invariantes

- Um Context nunca é mutado in-place
- Steps são imutáveis e formam uma árvore
"""

from .context import Context, generate_run_id, utc_now
from .step import StageHandler
from .types import MetricEvent, RunStatus
from .workflow import Loop, Stage, Step, check_workflow, iter_steps

__all__ = [
    "Context",
    "Loop",
    "MetricEvent",
    "RunStatus",
    "Stage",
    "StageHandler",
    "Step",
    "check_workflow",
    "generate_run_id",
    "iter_steps",
    "utc_now",
]
