# src/crucible_kitchen/__init__.py
"""
Crucible Kitchen — orquestração declarativa de jobs de treino de ML.

Uma recipe declara configuração padrão, ports exigidos e um workflow de
Stages e Loops. Todo o trabalho real (treino, acesso a datasets,
armazenamento de checkpoints) é delegado a adapters plugáveis,
selecionados em tempo de execução e validados antes da run.

Arquitetura em alto nível:
    - core.ports    → interfaces de ports, registro e resolução/validação de adapters
    - core.pipeline → Context imutável e vocabulário de Steps (Stage, Loop)
    - core.engine   → Interpreter de workflows
    - core.recipe   → descritor de Recipe e registro por nome
    - core.config   → carregamento e merge de configuração
    - kitchen       → orquestrador (`run`, `validate`)

Limites explícitos:
    - Não executa computação de treino
    - Não gerencia execução distribuída
    - Não define uma linguagem genérica de workflows
"""

from .core.engine import RunResult
from .core.pipeline import Context, Loop, RunStatus, Stage
from .core.recipe import Recipe, RecipeRegistry
from .kitchen import run, validate

__all__ = [
    "Context",
    "Loop",
    "Recipe",
    "RecipeRegistry",
    "RunResult",
    "RunStatus",
    "Stage",
    "run",
    "validate",
]
