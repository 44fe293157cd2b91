# src/crucible_kitchen/core/pipeline/workflow.py
"""
Vocabulário de Steps de workflow do Crucible Kitchen.

Um workflow é uma lista ordenada de Steps. O vocabulário é fechado e
pequeno:

    - Stage(name, handler, options) → unidade única de trabalho
    - Loop(name, over, body)        → repete `body` uma vez por valor
                                      produzido pela fonte de iteração `over`

Exemplo:

    [
        Stage("load_dataset", Noop),
        Stage("init_session", Noop),
        Loop("training", over="epochs_range", body=[
            Stage("train_epoch", Noop),
            Stage("eval_epoch", Noop),
        ]),
        Stage("finalize", Noop),
    ]

Fonte de iteração (`Loop.over`):
    - callable `(Context) -> Iterable`, ou
    - nome de uma função da recipe em execução (ex.: "epochs_range"),
      chamada com o Context corrente

Invariantes:
    - Steps são imutáveis
    - Aninhamento ocorre apenas via `Loop.body` (árvore, sem ciclos)

Limites explícitos:
    - Não executa Steps (responsabilidade do Interpreter)
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Sequence, Tuple, Union

from ..exceptions import InvalidWorkflowError
from .step import StageHandler


IterationSource = Union[str, Callable[..., Iterable[Any]]]


@dataclass(frozen=True)
class Stage:
    """Unidade única de trabalho: `handler.execute(ctx, options)`."""
    name: str
    handler: Any
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.options, MappingProxyType):
            object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


@dataclass(frozen=True)
class Loop:
    """Repetição limitada de `body`, uma vez por valor da fonte de iteração."""
    name: str
    over: IterationSource
    body: Tuple["Step", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))


Step = Union[Stage, Loop]


def _unbound_execute(handler: Any) -> bool:
    # classe cujo execute exige instância: a chamada ligaria ctx a `self`
    if not isinstance(handler, type):
        return False
    return inspect.isfunction(inspect.getattr_static(handler, "execute"))


def iter_steps(steps: Iterable[Step]) -> Iterable[Step]:
    """Percorre a árvore de Steps em profundidade, na ordem de declaração."""
    for step in steps:
        yield step
        if isinstance(step, Loop):
            yield from iter_steps(step.body)


def check_workflow(steps: Sequence[Step]) -> List[Step]:
    """
    Valida a estrutura de uma árvore de Steps.

    Regras:
        - todo Step é `Stage` ou `Loop`
        - nomes são strings não vazias e únicos em toda a árvore
        - handlers de Stage satisfazem `StageHandler` (classes só com `execute`
          estático ou de classe)
        - Loops declaram fonte de iteração e corpo não vazio

    Returns:
        List[Step]: os Steps de nível superior, na ordem declarada.

    Raises:
        InvalidWorkflowError: Na primeira violação estrutural encontrada.
    """
    step_list = list(steps)
    seen = set()

    for step in iter_steps(step_list):
        if not isinstance(step, (Stage, Loop)):
            raise InvalidWorkflowError(f"Step inválido (esperado Stage ou Loop): {step!r}")

        name = step.name
        if not isinstance(name, str) or not name.strip():
            raise InvalidWorkflowError("step.name must be a non-empty string")
        if name in seen:
            raise InvalidWorkflowError(f"Duplicate step name: {name}")
        seen.add(name)

        if isinstance(step, Stage):
            if not isinstance(step.handler, StageHandler):
                raise InvalidWorkflowError(f"Stage '{name}' handler does not define execute(ctx, opts)")
            if _unbound_execute(step.handler):
                raise InvalidWorkflowError(
                    f"Stage '{name}' handler is a class with an instance-method execute; "
                    "pass an instance or make execute a staticmethod"
                )
        else:
            if not (isinstance(step.over, str) or callable(step.over)):
                raise InvalidWorkflowError(f"Loop '{name}' iteration source must be a name or a callable")
            if not step.body:
                raise InvalidWorkflowError(f"Loop '{name}' has an empty body")

    return step_list
