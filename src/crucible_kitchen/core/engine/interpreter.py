# src/crucible_kitchen/core/engine/interpreter.py
"""
Interpreter de workflows do Crucible Kitchen.

Percorre a árvore de Steps de uma recipe em profundidade, de forma
estritamente sequencial, encadeando o Context de Step em Step.

Semântica:
    - Stage: `handler.execute(ctx, options)` deve retornar um Context.
      Exceção levantada pelo handler (ou retorno de outro tipo) é falha:
      a run para imediatamente e o erro nomeia o Stage. Nada do Stage
      que falhou é incorporado.
    - Loop: a fonte de iteração é avaliada contra o Context *corrente* e
      materializada em uma sequência finita. O corpo roda uma vez por
      valor, e o estado acumulado atravessa as iterações. Qualquer falha
      no corpo encerra a run inteira.
    - Estados terminais: COMPLETED (Context final) ou FAILED (primeiro
      erro; Context final descartado).

Decisões arquiteturais:
    - O Interpreter não revalida config nem adapters: assume um Context
      bem formado, preparado pelo orquestrador
    - Não há retry, timeout nem cancelamento
    - Eventos de ciclo de vida são registrados no log estruturado do Context

Limites explícitos:
    - Não executa Steps em paralelo
    - Não persiste Contexts intermediários (ver `keep_snapshots`)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from crucible_kitchen.core.errors import KitchenErrorPayload, invalid_stage_result, stage_failure
from crucible_kitchen.core.exceptions import InvalidWorkflowError, KitchenException, exception_from_payload
from crucible_kitchen.core.pipeline.context import Context
from crucible_kitchen.core.pipeline.types import RunStatus
from crucible_kitchen.core.pipeline.workflow import Loop, Stage, Step


LoopPath = Tuple[Dict[str, Any], ...]


@dataclass(frozen=True)
class RunResult:
    """
    Resultado terminal de uma run.

    Campos:
        - status: COMPLETED ou FAILED
        - context: Context final (apenas em COMPLETED)
        - errors: erros que encerraram a run (vazio em COMPLETED)
        - failed_stage: nome do Stage/Loop que falhou, quando aplicável
        - snapshots: Contexts após cada Stage concluído (se solicitado)
    """

    status: RunStatus
    context: Optional[Context] = None
    errors: Tuple[KitchenErrorPayload, ...] = ()
    failed_stage: Optional[str] = None
    snapshots: Tuple[Context, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.COMPLETED

    def raise_for_status(self) -> Context:
        """Retorna o Context final ou levanta a exceção tipada do primeiro erro."""
        if self.ok and self.context is not None:
            return self.context
        raise exception_from_payload(self.errors[0])


class _Halt(Exception):
    """Sinal interno de interrupção da run (nunca escapa do Interpreter)."""

    def __init__(self, stage: str, error: KitchenErrorPayload):
        super().__init__(error.message)
        self.stage = stage
        self.error = error


class Interpreter:
    """Interpreter canônico de workflows (Stage + Loop)."""

    def __init__(self, *, recipe: Any, ctx: Context, keep_snapshots: bool = False):
        self.recipe = recipe
        self.ctx: Context = ctx
        self.keep_snapshots = keep_snapshots
        self._snapshots: List[Context] = []

    # ------------------------------------------------------------------
    # Stage
    # ------------------------------------------------------------------
    def _run_stage(self, stage: Stage, ctx: Context, path: LoopPath) -> Context:
        ctx = ctx.with_stage(stage.name, stage.options)
        ctx = ctx.log("INFO", "stage started", event="stage.started")

        try:
            result = stage.handler.execute(ctx, stage.options)
        except Exception as e:
            error = stage_failure(
                stage=stage.name,
                exc_type=e.__class__.__name__,
                exc_message=str(e) or None,
                loop_path=list(path),
                reason_details=e.details if isinstance(e, KitchenException) else None,
            )
            raise _Halt(stage.name, error) from e

        if not isinstance(result, Context):
            raise _Halt(
                stage.name,
                invalid_stage_result(
                    stage=stage.name,
                    received=result.__class__.__name__,
                    loop_path=list(path),
                ),
            )

        result = result.log("INFO", "stage completed", event="stage.completed").clear_stage()
        if self.keep_snapshots:
            self._snapshots.append(result)
        return result

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------
    def _iteration_source(self, loop: Loop, path: LoopPath) -> Callable[[Context], Iterable[Any]]:
        if callable(loop.over):
            return loop.over

        source = getattr(self.recipe, loop.over, None)
        if not callable(source):
            raise _Halt(
                loop.name,
                stage_failure(
                    stage=loop.name,
                    exc_type="LookupError",
                    exc_message=f"iteration source '{loop.over}' not found on recipe",
                    loop_path=list(path),
                ),
            )
        return source

    def _run_loop(self, loop: Loop, ctx: Context, path: LoopPath) -> Context:
        source = self._iteration_source(loop, path)
        try:
            values = tuple(source(ctx))
        except Exception as e:
            raise _Halt(
                loop.name,
                stage_failure(
                    stage=loop.name,
                    exc_type=e.__class__.__name__,
                    exc_message=str(e) or None,
                    loop_path=list(path),
                ),
            ) from e

        for value in values:
            ctx = ctx.with_loop_value(loop.name, value)
            ctx = ctx.log("INFO", "loop iteration", event="loop.iteration", loop=loop.name, iteration=value)
            ctx = self._run_steps(loop.body, ctx, path + ({"loop": loop.name, "iteration": value},))

        return ctx.without_loop_value(loop.name)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def _run_steps(self, steps: Sequence[Step], ctx: Context, path: LoopPath) -> Context:
        for step in steps:
            if isinstance(step, Stage):
                ctx = self._run_stage(step, ctx, path)
            elif isinstance(step, Loop):
                ctx = self._run_loop(step, ctx, path)
            else:
                raise InvalidWorkflowError(f"Step inválido (esperado Stage ou Loop): {step!r}")
        return ctx

    def run(self) -> RunResult:
        self._snapshots = []
        try:
            final = self._run_steps(list(self.recipe.workflow()), self.ctx, ())
        except _Halt as halt:
            return RunResult(
                status=RunStatus.FAILED,
                errors=(halt.error,),
                failed_stage=halt.stage,
                snapshots=tuple(self._snapshots),
            )

        return RunResult(
            status=RunStatus.COMPLETED,
            context=final,
            snapshots=tuple(self._snapshots),
        )


def run_workflow(recipe: Any, ctx: Context, *, keep_snapshots: bool = False) -> RunResult:
    """Executa o workflow da recipe a partir de `ctx`."""
    return Interpreter(recipe=recipe, ctx=ctx, keep_snapshots=keep_snapshots).run()
