# src/crucible_kitchen/core/pipeline/context.py
"""
Contexto de execução de uma run do Crucible Kitchen.

Este módulo define o `Context`, a estrutura que flui pelo workflow de uma
recipe acumulando estado. O Context é imutável: cada Stage recebe um
Context e retorna um novo, com as alterações aplicadas.

Estrutura:
    - config: configuração efetiva (somente leitura durante a run)
    - adapters: bindings de ports fixados na criação
    - state: estado acumulado, alterado apenas via operações que retornam novo Context
    - metrics: log de métricas, append-only, em ordem cronológica de registro
    - metadata: identidade da run (run_id, started_at) e campos livres
    - events: log estruturado de execução
    - current_stage / stage_opts / loop_values: bookkeeping transitório do Interpreter

Invariantes:
    - Um Context nunca é mutado in-place
    - Cada atualização altera exatamente o campo alvo; os demais são
      compartilhados por referência
    - Dois Contexts com mesmos config/adapters e states diferentes são
      snapshots independentes (replay/auditoria)

Limites explícitos:
    - Não executa Stages
    - Não valida adapters contra interfaces
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import dataclasses
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..ports.resolver import AdapterBinding, resolve
from .types import MetricEvent


Clock = Callable[[], datetime]
IdGenerator = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_run_id(clock: Clock = utc_now) -> str:
    """Gera um run_id no formato `run_<unix>_<8 hex>`."""
    timestamp = int(clock().timestamp())
    return f"run_{timestamp}_{secrets.token_hex(4)}"


def _frozen(mapping: Mapping[str, Any]) -> MappingProxyType:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


def _empty() -> MappingProxyType:
    return MappingProxyType({})


def normalize_adapters(adapters: Any) -> Mapping[str, Any]:
    if isinstance(adapters, Mapping):
        return adapters

    provider = getattr(adapters, "all", None)
    if callable(provider):
        provided = provider()
        if isinstance(provided, Mapping):
            return provided

    raise TypeError("adapters must be a mapping or an object with an all() method returning one")


@dataclass(frozen=True)
class Context:
    """
    Contexto imutável e versionado de uma run.

    Decisões arquiteturais:
        - Campos do tipo mapping são expostos como `MappingProxyType`,
          tornando mutação acidental um erro em runtime
        - Métricas e eventos são tuplas (append produz nova tupla)
        - O relógio é injetável para timestamps determinísticos em testes

    Ordem das métricas:
        `metrics` segue a ordem de registro: `metrics[0]` é a primeira
        métrica registrada e `metrics[-1]` a mais recente.
    """
    config: Mapping[str, Any]
    adapters: Mapping[str, AdapterBinding]
    state: Mapping[str, Any] = field(default_factory=_empty)
    metrics: Tuple[MetricEvent, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=_empty)
    events: Tuple[Mapping[str, Any], ...] = ()
    current_stage: Optional[str] = None
    stage_opts: Optional[Mapping[str, Any]] = None
    loop_values: Mapping[str, Any] = field(default_factory=_empty)
    clock: Clock = field(default=utc_now, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "config", _frozen(self.config))
        object.__setattr__(self, "adapters", _frozen(self.adapters))
        object.__setattr__(self, "state", _frozen(self.state))
        object.__setattr__(self, "metadata", _frozen(self.metadata))
        object.__setattr__(self, "loop_values", _frozen(self.loop_values))
        object.__setattr__(self, "metrics", tuple(self.metrics))
        object.__setattr__(self, "events", tuple(self.events))
        if self.stage_opts is not None:
            object.__setattr__(self, "stage_opts", _frozen(self.stage_opts))

    # -----------------------------
    # Construção
    # -----------------------------
    @classmethod
    def new(
        cls,
        config: Mapping[str, Any],
        adapters: Any,
        *,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> "Context":
        """
        Cria o Context inicial de uma run.

        `adapters` pode ser um adapter map ou um objeto com `all()` que
        retorne um. Cada entrada é normalizada para `AdapterBinding`;
        entradas malformadas abortam a construção.

        Raises:
            TypeError: Se `adapters` não puder ser normalizado para um mapping.
            MalformedAdapterEntry: Se alguma entrada tiver formato inválido.
        """
        clock = clock or utc_now
        adapter_map = normalize_adapters(adapters)

        bindings: Dict[str, AdapterBinding] = {}
        for port in adapter_map:
            binding = resolve(adapter_map, port)
            if binding is not None:
                bindings[port] = binding

        run_id = id_generator() if id_generator is not None else generate_run_id(clock)
        return cls(
            config=config,
            adapters=bindings,
            metadata={"run_id": run_id, "started_at": clock()},
            clock=clock,
        )

    def _replace(self, **changes: Any) -> "Context":
        return dataclasses.replace(self, **changes)

    # -----------------------------
    # Config
    # -----------------------------
    def get_config(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    # -----------------------------
    # State
    # -----------------------------
    def get_state(self, key: str, default: Any = None) -> Any:
        return self.state.get(key, default)

    def put_state(self, key: str, value: Any) -> "Context":
        return self._replace(state={**self.state, key: value})

    def merge_state(self, updates: Mapping[str, Any]) -> "Context":
        return self._replace(state={**self.state, **updates})

    # -----------------------------
    # Adapters
    # -----------------------------
    def get_adapter(self, port: str) -> Optional[AdapterBinding]:
        return self.adapters.get(port)

    # -----------------------------
    # Metrics
    # -----------------------------
    def record_metric(
        self,
        name: str,
        value: float,
        *,
        step: Optional[int] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> "Context":
        """
        Registra uma métrica ao final do log.

        Quando `step` não é informado, usa `state["global_step"]` (ou 0).
        """
        if step is None:
            step = self.state.get("global_step", 0)

        metric = MetricEvent(
            name=name,
            value=value,
            step=step,
            timestamp=self.clock(),
            metadata=metadata or {},
        )
        return self._replace(metrics=self.metrics + (metric,))

    def metrics_named(self, name: str) -> List[MetricEvent]:
        return [m for m in self.metrics if m.name == name]

    # -----------------------------
    # Metadata
    # -----------------------------
    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def put_metadata(self, key: str, value: Any) -> "Context":
        return self._replace(metadata={**self.metadata, key: value})

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, level: str, message: str, **extra: Any) -> "Context":
        event = {
            "run_id": self.metadata.get("run_id"),
            "stage": self.current_stage,
            "level": level,
            "message": message,
            "timestamp": self.clock().isoformat(),
        }
        event.update(extra)
        return self._replace(events=self.events + (MappingProxyType(event),))

    # -----------------------------
    # Bookkeeping do Interpreter
    # -----------------------------
    def with_stage(self, name: str, opts: Mapping[str, Any]) -> "Context":
        return self._replace(current_stage=name, stage_opts=opts)

    def clear_stage(self) -> "Context":
        return self._replace(current_stage=None, stage_opts=None)

    def with_loop_value(self, loop: str, value: Any) -> "Context":
        return self._replace(loop_values={**self.loop_values, loop: value})

    def without_loop_value(self, loop: str) -> "Context":
        remaining = {k: v for k, v in self.loop_values.items() if k != loop}
        return self._replace(loop_values=remaining)

    def loop_value(self, loop: str, default: Any = None) -> Any:
        """Valor da iteração corrente do Loop `loop` (dentro do corpo do Loop)."""
        return self.loop_values.get(loop, default)
