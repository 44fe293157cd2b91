# src/crucible_kitchen/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Crucible Kitchen.

Componentes principais:
    - MetricEvent → evento de métrica imutável, registrado no Context
    - RunStatus   → enum de estados terminais de uma run

Invariantes:
    - Enums possuem valores textuais canônicos
    - MetricEvent nunca é alterado após registrado
    - Tipos não dependem de engine, ports ou recipes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class RunStatus(str, Enum):
    """
    Estados terminais de uma run.

    Estados definidos:
        - COMPLETED: todos os Steps executados, Context final disponível
        - FAILED: validação ou Stage falhou; Context final descartado

    Estados intermediários (ex.: running) não pertencem a este enum.
    """
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class MetricEvent:
    """
    Evento de métrica registrado durante uma run.

    Campos:
        - name: nome da métrica (ex.: "loss")
        - value: valor numérico
        - step: passo de treino associado
        - timestamp: instante UTC do registro
        - metadata: dados livres associados ao evento
    """
    name: str
    value: float
    step: int
    timestamp: datetime
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "step": self.step,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }
