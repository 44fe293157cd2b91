"""
Crucible Kitchen — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Crucible Kitchen.

Objetivo:
- Permitir que Resolver/Recipes/Interpreter levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para KitchenErrorPayload
- Separar falhas recuperáveis de run (KitchenException) de erros de programação
  (MalformedAdapterEntry, InvalidWorkflowError)

Regras:
- Exceções devem carregar apenas dados estruturados (serializáveis).
- Erros de programação nunca são convertidos em payload: abortam a construção.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import (
    INCOMPLETE_ADAPTER,
    INVALID_CONFIG,
    MISSING_ADAPTER,
    STAGE_FAILURE,
    KitchenErrorPayload,
)


@dataclass(frozen=True)
class KitchenException(Exception):
    """Base class para exceções internas do Crucible Kitchen.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    code: ClassVar[str] = "KITCHEN_ERROR"

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> KitchenErrorPayload:
        return KitchenErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Ports / Adapters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MissingAdapter(KitchenException):
    """Port obrigatório sem adapter no adapter map."""

    code: ClassVar[str] = MISSING_ADAPTER


@dataclass(frozen=True)
class IncompleteAdapter(KitchenException):
    """Adapter vinculado não satisfaz a interface do port."""

    code: ClassVar[str] = INCOMPLETE_ADAPTER


# ---------------------------------------------------------------------------
# Recipe / Config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvalidConfig(KitchenException):
    """Validação de configuração da recipe falhou."""

    code: ClassVar[str] = INVALID_CONFIG


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StageFailure(KitchenException):
    """Um handler de Stage reportou falha."""

    code: ClassVar[str] = STAGE_FAILURE


EXCEPTIONS_BY_CODE: Dict[str, type] = {
    MISSING_ADAPTER: MissingAdapter,
    INCOMPLETE_ADAPTER: IncompleteAdapter,
    INVALID_CONFIG: InvalidConfig,
    STAGE_FAILURE: StageFailure,
}


def exception_from_payload(payload: KitchenErrorPayload) -> KitchenException:
    """Reconstrói a exceção tipada correspondente a um payload."""
    exc_cls = EXCEPTIONS_BY_CODE.get(payload.type, KitchenException)
    return exc_cls(message=payload.message, details=dict(payload.details), hint=payload.hint)


# ---------------------------------------------------------------------------
# Erros de programação
# ---------------------------------------------------------------------------

class MalformedAdapterEntry(TypeError):
    """Valor do adapter map que não é `Classe` nem `(Classe, opções)`; nunca coletado como erro de run."""


class InvalidWorkflowError(ValueError):
    """
    Exceção levantada quando a árvore de Steps de uma recipe é
    estruturalmente inválida (nomes vazios ou duplicados, handlers sem
    `execute`, Loops sem corpo).
    """
