"""
Crucible Kitchen — Canonical Error Structures (v1)

Erros são artefatos de domínio serializáveis, retornados ao chamador.
Erros de validação (adapters e config) são coletados antes de qualquer Stage
executar; falhas de Stage interrompem a run imediatamente.
Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KitchenErrorPayload:
    """
    Payload canônico de erro do Crucible Kitchen.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Ports / Adapters
MISSING_ADAPTER = "MISSING_ADAPTER"
INCOMPLETE_ADAPTER = "INCOMPLETE_ADAPTER"

# Recipe / Config
INVALID_CONFIG = "INVALID_CONFIG"

# Interpreter / Execução
STAGE_FAILURE = "STAGE_FAILURE"
INVALID_STAGE_RESULT = "INVALID_STAGE_RESULT"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def _qualname(obj: Any) -> str:
    module = getattr(obj, "__module__", None)
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)
    return f"{module}.{name}" if module else name


def missing_adapter(
    *,
    port: str,
    hint: str = "Declare o adapter no adapter map passado para a run (ex.: {port: MinhaImplementacao}).",
) -> KitchenErrorPayload:
    return KitchenErrorPayload(
        type=MISSING_ADAPTER,
        message=f"Adapter obrigatório ausente: {port}",
        details={"port": port},
        hint=hint,
    )


def incomplete_adapter(
    *,
    port: str,
    implementation: Any,
    missing: List[str],
    hint: str = "Faça a implementação herdar explicitamente da interface do port e implemente as operações ausentes.",
) -> KitchenErrorPayload:
    return KitchenErrorPayload(
        type=INCOMPLETE_ADAPTER,
        message=f"Adapter não satisfaz a interface do port: {port}",
        details={
            "port": port,
            "implementation": _qualname(implementation),
            "missing": list(missing),
        },
        hint=hint,
    )


def invalid_config(
    *,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Ajuste a configuração do usuário; os defaults da recipe não suprem este campo.",
) -> KitchenErrorPayload:
    return KitchenErrorPayload(
        type=INVALID_CONFIG,
        message=message,
        details=dict(details or {}),
        hint=hint,
    )


def stage_failure(
    *,
    stage: str,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    loop_path: Optional[List[Dict[str, Any]]] = None,
    reason_details: Optional[Dict[str, Any]] = None,
    hint: str = "Verifique o handler do Stage e o adapter invocado. Nenhum retry é aplicado automaticamente.",
) -> KitchenErrorPayload:
    details: Dict[str, Any] = {
        "stage": stage,
        "exc_type": exc_type,
        "exc_message": exc_message,
        "loop_path": list(loop_path or []),
    }
    if reason_details:
        details["reason_details"] = dict(reason_details)
    return KitchenErrorPayload(
        type=STAGE_FAILURE,
        message=f"Stage falhou: {stage}",
        details=details,
        hint=hint,
    )


def invalid_stage_result(
    *,
    stage: str,
    received: str,
    loop_path: Optional[List[Dict[str, Any]]] = None,
    hint: str = "Ajuste o handler para retornar o Context atualizado (ou levantar exceção em caso de falha).",
) -> KitchenErrorPayload:
    return KitchenErrorPayload(
        type=INVALID_STAGE_RESULT,
        message=f"Stage retornou tipo inválido: {stage}",
        details={
            "stage": stage,
            "expected": "Context",
            "received": received,
            "loop_path": list(loop_path or []),
        },
        hint=hint,
    )
