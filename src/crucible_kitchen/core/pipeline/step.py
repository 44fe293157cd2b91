# src/crucible_kitchen/core/pipeline/step.py
"""
Contrato canônico de handler de Stage do Crucible Kitchen.

Um handler é a lógica executada por um `Stage` do workflow. Ele recebe o
Context corrente e as opções declaradas no Stage, e retorna o Context
atualizado. Para reportar falha, o handler levanta uma exceção: o
Interpreter interrompe a run e anota a falha com o nome do Stage.

Princípios fundamentais:
    - Handlers não conhecem o Interpreter nem a recipe
    - Handlers não controlam ordem de execução
    - Conformidade é garantida por duck typing (@runtime_checkable)
    - I/O bloqueante (chamadas a backends) é permitido e opaco para o core

Limites explícitos:
    - Não define retry, timeout ou cancelamento
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from .context import Context


@runtime_checkable
class StageHandler(Protocol):
    """
    Contrato mínimo de um handler de Stage.

    Pode ser satisfeito por uma classe com `execute` estático/de classe
    ou por uma instância com `execute`.

    Invariantes:
        - O retorno de `execute` é sempre um `Context`
        - Falha é sinalizada por exceção, nunca por retorno parcial
    """

    def execute(self, ctx: Context, opts: Mapping[str, Any]) -> Context:
        """Executa o Stage e retorna o Context atualizado."""
        ...
