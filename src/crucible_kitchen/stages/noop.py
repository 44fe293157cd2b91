# src/crucible_kitchen/stages/noop.py
"""
Handler de Stage que não faz nada.

Usado como placeholder em recipes cujos Stages ainda não têm
implementação concreta, e em testes estruturais do Interpreter.
"""

from __future__ import annotations

from typing import Any, Mapping

from crucible_kitchen.core.pipeline.context import Context


class Noop:
    """Retorna o Context recebido sem alterações."""

    @staticmethod
    def execute(ctx: Context, opts: Mapping[str, Any]) -> Context:
        return ctx
