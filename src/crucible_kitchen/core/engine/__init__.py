# src/crucible_kitchen/core/engine/__init__.py
"""
Engine do Crucible Kitchen.

Este pacote contém o Interpreter, responsável por executar o workflow de
uma recipe sobre um Context, Step a Step.

Princípios fundamentais:
    - Execução estritamente sequencial, em profundidade
    - Primeira falha encerra a run (sem retry, sem commit parcial)
    - Nenhuma decisão silenciosa: toda falha retorna ao chamador

Limites explícitos:
    - Não valida config nem adapters (responsabilidade do orquestrador)
    - Não contém lógica de treino
"""

from .interpreter import Interpreter, RunResult, run_workflow

__all__ = ["Interpreter", "RunResult", "run_workflow"]
