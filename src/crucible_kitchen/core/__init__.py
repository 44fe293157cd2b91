# src/crucible_kitchen/core/__init__.py
"""
Core do Crucible Kitchen.

Este pacote reúne as duas partes do sistema com decisões de projeto reais:

    - resolução e validação de ports/adapters (core.ports)
    - modelo de execução de workflows sobre um Context imutável
      (core.pipeline + core.engine)

e a infraestrutura que as sustenta:

    - core.config     → carregamento e merge de configuração
    - core.recipe     → descritor de Recipe e registro por nome
    - core.errors     → payloads canônicos de erro
    - core.exceptions → exceções tipadas

Limites explícitos:
    - Não implementa adapters concretos (backends, datasets, storage)
    - Não executa computação de treino
    - Não gerencia execução distribuída
"""
