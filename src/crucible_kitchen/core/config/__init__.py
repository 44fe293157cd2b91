# src/crucible_kitchen/core/config/__init__.py
"""
Camada de configuração do Crucible Kitchen.

Este pacote contém os utilitários responsáveis por carregar e mesclar
a configuração efetiva de uma run de recipe.

A configuração efetiva de uma run é resolvida como:
    defaults da recipe  ←  config do usuário (dict ou arquivo YAML/JSON)

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (YAML/JSON)
    - Resolução de configuração final via deep-merge determinístico

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - A mesma entrada sempre produz a mesma configuração final
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não valida semântica de domínio (responsabilidade de `Recipe.validate_config`)
    - Não executa workflows
"""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "deep_merge",
    "load_config",
]
