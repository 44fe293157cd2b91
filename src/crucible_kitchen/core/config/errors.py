# src/crucible_kitchen/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Crucible Kitchen.

As exceções aqui definidas representam falhas estruturais de carregamento
e merge de configuração. Falhas semânticas (campo obrigatório ausente,
faixa numérica inválida) pertencem à recipe e são expressas por
`InvalidConfig`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros estruturais de configuração.

    Limites explícitos:
        - Não representa erro de validação da recipe
        - Não representa falha de Stage
    """


class ConfigFileNotFoundError(ConfigError):
    """Arquivo de configuração não encontrado no caminho informado."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - defaults: {"epochs": 1}
        - usuário:  {"epochs": "three"}

    Decisões arquiteturais:
        - `None` em qualquer lado não é conflito (campo "a preencher")
        - `int` e `float` são intercambiáveis
        - Demais divergências de tipo são erro fatal

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
