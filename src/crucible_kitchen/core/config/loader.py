# src/crucible_kitchen/core/config/loader.py
"""
Leitura de configuração de run a partir de arquivo.

Usado quando o chamador passa um caminho em vez de um dict para
`kitchen.run`/`kitchen.validate`. Os defaults da recipe não são lidos
aqui: o orquestrador os aplica depois, via deep-merge.

Formatos aceitos: YAML (.yaml, .yml) e JSON (.json). Arquivo vazio
equivale a `{}`.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Union
import json

import yaml  # PyYAML

from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


PathLike = Union[str, Path]

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": lambda text: json.loads(text) if text.strip() else None,
}


def load_config(path: PathLike) -> Dict[str, Any]:
    """
    Lê a configuração de usuário de uma run.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for YAML nem JSON.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um mapping.
    """
    source = Path(path)
    parse = _PARSERS.get(source.suffix.lower())
    if parse is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {source.suffix or source.name}")

    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {source}") from e

    data = parse(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"{source.name}: raiz da configuração deve ser um mapping, recebido {type(data).__name__}"
        )
    return data
