# tests/core/config/test_loader.py
"""
Testes do carregador de configuração de usuário (load_config).

Os testes asseguram que:
- YAML e JSON são aceitos
- o arquivo é obrigatório
- formatos não suportados e raízes não-dict são rejeitados

Limites explícitos:
    - Não valida semântica de domínio (responsabilidade da recipe)
"""

import json

import pytest

try:
    from crucible_kitchen.core.config.loader import load_config
    from crucible_kitchen.core.config.errors import (
        ConfigFileNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    ConfigFileNotFoundError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config loader modules. Implement:\n"
            "- src/crucible_kitchen/core/config/loader.py (load_config)\n"
            "- src/crucible_kitchen/core/config/errors.py (typed config errors)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_loads_yaml_file(tmp_path):
    _require_imports()
    path = tmp_path / "run.yaml"
    path.write_text("model: llama\nepochs: 3\nlora:\n  rank: 8\n", encoding="utf-8")

    assert load_config(path) == {"model": "llama", "epochs": 3, "lora": {"rank": 8}}


def test_loads_json_file(tmp_path):
    _require_imports()
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"model": "llama", "batch_size": 8}), encoding="utf-8")

    assert load_config(str(path)) == {"model": "llama", "batch_size": 8}


def test_empty_yaml_is_empty_dict(tmp_path):
    _require_imports()
    path = tmp_path / "run.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}


def test_empty_json_is_empty_dict(tmp_path):
    _require_imports()
    path = tmp_path / "run.json"
    path.write_text("  \n", encoding="utf-8")

    assert load_config(path) == {}


def test_missing_file_raises(tmp_path):
    _require_imports()
    with pytest.raises(ConfigFileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_unsupported_format_raises(tmp_path):
    _require_imports()
    path = tmp_path / "run.toml"
    path.write_text("epochs = 3\n", encoding="utf-8")

    with pytest.raises(UnsupportedConfigFormatError):
        load_config(path)


def test_non_dict_root_raises(tmp_path):
    _require_imports()
    path = tmp_path / "run.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_config(path)
