# src/machine_setup/core/config/loader.py
"""
Loader canônico do documento de configuração.

Este módulo é responsável por ler o arquivo de configuração do disco,
aplicar a substituição de placeholders e produzir o
`ConfigurationDocument` consumido pelo Engine.

Responsabilidades do módulo:
    - Carregar arquivos em YAML ou JSON
    - Converter erros de sintaxe em `ConfigParseError`
    - Validar requisitos estruturais mínimos (raiz dict, chave `apps`)
    - Interpolar placeholders antes da construção do documento

Invariantes:
    - Qualquer falha aqui é fatal e ocorre antes de qualquer aplicativo
    - Arquivos vazios são interpretados como dicionários vazios

Limites explícitos:
    - Não valida settings específicos de Handlers
    - Não interage com Engine ou Handlers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml  # PyYAML

from .document import ConfigurationDocument
from .errors import (
    ConfigNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .placeholders import substitute_placeholders


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega o arquivo e valida o tipo raiz.

    Raises:
        ConfigNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        ConfigParseError: Se o conteúdo não puder ser interpretado.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists() or not path.is_file():
        raise ConfigNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    try:
        if suffix in {".yaml", ".yml"}:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)

        elif suffix == ".json":
            with path.open("r", encoding="utf-8") as f:
                text = f.read()
            data = json.loads(text) if text.strip() else None

        else:
            raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    except yaml.YAMLError as e:
        raise ConfigParseError(f"YAML inválido em {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"JSON inválido em {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Arquivo não está em UTF-8: {path}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_raw_document(
    path: Union[str, Path],
    *,
    params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Carrega o documento bruto e interpola placeholders (sem construir o modelo)."""
    raw = _load_file(Path(path).expanduser())
    return substitute_placeholders(raw, params)


def load_document(
    path: Union[str, Path],
    *,
    params: Optional[Mapping[str, Any]] = None,
) -> ConfigurationDocument:
    """
    Carrega e resolve o documento de configuração.

    Args:
        path: Caminho do arquivo YAML/JSON.
        params: Valores de placeholders (ex.: nome e e-mail do usuário).

    Returns:
        ConfigurationDocument: Documento imutável pronto para o Engine.

    Raises:
        ConfigError: Qualquer falha estrutural ou de leitura (fatal).
    """
    document, _ = load_document_with_raw(path, params=params)
    return document


def load_document_with_raw(
    path: Union[str, Path],
    *,
    params: Optional[Mapping[str, Any]] = None,
) -> Tuple[ConfigurationDocument, Dict[str, Any]]:
    """Variante de `load_document` que também devolve o dict resolvido (para hashing)."""
    raw = load_raw_document(path, params=params)
    return ConfigurationDocument.from_dict(raw), raw
