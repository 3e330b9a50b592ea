# src/machine_setup/core/config/__init__.py
"""
Camada de configuração do machine_setup.

Responsabilidades do pacote:
    - Carregamento do documento (YAML/JSON) com erros tipados e fatais
    - Substituição de placeholders antes do Engine
    - Modelo imutável (`ConfigurationDocument`, `ApplicationSpec`)
    - Hash canônico do documento para rastreabilidade

Limites explícitos:
    - Não valida semântica de settings (responsabilidade de cada Handler)
    - Não executa Handlers
"""

from .document import ApplicationSpec, ConfigurationDocument, normalize_name
from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_document_hash
from .loader import load_document, load_document_with_raw, load_raw_document
from .placeholders import parse_param_pairs, substitute_placeholders

__all__ = [
    "ApplicationSpec",
    "ConfigurationDocument",
    "normalize_name",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_document_hash",
    "load_document",
    "load_document_with_raw",
    "load_raw_document",
    "parse_param_pairs",
    "substitute_placeholders",
]
