# src/machine_setup/core/config/hashing.py
"""
Hashing canônico do documento de configuração.

O hash representa a identidade estrutural do documento efetivamente
aplicado (após substituição de placeholders) e é registrado no relatório
da run para rastreabilidade.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Documentos estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def compute_document_hash(document: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico do documento de configuração.

    Args:
        document (Dict[str, Any]): Documento bruto já resolvido.

    Returns:
        str: Hash SHA-256 hexadecimal do documento.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(document, dict):
        raise TypeError(
            f"Documento para hashing deve ser dict, recebido: {type(document).__name__}"
        )

    canonical_json = json.dumps(
        document,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
