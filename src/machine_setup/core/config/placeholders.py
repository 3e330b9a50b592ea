# src/machine_setup/core/config/placeholders.py
"""
Substituição de placeholders no documento bruto.

Valores específicos do usuário (nome, e-mail, caminhos) podem ser
declarados no documento como placeholders e resolvidos no momento da
invocação, antes que o Engine receba o documento.

Política de substituição:
    - Sintaxe de `string.Template`: `$name` ou `${name}`
    - Apenas valores `str` são interpolados (chaves não são tocadas)
    - Estruturas aninhadas (dict/list) são percorridas recursivamente
    - Placeholders desconhecidos permanecem literais (`safe_substitute`)

Invariantes:
    - O input nunca é mutado; uma nova estrutura é retornada
"""

from __future__ import annotations

from string import Template
from typing import Any, Mapping, Optional


def _substitute(value: Any, params: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return Template(value).safe_substitute(params)
    if isinstance(value, dict):
        return {k: _substitute(v, params) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute(v, params) for v in value]
    return value


def substitute_placeholders(raw: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
    """Retorna uma cópia de `raw` com os placeholders de `params` interpolados."""
    if not params:
        return _substitute(raw, {})
    str_params = {str(k): str(v) for k, v in params.items()}
    return _substitute(raw, str_params)


def parse_param_pairs(pairs: Optional[list]) -> dict:
    """
    Converte pares `KEY=VALUE` (como recebidos da CLI) em um dicionário.

    Raises:
        ValueError: Se algum item não contiver `=` ou tiver chave vazia.
    """
    params: dict = {}
    for item in pairs or []:
        key, sep, value = str(item).partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Parâmetro inválido (esperado KEY=VALUE): {item!r}")
        params[key] = value
    return params
