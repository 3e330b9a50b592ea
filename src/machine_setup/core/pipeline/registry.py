# src/machine_setup/core/pipeline/registry.py
"""
Registro fechado de Handlers.

Este módulo define o `HandlerRegistry`, que mapeia nomes de aplicativo
para Handlers. O conjunto de Handlers é estático: não existe carregamento
dinâmico de plugins; adicionar um aplicativo significa registrar um novo
Handler, não ampliar uma condicional.

Decisões arquiteturais:
    - A busca é case-insensitive por correspondência exata do nome normalizado
    - `resolve` nunca lança: retorna None para nomes desconhecidos
    - Nomes duplicados são erro fatal no registro

Invariantes:
    - Cada nome normalizado aponta para exatamente um Handler
    - A ordem de registro é preservada
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from machine_setup.core.config.document import normalize_name

from .handler import Handler


class DuplicateHandlerError(ValueError):
    """
    Exceção levantada quando dois Handlers reivindicam o mesmo nome.

    A duplicidade é tratada como erro de construção do registry,
    antes de qualquer run.
    """


@dataclass
class HandlerRegistry:
    """Registro canônico de Handlers, indexado por nome normalizado."""

    _handlers: Dict[str, Handler] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, handler: Handler) -> None:
        names = tuple(getattr(handler, "names", ()) or ())
        if not names:
            raise ValueError("handler.names must contain at least one name")

        keys = []
        for name in names:
            if not isinstance(name, str) or not name.strip():
                raise ValueError("handler names must be non-empty strings")
            key = normalize_name(name)
            if key in self._handlers or key in keys:
                raise DuplicateHandlerError(f"Duplicate handler name: {name}")
            keys.append(key)

        for key in keys:
            self._handlers[key] = handler
            self._order.append(key)

    def resolve(self, name: str) -> Optional[Handler]:
        if not isinstance(name, str):
            return None
        return self._handlers.get(normalize_name(name))

    def names(self) -> List[str]:
        return list(self._order)
