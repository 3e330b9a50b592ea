# src/machine_setup/core/pipeline/handler.py
"""
Contrato canônico de Handler do machine_setup.

Um Handler implementa a aplicação dos settings de uma família de
aplicativos contra a superfície real de configuração (flags de CLI,
arquivos, documentos estruturados).

Responsabilidades de um Handler:
    - comparar estado desejado vs. estado real para cada setting/passo
    - aplicar apenas o que difere, respeitando o ExecutionMode
    - converter falhas em SettingOutcome FAILED no escopo mais estreito

Princípios fundamentais:
    - Handlers não conhecem o Engine nem o registry
    - Handlers não guardam estado entre aplicativos
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não resolve dependências declaradas no documento (papel do Engine)
    - Não muta o documento de configuração
"""

from __future__ import annotations

from typing import Any, List, Mapping, Protocol, Tuple, runtime_checkable

from .context import RunContext
from .types import ExecutionMode, SettingOutcome


@runtime_checkable
class Handler(Protocol):
    """
    Contrato mínimo de um Handler.

    Atributos obrigatórios:
        - names: nomes de aplicativo atendidos (comparados case-insensitive)

    Invariantes:
        - `apply` retorna sempre uma lista de `SettingOutcome`
        - Em DRY_RUN, nenhuma ação de escrita é executada
    """

    names: Tuple[str, ...]

    def apply(
        self,
        settings: Mapping[str, Any],
        *,
        mode: ExecutionMode,
        ctx: RunContext,
    ) -> List[SettingOutcome]:
        """Aplica os settings e retorna um outcome por setting ou passo."""
        ...
