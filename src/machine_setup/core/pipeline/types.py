# src/machine_setup/core/pipeline/types.py
"""
Tipos canônicos do motor de aplicação.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Handlers, Engine e relatório da run.

Componentes principais:
    - Outcome          → classificação final (applied, skipped, failed, unsupported)
    - ExecutionMode    → modo explícito de execução (apply, dry_run)
    - SettingOutcome   → resultado imutável de um setting ou passo
    - ApplicationResult → resultado imutável agregado por aplicativo

Invariantes:
    - Enums possuem valores textuais canônicos e estáveis
    - Resultados são imutáveis (frozen)
    - Nenhuma lógica de execução vive neste módulo, exceto a regra de agregação
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class Outcome(str, Enum):
    """
    Classificação final de um setting ou de um aplicativo.

    Estados definidos:
        - APPLIED: ao menos uma mudança foi feita (ou seria feita, em dry run)
        - SKIPPED: o estado real já corresponde ao declarado
        - FAILED: a aplicação falhou (com motivo registrado)
        - UNSUPPORTED: não existe Handler para o aplicativo
    """

    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"


class ExecutionMode(str, Enum):
    """
    Modo de execução da run.

    Em DRY_RUN, toda ação que muda estado (escrever arquivo, invocar
    instalador, gravar config) é pulada; leituras continuam sendo
    executadas para que a classificação skipped/applied seja fiel.
    """

    APPLY = "apply"
    DRY_RUN = "dry_run"

    @property
    def is_dry_run(self) -> bool:
        return self is ExecutionMode.DRY_RUN


@dataclass(frozen=True)
class SettingOutcome:
    """
    Resultado de um setting (ou passo nomeado) produzido por um Handler.

    Campos:
        - key: chave do setting ou nome do passo
        - status: Outcome do setting
        - summary: resumo textual
        - dry_run: True quando a mudança foi apenas planejada
        - warnings: avisos não fatais
        - error: payload de erro serializável (quando FAILED)
    """

    key: str
    status: Outcome
    summary: str = ""
    dry_run: bool = False
    warnings: List[str] = field(default_factory=list)
    error: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ApplicationResult:
    """Resultado agregado de um aplicativo em uma run."""

    name: str
    status: Outcome
    summary: str = ""
    settings: List[SettingOutcome] = field(default_factory=list)
    error: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "summary": self.summary,
            "error": self.error,
            "settings": [
                {
                    "key": s.key,
                    "status": s.status.value,
                    "summary": s.summary,
                    "dry_run": s.dry_run,
                    "warnings": list(s.warnings),
                    "error": s.error,
                }
                for s in self.settings
            ],
        }


def aggregate_outcomes(outcomes: Iterable[SettingOutcome]) -> Outcome:
    """
    Agrega outcomes de settings em um único Outcome de aplicativo.

    Regra:
        - qualquer FAILED → FAILED
        - senão, qualquer APPLIED → APPLIED
        - senão → SKIPPED (inclusive lista vazia)
    """
    statuses = [o.status for o in outcomes]
    if Outcome.FAILED in statuses:
        return Outcome.FAILED
    if Outcome.APPLIED in statuses:
        return Outcome.APPLIED
    return Outcome.SKIPPED
