# src/machine_setup/core/pipeline/context.py
"""
Contexto de execução compartilhado de uma run.

Este módulo define o `RunContext`, a estrutura canônica passada a todos
os Handlers durante a run. Ele concentra os colaboradores de host
(executor de processos e resolvedor de dependências) e a observabilidade
estruturada (eventos de log e warnings por aplicativo).

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - O modo de execução NÃO vive aqui: é passado explicitamente
    - Logs são eventos estruturados, não strings livres

Invariantes:
    - Logs sempre incluem `run_id` e `step_id`
    - Warnings são agrupados por `step_id` (nome do aplicativo)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from machine_setup.core.host.process import ProcessRunner
from machine_setup.core.host.resolver import DependencyResolver


def _new_run_id() -> str:
    return uuid.uuid4().hex


@dataclass
class RunContext:
    """
    Contexto de uma run do machine_setup.

    Campos:
        - run_id, created_at: identidade da execução
        - runner: fronteira com processos externos
        - resolver: resolução de dependências (também usada por Handlers que
          precisam de uma ferramenta adicional)
        - meta: metadados livres (ex.: caminho do documento)
        - events / warnings: observabilidade estruturada
    """

    runner: ProcessRunner = field(default_factory=ProcessRunner)
    resolver: Optional[DependencyResolver] = None
    run_id: str = field(default_factory=_new_run_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        if self.resolver is None:
            self.resolver = DependencyResolver(runner=self.runner)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)
