# src/machine_setup/core/traceability/report.py
"""
Relatório persistível de uma run.

O relatório consolida, em uma estrutura JSON serializável:
    - identidade da run (run_id, created_at, modo)
    - hash canônico do documento aplicado
    - um resultado por aplicativo (com outcomes por setting)
    - eventos de log estruturados e warnings do RunContext

Decisões arquiteturais:
    - O formato de persistência é JSON
    - A ordenação de chaves é estável (`sort_keys=True`)
    - Diretórios intermediários são criados automaticamente

Limites explícitos:
    - Não é lido de volta pelo Engine (não há histórico nem diff entre runs)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from machine_setup.core.engine.engine import RunResult
from machine_setup.core.pipeline.context import RunContext


REPORT_SCHEMA_VERSION = "1"


def build_run_report(
    result: RunResult,
    ctx: RunContext,
    *,
    document_hash: Optional[str] = None,
) -> Dict[str, Any]:
    """Monta a representação serializável de uma run."""
    return {
        "schema_version": REPORT_SCHEMA_VERSION,
        "run_id": ctx.run_id,
        "created_at": ctx.created_at.isoformat(),
        "mode": result.mode.value,
        "document_hash": document_hash,
        "ok": result.ok,
        "counts": result.counts(),
        "applications": [a.to_dict() for a in result.applications],
        "warnings": {k: list(v) for k, v in ctx.warnings.items()},
        "events": list(ctx.events),
        "meta": dict(ctx.meta),
    }


def save_run_report(report: Dict[str, Any], path: Path) -> None:
    """
    Persiste o relatório em disco no formato JSON.

    Raises:
        OSError: Em caso de falha ao criar diretórios ou escrever o arquivo.
        TypeError: Se o conteúdo não for serializável em JSON.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
