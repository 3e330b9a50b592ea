"""Handler canônico: office (instalação one-shot via ferramenta de deployment, v1).

Diferente dos demais Handlers, os settings deste aplicativo descrevem uma
única ação de instalação, e não N settings independentes: o resultado é
sempre um único outcome (`install`).

Contrato:
- `configurationFile` (arquivo XML de respostas) deve existir; ausência é
  PreconditionFailure, fatal apenas para este aplicativo
- `setupPath` (executável da ferramenta de deployment) deve existir
- invoca `<setupPath> /configure <configurationFile>` de forma síncrona,
  com o diretório do XML como `cwd` do processo filho
- status não zero ou erro de execução → FAILED; senão → APPLIED
- `installedMarker` (opcional): caminho cuja existência indica instalação
  prévia → SKIPPED

Limites explícitos:
- NÃO altera o diretório de trabalho do processo corrente
- NÃO valida o conteúdo do XML
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Tuple

from machine_setup.core.exceptions import PreconditionFailure
from machine_setup.core.pipeline.context import RunContext
from machine_setup.core.pipeline.types import ExecutionMode, SettingOutcome

from .base import applied, failed, optional_str, require_str, skipped


def _existing_file(settings: Mapping[str, Any], key: str, label: str) -> Path:
    path = Path(require_str(settings, key)).expanduser()
    if not path.is_file():
        raise PreconditionFailure(
            message=f"{label} not found: {path}",
            details={"key": key, "path": str(path)},
            hint=f"Ajuste '{key}' no documento para um arquivo existente.",
        )
    return path.resolve()


@dataclass
class OfficeDeploymentHandler:
    """Instala a suíte via ferramenta de deployment + XML de respostas."""

    names: Tuple[str, ...] = ("office", "microsoft-office")
    timeout: float = 3600.0

    def apply(
        self,
        settings: Mapping[str, Any],
        *,
        mode: ExecutionMode,
        ctx: RunContext,
    ) -> List[SettingOutcome]:
        # precondições: propagadas ao Engine como falha do aplicativo inteiro
        answer_file = _existing_file(settings, "configurationFile", "answer file")
        setup = _existing_file(settings, "setupPath", "deployment tool")

        marker = optional_str(settings, "installedMarker")
        if marker and Path(marker).expanduser().exists():
            return [skipped("install", f"already installed ({marker} exists)")]

        if mode.is_dry_run:
            return [applied("install", f"run {setup.name} /configure {answer_file.name}", dry_run=True)]

        try:
            ctx.runner.run(
                [str(setup), "/configure", str(answer_file)],
                cwd=answer_file.parent,
                timeout=self.timeout,
            ).check()
        except Exception as e:
            ctx.log(
                step_id="office",
                level="error",
                message="deployment tool failed",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
            return [failed("install", e, application="office")]

        ctx.log(step_id="office", level="info", message="deployment tool finished", answer_file=str(answer_file))
        return [applied("install", f"ran {setup.name} /configure {answer_file.name}", dry_run=False)]
