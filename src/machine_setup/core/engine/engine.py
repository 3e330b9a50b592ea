# src/machine_setup/core/engine/engine.py
"""
Engine de aplicação do machine_setup.

Para cada aplicativo do documento, na ordem de declaração:

1. resolve a dependência (`command` a partir de `source`);
   falha → FAILED, o Handler não é invocado;
   PLANNED (dry run, ferramenta ausente) → APPLIED planejado, sem Handler
2. resolve o Handler no registry; ausente → UNSUPPORTED
3. invoca `handler.apply(settings, mode=..., ctx=...)`; qualquer exceção
   é capturada e convertida em ErrorPayload → FAILED
4. agrega os SettingOutcome em um ApplicationResult

Política de falhas:
- O Engine nunca interrompe a run por causa de um aplicativo.
- O sucesso da run é decidido pelo chamador inspecionando o RunResult.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from machine_setup.core.config.document import ApplicationSpec, ConfigurationDocument
from machine_setup.core.errors import (
    engine_configuration_error,
    exception_to_error,
    handler_not_found,
)
from machine_setup.core.host.resolver import DependencyStatus
from machine_setup.core.pipeline.context import RunContext
from machine_setup.core.pipeline.registry import HandlerRegistry
from machine_setup.core.pipeline.types import (
    ApplicationResult,
    ExecutionMode,
    Outcome,
    SettingOutcome,
    aggregate_outcomes,
)


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma run (um ApplicationResult por aplicativo)."""

    applications: List[ApplicationResult] = field(default_factory=list)
    mode: ExecutionMode = ExecutionMode.APPLY

    @property
    def failed(self) -> List[ApplicationResult]:
        return [a for a in self.applications if a.status == Outcome.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed

    def counts(self) -> Dict[str, int]:
        counter = Counter(a.status.value for a in self.applications)
        return {o.value: counter.get(o.value, 0) for o in Outcome}

    def by_name(self) -> Dict[str, ApplicationResult]:
        return {a.name: a for a in self.applications}


class Engine:
    """Orquestrador sequencial: dependência → Handler → agregação."""

    def __init__(self, *, registry: HandlerRegistry, ctx: RunContext):
        self.registry = registry
        self.ctx = ctx

    def run(
        self,
        document: ConfigurationDocument,
        mode: ExecutionMode = ExecutionMode.APPLY,
    ) -> RunResult:
        self.ctx.log(
            step_id="engine",
            level="info",
            message="run started",
            mode=mode.value,
            applications=len(document),
        )

        results: List[ApplicationResult] = []
        for app in document:
            result = self._run_application(app, mode)
            results.append(result)
            self.ctx.log(
                step_id=app.name,
                level="error" if result.status == Outcome.FAILED else "info",
                message=result.summary,
                status=result.status.value,
            )

        run_result = RunResult(applications=results, mode=mode)
        self.ctx.log(step_id="engine", level="info", message="run finished", **run_result.counts())
        return run_result

    # ------------------------------------------------------------------
    # Por aplicativo
    # ------------------------------------------------------------------

    def _run_application(self, app: ApplicationSpec, mode: ExecutionMode) -> ApplicationResult:
        try:
            status = self.ctx.resolver.ensure_available(app.command, app.source, mode=mode)
        except Exception as e:
            error = exception_to_error(e, application=app.name)
            return ApplicationResult(
                name=app.name,
                status=Outcome.FAILED,
                summary=f"dependency '{app.command}' unavailable: {error.message}",
                error=error.to_dict(),
            )

        if status == DependencyStatus.INSTALLED:
            self.ctx.log(
                step_id=app.name,
                level="info",
                message="dependency installed",
                command=app.command,
                source=app.source,
            )

        if status == DependencyStatus.PLANNED:
            planned = SettingOutcome(
                key="dependency",
                status=Outcome.APPLIED,
                summary=f"would install '{app.command}' from '{app.source}'",
                dry_run=True,
            )
            self.ctx.add_warning(
                step_id=app.name,
                message=f"'{app.command}' is not installed; settings were not inspected",
            )
            return ApplicationResult(
                name=app.name,
                status=Outcome.APPLIED,
                summary=planned.summary,
                settings=[planned],
            )

        handler = self.registry.resolve(app.name)
        if handler is None:
            error = handler_not_found(application=app.name)
            return ApplicationResult(
                name=app.name,
                status=Outcome.UNSUPPORTED,
                summary="no handler for this application",
                error=error.to_dict(),
            )

        try:
            outcomes = handler.apply(app.settings, mode=mode, ctx=self.ctx)
        except Exception as e:
            error = exception_to_error(e, application=app.name)
            return ApplicationResult(
                name=app.name,
                status=Outcome.FAILED,
                summary=error.message,
                error=error.to_dict(),
            )

        if not isinstance(outcomes, list) or not all(isinstance(o, SettingOutcome) for o in outcomes):
            error = engine_configuration_error(
                details={
                    "application": app.name,
                    "expected": "List[SettingOutcome]",
                    "received": type(outcomes).__name__,
                },
            )
            return ApplicationResult(
                name=app.name,
                status=Outcome.FAILED,
                summary=error.message,
                error=error.to_dict(),
            )

        for outcome in outcomes:
            for message in outcome.warnings:
                self.ctx.add_warning(step_id=app.name, message=message)

        aggregated = aggregate_outcomes(outcomes)
        return ApplicationResult(
            name=app.name,
            status=aggregated,
            summary=_summarize(outcomes),
            settings=list(outcomes),
        )


def _summarize(outcomes: List[SettingOutcome]) -> str:
    if not outcomes:
        return "nothing to apply"
    counter = Counter(o.status for o in outcomes)
    parts = [f"{counter[o]} {o.value}" for o in Outcome if counter.get(o)]
    planned = sum(1 for o in outcomes if o.dry_run)
    text = ", ".join(parts)
    if planned:
        text += f" ({planned} planned)"
    return text


def run_document(
    document: ConfigurationDocument,
    *,
    registry: HandlerRegistry,
    ctx: RunContext,
    mode: ExecutionMode = ExecutionMode.APPLY,
) -> RunResult:
    """Atalho funcional para `Engine(registry=..., ctx=...).run(document, mode)`."""
    return Engine(registry=registry, ctx=ctx).run(document, mode)


__all__ = ["Engine", "RunResult", "run_document"]