# tests/core/engine/test_engine_isolation.py
"""
Testes de isolamento de falhas do Engine.

Os testes asseguram que:
- falha de dependência marca o aplicativo como FAILED sem invocar o Handler
- exceções levantadas por um Handler são capturadas e convertidas em ErrorPayload
- retorno inválido de um Handler é FAILED com ENGINE_CONFIGURATION_ERROR
- um setting FAILED torna o aplicativo FAILED sem esconder os demais settings
- em todos os casos, o aplicativo seguinte continua sendo processado

Invariantes:
    - O Engine nunca interrompe a run por causa de um aplicativo
    - `RunResult.ok` é False se e somente se algum aplicativo for FAILED
"""

import pytest

from machine_setup.core.config.document import ConfigurationDocument
from machine_setup.core.engine.engine import Engine, run_document
from machine_setup.core.exceptions import SettingApplyFailure
from machine_setup.core.pipeline.registry import HandlerRegistry
from machine_setup.core.pipeline.types import Outcome, SettingOutcome


class StaticHandler:
    def __init__(self, name, outcomes=None, error=None, raw=None):
        self.names = (name,)
        self._outcomes = outcomes or []
        self._error = error
        self._raw = raw
        self.calls = 0

    def apply(self, settings, *, mode, ctx):
        self.calls += 1
        if self._error is not None:
            raise self._error
        if self._raw is not None:
            return self._raw
        return list(self._outcomes)


def _registry(*handlers):
    registry = HandlerRegistry()
    for h in handlers:
        registry.add(h)
    return registry


def _document(*names):
    return ConfigurationDocument.from_dict(
        {"apps": {n: {"command": n, "source": f"Vendor.{n}"} for n in names}}
    )


def _ok(name):
    return StaticHandler(name, outcomes=[SettingOutcome(key="k", status=Outcome.APPLIED)])


def test_dependency_failure_skips_handler_and_continues(dummy_ctx, fake_resolver):
    fake_resolver.failing.add("first")
    first, second = _ok("first"), _ok("second")

    result = Engine(registry=_registry(first, second), ctx=dummy_ctx).run(_document("first", "second"))

    by_name = result.by_name()
    assert by_name["first"].status == Outcome.FAILED
    assert "cannot install first" in by_name["first"].summary
    assert by_name["first"].error["type"] == "DEPENDENCY_RESOLUTION_FAILURE"
    assert first.calls == 0
    assert by_name["second"].status == Outcome.APPLIED
    assert second.calls == 1
    assert not result.ok


def test_raising_handler_is_isolated(dummy_ctx):
    """
    Verifica que uma exceção inesperada no Handler vira FAILED com
    ENGINE_EXECUTION_ERROR, sem stack trace no payload, e que o
    aplicativo seguinte é executado.
    """
    boom = StaticHandler("boom", error=RuntimeError("kaboom"))
    after = _ok("after")

    result = Engine(registry=_registry(boom, after), ctx=dummy_ctx).run(_document("boom", "after"))

    failed = result.by_name()["boom"]
    assert failed.status == Outcome.FAILED
    assert failed.summary == "kaboom"
    assert failed.error["type"] == "ENGINE_EXECUTION_ERROR"
    assert failed.error["details"] == {"application": "boom", "exc_type": "RuntimeError"}
    assert result.by_name()["after"].status == Outcome.APPLIED
    assert [a.name for a in result.failed] == ["boom"]


def test_typed_handler_error_keeps_its_code(dummy_ctx):
    handler = StaticHandler("typed", error=SettingApplyFailure(message="bad shape", details={"key": "x"}))
    result = Engine(registry=_registry(handler), ctx=dummy_ctx).run(_document("typed"))
    app = result.applications[0]
    assert app.error["type"] == "SETTING_APPLY_FAILURE"
    assert app.error["details"] == {"key": "x", "application": "typed"}


@pytest.mark.parametrize("raw", [None, "done", [{"key": "k"}], ("tuple",)])
def test_invalid_handler_result_is_failed(dummy_ctx, raw):
    handler = StaticHandler("weird", raw=raw if raw is not None else 42)
    result = Engine(registry=_registry(handler), ctx=dummy_ctx).run(_document("weird"))
    app = result.applications[0]
    assert app.status == Outcome.FAILED
    assert app.error["type"] == "ENGINE_CONFIGURATION_ERROR"


def test_one_failed_setting_fails_application(dummy_ctx):
    handler = StaticHandler(
        "mixed",
        outcomes=[
            SettingOutcome(key="a", status=Outcome.APPLIED),
            SettingOutcome(key="b", status=Outcome.FAILED, summary="nope"),
            SettingOutcome(key="c", status=Outcome.SKIPPED),
        ],
    )
    result = run_document(_document("mixed"), registry=_registry(handler), ctx=dummy_ctx)

    app = result.applications[0]
    assert app.status == Outcome.FAILED
    assert [s.key for s in app.settings] == ["a", "b", "c"]
    assert app.summary == "1 applied, 1 skipped, 1 failed"


def test_setting_warnings_are_collected_per_application(dummy_ctx):
    handler = StaticHandler(
        "warn",
        outcomes=[SettingOutcome(key="t", status=Outcome.SKIPPED, warnings=["file missing"])],
    )
    result = Engine(registry=_registry(handler), ctx=dummy_ctx).run(_document("warn"))
    assert result.ok
    assert dummy_ctx.warnings == {"warn": ["file missing"]}


def test_failures_are_logged_as_errors(dummy_ctx):
    Engine(registry=_registry(StaticHandler("boom", error=ValueError("x"))), ctx=dummy_ctx).run(_document("boom"))
    levels = {e["step_id"]: e["level"] for e in dummy_ctx.events if e["step_id"] == "boom"}
    assert levels == {"boom": "error"}
