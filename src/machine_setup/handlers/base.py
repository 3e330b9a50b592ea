"""Helpers compartilhados pelos Handlers concretos.

- leitura tipada de settings (falha com SettingApplyFailure em shape errado)
- conversão de exceções em SettingOutcome FAILED
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from machine_setup.core.errors import exception_to_error
from machine_setup.core.exceptions import SettingApplyFailure
from machine_setup.core.pipeline.types import Outcome, SettingOutcome


def require_str(settings: Mapping, key: str) -> str:
    value = settings.get(key)
    if not isinstance(value, str) or not value.strip():
        raise SettingApplyFailure(
            message=f"setting '{key}' must be a non-empty string",
            details={"key": key, "received": type(value).__name__},
        )
    return value


def optional_str(settings: Mapping, key: str, default: Optional[str] = None) -> Optional[str]:
    value = settings.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise SettingApplyFailure(
            message=f"setting '{key}' must be a string",
            details={"key": key, "received": type(value).__name__},
        )
    return value if value.strip() else default


def failed(key: str, exc: BaseException, *, application: Optional[str] = None) -> SettingOutcome:
    error = exception_to_error(exc, application=application)
    details = dict(error.details)
    details.setdefault("key", key)
    payload = error.to_dict()
    payload["details"] = details
    return SettingOutcome(
        key=key,
        status=Outcome.FAILED,
        summary=error.message,
        error=payload,
    )


def applied(key: str, summary: str, *, dry_run: bool, warnings: Optional[list] = None) -> SettingOutcome:
    return SettingOutcome(
        key=key,
        status=Outcome.APPLIED,
        summary=f"would {summary}" if dry_run else summary,
        dry_run=dry_run,
        warnings=list(warnings or []),
    )


def skipped(key: str, summary: str, *, warnings: Optional[list] = None) -> SettingOutcome:
    return SettingOutcome(
        key=key,
        status=Outcome.SKIPPED,
        summary=summary,
        warnings=list(warnings or []),
    )
