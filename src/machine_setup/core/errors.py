"""
machine_setup: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros registrados nos outcomes.
Erros por aplicativo ou por setting nunca são propagados pelo Engine:
são convertidos em `ErrorPayload` e anexados ao resultado, devendo ser:

- explícitos
- serializáveis
- acionáveis
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

DEPENDENCY_RESOLUTION_FAILURE = "DEPENDENCY_RESOLUTION_FAILURE"
HANDLER_NOT_FOUND = "HANDLER_NOT_FOUND"
SETTING_APPLY_FAILURE = "SETTING_APPLY_FAILURE"
PRECONDITION_FAILURE = "PRECONDITION_FAILURE"

ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def handler_not_found(
    *,
    application: str,
    hint: str = "Verifique o nome do aplicativo ou remova-o do documento.",
) -> ErrorPayload:
    return ErrorPayload(
        type=HANDLER_NOT_FOUND,
        message=f"No handler registered for '{application}'",
        details={"application": application},
        hint=hint,
    )


def engine_execution_error(
    *,
    application: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique os eventos da run para diagnosticar a falha. Reexecute após corrigir.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=exc_message or "Unexpected failure while applying settings",
        details={
            "application": application,
            "exc_type": exc_type,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Handler returned an invalid result",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Ajuste o Handler para retornar uma lista de SettingOutcome.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )


def exception_to_error(exc: BaseException, *, application: Optional[str] = None) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - SetupException: já vem com message/details/hint; o código vem da classe.
    - Outras exceções: encapsular como ENGINE_EXECUTION_ERROR sem stack trace.
    """
    # import local: exceptions depende deste módulo para os códigos
    from .exceptions import SetupException

    if isinstance(exc, SetupException):
        details = dict(exc.details or {})
        if application is not None:
            details.setdefault("application", application)
        return ErrorPayload(
            type=exc.code,
            message=exc.message or "Execution error",
            details=details,
            hint=exc.hint,
        )

    return engine_execution_error(
        application=application,
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or None,
    )
