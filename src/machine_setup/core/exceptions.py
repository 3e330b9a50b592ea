"""
machine_setup: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do machine_setup.

Objetivo:
- Permitir que Handlers/Resolver levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos nas fronteiras críticas

Regras:
- Exceções carregam apenas dados estruturados (serializáveis).
- Nenhuma destas exceções é fatal para a run: o Engine as converte em outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import (
    DEPENDENCY_RESOLUTION_FAILURE,
    ENGINE_EXECUTION_ERROR,
    PRECONDITION_FAILURE,
    SETTING_APPLY_FAILURE,
)


@dataclass(eq=False)
class SetupException(Exception):
    """Base class para exceções internas do machine_setup.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    code: ClassVar[str] = ENGINE_EXECUTION_ERROR

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class DependencyResolutionFailure(SetupException):
    """Comando requerido não está disponível e não pôde ser instalado."""

    code: ClassVar[str] = DEPENDENCY_RESOLUTION_FAILURE


@dataclass(eq=False)
class SettingApplyFailure(SetupException):
    """Falha ao ler, validar ou aplicar um setting (ou um passo de Handler)."""

    code: ClassVar[str] = SETTING_APPLY_FAILURE


@dataclass(eq=False)
class PreconditionFailure(SetupException):
    """Insumo obrigatório ausente; fatal apenas para o aplicativo corrente."""

    code: ClassVar[str] = PRECONDITION_FAILURE


@dataclass(eq=False)
class ProcessExecutionError(SetupException):
    """Processo externo não pôde ser executado ou terminou com status não zero."""

    code: ClassVar[str] = SETTING_APPLY_FAILURE
