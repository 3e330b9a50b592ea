# src/machine_setup/core/host/resolver.py
"""
Resolução de dependências: garante que um comando existe no host.

O Engine chama `ensure_available(command, source, mode=...)` uma vez por
aplicativo antes do Handler. Handlers que precisam de uma ferramenta
adicional podem chamá-lo novamente via `ctx.resolver`.

Política (v1):
    - Presença verificada com `shutil.which`
    - Ausente → executa o template de instalação (winget por padrão),
      com `{source}` e `{command}` interpolados
    - Em DRY_RUN nada é instalado; o status retornado é PLANNED
    - Após instalar, a presença é verificada de novo

Invariantes:
    - Qualquer falha vira `DependencyResolutionFailure`
"""

from __future__ import annotations

import shutil
from enum import Enum
from typing import Callable, Optional, Sequence

from machine_setup.core.exceptions import DependencyResolutionFailure, ProcessExecutionError
from machine_setup.core.pipeline.types import ExecutionMode

from .process import ProcessRunner


DEFAULT_INSTALL_COMMAND = (
    "winget",
    "install",
    "--id",
    "{source}",
    "--exact",
    "--silent",
    "--accept-source-agreements",
    "--accept-package-agreements",
)


class DependencyStatus(str, Enum):
    """Estado de uma dependência após a resolução."""

    PRESENT = "present"
    INSTALLED = "installed"
    PLANNED = "planned"


class DependencyResolver:
    """Resolvedor padrão baseado em `shutil.which` + comando de instalação."""

    def __init__(
        self,
        *,
        runner: Optional[ProcessRunner] = None,
        install_command: Sequence[str] = DEFAULT_INSTALL_COMMAND,
        which: Callable[[str], Optional[str]] = shutil.which,
    ):
        self.runner = runner or ProcessRunner()
        self.install_command = tuple(install_command)
        self.which = which

    def is_available(self, command: str) -> bool:
        return self.which(command) is not None

    def ensure_available(
        self,
        command: str,
        source: str,
        *,
        mode: ExecutionMode = ExecutionMode.APPLY,
    ) -> DependencyStatus:
        if not isinstance(command, str) or not command.strip():
            raise DependencyResolutionFailure(
                message="dependency command must be a non-empty string",
                details={"command": command, "source": source},
            )

        if self.is_available(command):
            return DependencyStatus.PRESENT

        if mode.is_dry_run:
            return DependencyStatus.PLANNED

        argv = [part.format(source=source, command=command) for part in self.install_command]
        try:
            self.runner.run(argv).check()
        except ProcessExecutionError as e:
            raise DependencyResolutionFailure(
                message=f"could not install '{command}' from '{source}': {e.message}",
                details={"command": command, "source": source, **e.details},
                hint="Verifique o identificador da fonte de instalação.",
            ) from e

        if not self.is_available(command):
            raise DependencyResolutionFailure(
                message=f"'{command}' still not found after installing '{source}'",
                details={"command": command, "source": source},
                hint="Reabra o terminal para atualizar o PATH e reexecute.",
            )

        return DependencyStatus.INSTALLED
