# src/machine_setup/core/host/process.py
"""
Fronteira com processos externos.

Todo efeito via ferramenta externa (git, instaladores, listagem de fontes)
passa por `ProcessRunner.run`, o que permite substituí-lo por um fake em
testes e concentra a política de invocação em um único lugar.

Decisões arquiteturais:
    - Argumentos sempre em lista, sem shell
    - Saída capturada em modo texto
    - O diretório de trabalho do processo filho é passado via `cwd`;
      o diretório do processo corrente nunca é alterado
    - Timeout opcional aplicado na fronteira da invocação

Invariantes:
    - Executável ausente, timeout e erro de SO viram `ProcessExecutionError`
    - Status não zero NÃO levanta por padrão; o chamador decide via `check()`
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from machine_setup.core.exceptions import ProcessExecutionError


@dataclass(frozen=True)
class ProcessResult:
    """Resultado de uma invocação de processo externo."""

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def diagnostic(self) -> str:
        text = (self.stderr or "").strip() or (self.stdout or "").strip()
        return text or f"exit status {self.returncode}"

    def check(self) -> "ProcessResult":
        if not self.ok:
            raise ProcessExecutionError(
                message=f"{self.args[0] if self.args else 'process'} failed: {self.diagnostic()}",
                details={
                    "args": list(self.args),
                    "returncode": self.returncode,
                },
            )
        return self


class ProcessRunner:
    """Executor síncrono de processos externos."""

    def __init__(self, *, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        argv = [str(a) for a in args]
        if not argv:
            raise ProcessExecutionError(message="empty command line", details={})

        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                timeout=timeout if timeout is not None else self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ProcessExecutionError(
                message=f"executable not found: {argv[0]}",
                details={"args": argv},
                hint="Instale a ferramenta ou declare-a no documento de configuração.",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ProcessExecutionError(
                message=f"{argv[0]} timed out after {e.timeout}s",
                details={"args": argv, "timeout": e.timeout},
            ) from e
        except OSError as e:
            raise ProcessExecutionError(
                message=f"could not execute {argv[0]}: {e}",
                details={"args": argv},
            ) from e

        return ProcessResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
