# tests/core/host/test_process_runner.py
"""
Testes da fronteira de processos (ProcessRunner).

Usa o próprio interpretador Python como processo filho para validar:
- captura de stdout/stderr e status de saída
- `cwd` aplicado ao processo filho sem alterar o diretório corrente
- conversão de executável ausente em `ProcessExecutionError`
- `check()` levantando em status não zero
"""

import os
import sys
from pathlib import Path

import pytest

from machine_setup.core.exceptions import ProcessExecutionError
from machine_setup.core.host.process import ProcessResult, ProcessRunner


def test_captures_output_and_status():
    result = ProcessRunner().run([sys.executable, "-c", "import sys; print('out'); sys.exit(3)"])
    assert result.returncode == 3
    assert result.stdout.strip() == "out"
    assert not result.ok


def test_cwd_is_scoped_to_child(tmp_path: Path):
    """
    Verifica que o diretório de trabalho é passado ao processo filho
    e que o diretório do processo corrente permanece inalterado.
    """
    before = os.getcwd()
    result = ProcessRunner().run([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()
    assert os.getcwd() == before


def test_missing_executable_raises():
    with pytest.raises(ProcessExecutionError, match="executable not found"):
        ProcessRunner().run(["definitely-not-a-real-binary-4242"])


def test_timeout_raises():
    with pytest.raises(ProcessExecutionError, match="timed out"):
        ProcessRunner(timeout=0.5).run([sys.executable, "-c", "import time; time.sleep(5)"])


def test_check_raises_with_diagnostic():
    result = ProcessResult(args=["git", "config"], returncode=128, stderr="fatal: bad config\n")
    with pytest.raises(ProcessExecutionError) as exc_info:
        result.check()
    assert "fatal: bad config" in exc_info.value.message
    assert exc_info.value.details["returncode"] == 128
    assert ProcessResult(args=["true"], returncode=0).check().ok
