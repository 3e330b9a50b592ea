"""
Fixtures compartilhados para testes do machine_setup.

Este módulo define fixtures reutilizáveis que fornecem:
- um executor de processos fake (git config global, fontes, instaladores)
- um resolvedor de dependências fake
- um RunContext isolado ligado a esses fakes
- documentos de configuração representativos

O objetivo destas fixtures é permitir testes do core e dos Handlers sem
depender de ferramentas reais instaladas no host (git, winget,
oh-my-posh, ferramenta de deployment do Office).

Decisões arquiteturais:
    - Fakes registram todas as chamadas para asserções de efeitos colaterais
    - Efeitos de arquivo usam `tmp_path` do pytest
    - O modo de execução é sempre passado explicitamente pelos testes

Limites explícitos:
    - Não substituir testes de integração com ferramentas reais
    - Não conter lógica de domínio dos Handlers
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Tuple, Union

import pytest

from machine_setup.core.exceptions import DependencyResolutionFailure
from machine_setup.core.host.process import ProcessResult
from machine_setup.core.host.resolver import DependencyStatus
from machine_setup.core.pipeline.context import RunContext
from machine_setup.core.pipeline.types import ExecutionMode


# =====================================================
# Host fakes
# =====================================================

Route = Union[ProcessResult, Exception, Callable[[List[str], Any], ProcessResult]]


class FakeRunner:
    """
    Executor de processos fake com um store de `git config --global` em memória.

    Comportamentos embutidos:
        - `git config --global --get <key>` → valor ou status 1
        - `git config --global <key> <value>` → grava no store
        - `list-fonts` / `fc-list` → uma família por linha (`self.fonts`)
        - `oh-my-posh font install <name>` → adiciona `<name>` em `self.fonts`
        - qualquer outro comando → status 0

    Rotas explícitas (`route`) têm precedência e permitem simular falhas.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.git_config: Dict[str, str] = {}
        self.fonts: List[str] = []
        self._routes: List[Tuple[Tuple[str, ...], Route]] = []

    def route(self, prefix: Sequence[str], target: Route) -> None:
        self._routes.append((tuple(prefix), target))

    def run(self, args, *, cwd=None, timeout=None) -> ProcessResult:
        argv = [str(a) for a in args]
        self.calls.append({"args": argv, "cwd": cwd, "timeout": timeout})

        for prefix, target in reversed(self._routes):
            if tuple(argv[: len(prefix)]) == prefix:
                if isinstance(target, Exception):
                    raise target
                if isinstance(target, ProcessResult):
                    return target
                return target(argv, cwd)

        if argv[:3] == ["git", "config", "--global"]:
            return self._git(argv)
        if argv[:1] in (["list-fonts"], ["fc-list"]):
            return ProcessResult(argv, 0, "".join(f"{f}\n" for f in self.fonts))
        if argv[:3] == ["oh-my-posh", "font", "install"]:
            self.fonts.append(argv[3])
            return ProcessResult(argv, 0, "installed\n")
        return ProcessResult(argv, 0)

    def _git(self, argv: List[str]) -> ProcessResult:
        if argv[3] == "--get":
            key = argv[4]
            if key not in self.git_config:
                return ProcessResult(argv, 1)
            return ProcessResult(argv, 0, self.git_config[key] + "\n")
        self.git_config[argv[3]] = argv[4]
        return ProcessResult(argv, 0)

    # -----------------------------
    # Helpers de asserção
    # -----------------------------
    def commands(self, *prefix: str) -> List[List[str]]:
        return [c["args"] for c in self.calls if tuple(c["args"][: len(prefix)]) == prefix]

    @property
    def git_writes(self) -> List[List[str]]:
        return [a for a in self.commands("git", "config", "--global") if a[3] != "--get"]


class FakeResolver:
    """Resolvedor de dependências fake: presente por padrão, configurável por comando."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, ExecutionMode]] = []
        self.failing: set = set()
        self.missing: set = set()

    def ensure_available(self, command: str, source: str, *, mode: ExecutionMode = ExecutionMode.APPLY):
        self.calls.append((command, source, mode))
        if command in self.failing:
            raise DependencyResolutionFailure(
                message=f"cannot install {command}",
                details={"command": command, "source": source},
            )
        if command in self.missing:
            if mode.is_dry_run:
                return DependencyStatus.PLANNED
            self.missing.discard(command)
            return DependencyStatus.INSTALLED
        return DependencyStatus.PRESENT


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Executor de processos fake, isolado por teste."""
    return FakeRunner()


@pytest.fixture
def fake_resolver() -> FakeResolver:
    """Resolvedor de dependências fake, isolado por teste."""
    return FakeResolver()


@pytest.fixture
def dummy_ctx(fake_runner: FakeRunner, fake_resolver: FakeResolver) -> RunContext:
    """
    RunContext mínimo ligado aos fakes de host.

    Invariantes:
        - Nenhum processo real é executado
        - Eventos e warnings começam vazios
    """
    return RunContext(runner=fake_runner, resolver=fake_resolver, run_id="run-test")


# =====================================================
# Documentos de configuração
# =====================================================

@pytest.fixture
def project_like_document_yaml() -> str:
    """
    YAML semelhante ao uso real: git com placeholders, oh-my-posh e um
    aplicativo sem Handler (apenas instalado).

    Returns:
        str: Conteúdo YAML do documento.
    """
    return """\
apps:
  Git:
    command: git
    source: Git.Git
    config:
      user.name: ${name}
      user.email: ${email}
      core.autocrlf: true
  vscode:
    command: code
    source: Microsoft.VisualStudioCode
"""


@pytest.fixture
def prompt_settings_factory(tmp_path):
    """
    Fábrica de settings do oh-my-posh apontando para arquivos em `tmp_path`.

    Returns:
        Callable[..., dict]: aceita overrides por keyword.
    """

    def _make(**overrides: Any) -> Dict[str, Any]:
        settings: Dict[str, Any] = {
            "fontName": "Meslo",
            "fontListCommand": ["list-fonts"],
            "shell": "pwsh",
            "theme": "paradox",
            "profilePath": str(tmp_path / "profile.ps1"),
            "terminalSettingsPath": str(tmp_path / "settings.json"),
        }
        settings.update(overrides)
        return settings

    return _make