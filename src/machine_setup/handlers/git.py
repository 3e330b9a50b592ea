"""Handler canônico: git (config global, v1).

Cada chave do documento é um setting independente do store global do git
(ex.: `user.name`, `core.autocrlf`).

Algoritmo por chave:
- lê o valor atual com `git config --global --get <key>`
  (status 1 sem stdout nem stderr = chave não definida; com stderr = erro)
- compara por igualdade exata de string com o valor desejado
- igual → SKIPPED; diferente → `git config --global <key> <value>` → APPLIED
- em dry run a escrita é pulada, a leitura não

Coerção de valores:
- str como está; bool → "true"/"false"; int/float → str()
- mapas, listas e null → SettingApplyFailure (shape incompatível)

Limites explícitos:
- NÃO remove chaves ausentes do documento
- NÃO toca em config de repositório (apenas --global)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from machine_setup.core.exceptions import SettingApplyFailure
from machine_setup.core.pipeline.context import RunContext
from machine_setup.core.pipeline.types import ExecutionMode, SettingOutcome

from .base import applied, failed, skipped


def coerce_git_value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise SettingApplyFailure(
        message=f"git setting '{key}' must be a scalar (string, boolean or number)",
        details={"key": key, "received": type(value).__name__},
    )


@dataclass
class GitConfigHandler:
    """Aplica chaves do config global do git, uma a uma."""

    names: Tuple[str, ...] = ("git",)
    executable: str = "git"
    scope: str = "--global"

    def read(self, key: str, ctx: RunContext) -> Optional[str]:
        result = ctx.runner.run([self.executable, "config", self.scope, "--get", key])
        # chave inválida também sai com 1, mas escreve em stderr
        if result.returncode == 1 and not result.stdout.strip() and not result.stderr.strip():
            return None
        result.check()
        return result.stdout.rstrip("\r\n")

    def write(self, key: str, value: str, ctx: RunContext) -> None:
        ctx.runner.run([self.executable, "config", self.scope, key, value]).check()

    def apply(
        self,
        settings: Mapping[str, Any],
        *,
        mode: ExecutionMode,
        ctx: RunContext,
    ) -> List[SettingOutcome]:
        outcomes: List[SettingOutcome] = []

        for key, raw_value in settings.items():
            key = str(key)
            try:
                desired = coerce_git_value(key, raw_value)
                current = self.read(key, ctx)

                if current == desired:
                    outcomes.append(skipped(key, "already set"))
                    continue

                if not mode.is_dry_run:
                    self.write(key, desired, ctx)

                ctx.log(
                    step_id="git",
                    level="info",
                    message="git config updated" if not mode.is_dry_run else "git config would change",
                    key=key,
                    previous=current,
                    dry_run=mode.is_dry_run,
                )
                outcomes.append(applied(key, f"set {key} = {desired!r}", dry_run=mode.is_dry_run))

            except Exception as e:
                # uma chave com falha não bloqueia as demais
                ctx.log(
                    step_id="git",
                    level="error",
                    message="git config failed",
                    key=key,
                    error_type=e.__class__.__name__,
                    error_message=str(e) or "error",
                )
                outcomes.append(failed(key, e, application="git"))

        return outcomes
