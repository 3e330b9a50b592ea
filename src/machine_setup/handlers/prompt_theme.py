"""Handler canônico: oh-my-posh (ambiente de prompt em três passos, v1).

Os settings não são pares chave/valor independentes, mas parâmetros de
três passos nomeados executados em ordem fixa (a fonte precisa existir
antes de o terminal referenciá-la). Cada passo é idempotente e reporta
seu próprio outcome; a falha de um passo não aborta os seguintes.

Passos:
1. `font`     → garante fonte instalada (busca por substring do nome de exibição)
2. `profile`  → garante a linha de inicialização no script de perfil do shell
3. `terminal` → garante `profiles.defaults.font.face` no settings.json do
                Windows Terminal (ausência do arquivo é tolerada com warning);
                só o trecho alterado é reescrito, o resto do arquivo fica intacto

Settings reconhecidos:
- fontName (obrigatório), fontInstallName, fontListCommand
- theme, shell (pwsh | powershell | bash | zsh), initLine, profilePath
- terminalSettingsPath

Limites explícitos:
- NÃO remove linhas antigas do perfil
- NÃO interpreta comentários em settings.json (JSON estrito)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from machine_setup.core.exceptions import SettingApplyFailure
from machine_setup.core.pipeline.context import RunContext
from machine_setup.core.pipeline.types import ExecutionMode, SettingOutcome

from .base import applied, failed, optional_str, require_str, skipped
from .json_document import set_json_path


FONT_FACE_PATH = ("profiles", "defaults", "font", "face")

WINDOWS_FONT_LIST_COMMAND = (
    "powershell",
    "-NoProfile",
    "-Command",
    "Add-Type -AssemblyName System.Drawing; "
    "(New-Object System.Drawing.Text.InstalledFontCollection).Families.Name",
)
POSIX_FONT_LIST_COMMAND = ("fc-list", ":", "family")

PROFILE_DEFAULTS = {
    "pwsh": Path("Documents") / "PowerShell" / "Microsoft.PowerShell_profile.ps1",
    "powershell": Path("Documents") / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1",
    "bash": Path(".bashrc"),
    "zsh": Path(".zshrc"),
}


def build_init_line(shell: str, theme: Optional[str]) -> str:
    """Linha de inicialização do oh-my-posh para o shell informado."""
    if shell in {"pwsh", "powershell"}:
        config = f' --config "{theme}"' if theme else ""
        return f"oh-my-posh init {shell}{config} | Invoke-Expression"
    if shell in {"bash", "zsh"}:
        config = f" --config '{theme}'" if theme else ""
        return f'eval "$(oh-my-posh init {shell}{config})"'
    raise SettingApplyFailure(
        message=f"unsupported shell '{shell}'",
        details={"key": "shell", "supported": sorted(PROFILE_DEFAULTS)},
    )


def default_profile_path(shell: str, home: Optional[Path] = None) -> Path:
    if shell not in PROFILE_DEFAULTS:
        raise SettingApplyFailure(
            message=f"unsupported shell '{shell}'",
            details={"key": "shell", "supported": sorted(PROFILE_DEFAULTS)},
        )
    return (home or Path.home()) / PROFILE_DEFAULTS[shell]


def default_terminal_settings_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    local = env.get("LOCALAPPDATA")
    base = Path(local) if local else Path.home() / "AppData" / "Local"
    return base / "Packages" / "Microsoft.WindowsTerminal_8wekyb3d8bbwe" / "LocalState" / "settings.json"


def ensure_line(content: str, line: str) -> Tuple[str, bool]:
    """Retorna (novo conteúdo, mudou?) garantindo `line` por busca literal."""
    if line in content:
        return content, False
    return content + "\n" + line, True


@dataclass
class PromptThemeHandler:
    """Configura fonte, perfil do shell e terminal para o oh-my-posh."""

    names: Tuple[str, ...] = ("oh-my-posh", "ohmyposh")
    executable: str = "oh-my-posh"

    # -----------------------------
    # Passo 1: fonte
    # -----------------------------
    def _font_list_command(self, settings: Mapping[str, Any]) -> List[str]:
        custom = settings.get("fontListCommand")
        if custom is not None:
            if not isinstance(custom, (list, tuple)) or not all(isinstance(p, str) for p in custom):
                raise SettingApplyFailure(
                    message="setting 'fontListCommand' must be a list of strings",
                    details={"key": "fontListCommand"},
                )
            return list(custom)
        return list(WINDOWS_FONT_LIST_COMMAND if os.name == "nt" else POSIX_FONT_LIST_COMMAND)

    def installed_fonts(self, settings: Mapping[str, Any], ctx: RunContext) -> List[str]:
        result = ctx.runner.run(self._font_list_command(settings)).check()
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def ensure_font(self, settings: Mapping[str, Any], mode: ExecutionMode, ctx: RunContext) -> SettingOutcome:
        font_name = require_str(settings, "fontName")
        install_name = optional_str(settings, "fontInstallName", font_name)

        needle = font_name.casefold()
        if any(needle in family.casefold() for family in self.installed_fonts(settings, ctx)):
            return skipped("font", f"font '{font_name}' already installed")

        if not mode.is_dry_run:
            ctx.runner.run([self.executable, "font", "install", install_name]).check()
        ctx.log(step_id="oh-my-posh", level="info", message="font install", font=install_name, dry_run=mode.is_dry_run)
        return applied("font", f"install font '{install_name}'", dry_run=mode.is_dry_run)

    # -----------------------------
    # Passo 2: perfil do shell
    # -----------------------------
    def ensure_profile_line(self, settings: Mapping[str, Any], mode: ExecutionMode, ctx: RunContext) -> SettingOutcome:
        shell = optional_str(settings, "shell", "pwsh").strip().lower()
        line = optional_str(settings, "initLine") or build_init_line(shell, optional_str(settings, "theme"))
        profile_setting = optional_str(settings, "profilePath")
        profile = Path(profile_setting).expanduser() if profile_setting else default_profile_path(shell)

        content = profile.read_text(encoding="utf-8") if profile.exists() else ""
        new_content, changed = ensure_line(content, line)
        if not changed:
            return skipped("profile", f"init line already present in {profile}")

        if not mode.is_dry_run:
            profile.parent.mkdir(parents=True, exist_ok=True)
            with profile.open("a", encoding="utf-8") as f:
                f.write(new_content[len(content):])
        ctx.log(step_id="oh-my-posh", level="info", message="profile line appended", profile=str(profile), dry_run=mode.is_dry_run)
        return applied("profile", f"append init line to {profile}", dry_run=mode.is_dry_run)

    # -----------------------------
    # Passo 3: settings do terminal
    # -----------------------------
    def ensure_terminal_font(self, settings: Mapping[str, Any], mode: ExecutionMode, ctx: RunContext) -> SettingOutcome:
        font_name = require_str(settings, "fontName")
        path_setting = optional_str(settings, "terminalSettingsPath")
        path = Path(path_setting).expanduser() if path_setting else default_terminal_settings_path()

        if not path.exists():
            message = f"terminal settings not found at {path}; skipped"
            return skipped("terminal", message, warnings=[message])

        # bytes: preserva CRLF e todo o texto fora do trecho editado
        text = path.read_bytes().decode("utf-8")
        try:
            patched = set_json_path(text, FONT_FACE_PATH, font_name)
        except json.JSONDecodeError as e:
            raise SettingApplyFailure(
                message=f"terminal settings is not valid JSON: {e.msg}",
                details={"path": str(path), "line": e.lineno},
            ) from e

        if patched is None:
            return skipped("terminal", f"font face already '{font_name}'")

        if not mode.is_dry_run:
            path.write_bytes(patched.encode("utf-8"))
        ctx.log(step_id="oh-my-posh", level="info", message="terminal font face set", path=str(path), dry_run=mode.is_dry_run)
        return applied("terminal", f"set {'.'.join(FONT_FACE_PATH)} = {font_name!r}", dry_run=mode.is_dry_run)

    def apply(
        self,
        settings: Mapping[str, Any],
        *,
        mode: ExecutionMode,
        ctx: RunContext,
    ) -> List[SettingOutcome]:
        steps = (
            ("font", self.ensure_font),
            ("profile", self.ensure_profile_line),
            ("terminal", self.ensure_terminal_font),
        )

        outcomes: List[SettingOutcome] = []
        for key, step in steps:
            try:
                outcomes.append(step(settings, mode, ctx))
            except Exception as e:
                ctx.log(
                    step_id="oh-my-posh",
                    level="error",
                    message=f"step {key} failed",
                    error_type=e.__class__.__name__,
                    error_message=str(e) or "error",
                )
                outcomes.append(failed(key, e, application="oh-my-posh"))
        return outcomes
