# src/machine_setup/core/config/document.py
"""
Modelo em memória do documento de configuração.

Este módulo converte o documento bruto (dict vindo do loader) em
estruturas imutáveis consumidas pelo Engine e pelos Handlers.

Formato esperado:
    apps:
      <nome do aplicativo>:
        command: <executável usado na resolução de dependência>
        source:  <identificador da fonte de instalação>
        config:  <mapa de settings específicos do Handler>

Decisões arquiteturais:
    - A ordem de declaração dos aplicativos é preservada
    - A busca por nome é case-insensitive
    - Settings são expostos como mapas somente-leitura (deep-freeze)

Invariantes:
    - Um documento carregado nunca é mutado durante a run
    - Nomes que colidem case-insensitive são rejeitados na construção

Limites explícitos:
    - Não valida chaves de settings (cada Handler interpreta as suas)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .errors import ConfigParseError, InvalidConfigRootTypeError


def normalize_name(name: str) -> str:
    """Forma canônica de um nome de aplicativo para busca case-insensitive."""
    return str(name).strip().casefold()


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class ApplicationSpec:
    """Aplicativo declarado: comando, fonte de instalação e settings (somente leitura)."""

    name: str
    command: str
    source: str
    settings: Mapping[str, Any]


class ConfigurationDocument:
    """
    Documento de configuração resolvido para uma run.

    Itera os `ApplicationSpec` na ordem de declaração e oferece busca
    case-insensitive via `get`.
    """

    def __init__(self, apps: List[ApplicationSpec]):
        self._apps: Dict[str, ApplicationSpec] = {}
        for app in apps:
            key = normalize_name(app.name)
            if key in self._apps:
                raise ConfigParseError(
                    f"Aplicativo duplicado (case-insensitive): {app.name!r}"
                )
            self._apps[key] = app

    def __iter__(self) -> Iterator[ApplicationSpec]:
        return iter(list(self._apps.values()))

    def __len__(self) -> int:
        return len(self._apps)

    def get(self, name: str) -> Optional[ApplicationSpec]:
        return self._apps.get(normalize_name(name))

    @classmethod
    def from_dict(cls, raw: Any) -> "ConfigurationDocument":
        """
        Constrói o documento a partir do dict bruto.

        Raises:
            InvalidConfigRootTypeError: Se a raiz não for um dicionário.
            ConfigParseError: Se `apps` estiver ausente ou alguma entrada
                tiver estrutura incompatível.
        """
        if not isinstance(raw, dict):
            raise InvalidConfigRootTypeError(
                f"Raiz do documento deve ser dict, recebido: {type(raw).__name__}"
            )

        apps_raw = raw.get("apps")
        if not isinstance(apps_raw, dict):
            raise ConfigParseError("Documento deve conter a chave 'apps' com um mapa de aplicativos")

        apps: List[ApplicationSpec] = []
        for name, entry in apps_raw.items():
            if not isinstance(entry, dict):
                raise ConfigParseError(f"Entrada do aplicativo '{name}' deve ser um mapa")

            command = entry.get("command")
            source = entry.get("source")
            for field_name, value in (("command", command), ("source", source)):
                if not isinstance(value, str) or not value.strip():
                    raise ConfigParseError(
                        f"Aplicativo '{name}': '{field_name}' deve ser string não vazia"
                    )

            settings = entry.get("config")
            if settings is None:
                settings = {}
            if not isinstance(settings, dict):
                raise ConfigParseError(f"Aplicativo '{name}': 'config' deve ser um mapa")

            apps.append(
                ApplicationSpec(
                    name=str(name),
                    command=command.strip(),
                    source=source.strip(),
                    settings=_freeze(settings),
                )
            )

        return cls(apps)
