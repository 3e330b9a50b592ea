"""
Handlers concretos do machine_setup.

O conjunto é fechado e compilado: `build_default_registry` registra
explicitamente cada Handler suportado. Adicionar um aplicativo significa
adicionar um Handler aqui.
"""

from __future__ import annotations

from machine_setup.core.pipeline.registry import HandlerRegistry

from .git import GitConfigHandler
from .office import OfficeDeploymentHandler
from .prompt_theme import PromptThemeHandler


def build_default_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    registry.add(GitConfigHandler())
    registry.add(PromptThemeHandler())
    registry.add(OfficeDeploymentHandler())
    return registry


__all__ = [
    "GitConfigHandler",
    "OfficeDeploymentHandler",
    "PromptThemeHandler",
    "build_default_registry",
]
