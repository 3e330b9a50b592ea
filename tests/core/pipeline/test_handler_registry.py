# tests/core/pipeline/test_handler_registry.py
"""
Testes do HandlerRegistry.

Este módulo valida o registro fechado de Handlers:
- busca case-insensitive por nome exato normalizado
- `resolve` nunca lança para nomes desconhecidos
- nomes duplicados (inclusive por caixa) são rejeitados no registro
- o registry padrão contém exatamente os Handlers compilados

Invariantes:
    - Um nome normalizado aponta para um único Handler
    - A ordem de registro é preservada em `names()`
"""

import pytest

from machine_setup.core.pipeline.handler import Handler
from machine_setup.core.pipeline.registry import DuplicateHandlerError, HandlerRegistry
from machine_setup.handlers import build_default_registry


class DummyHandler:
    """Handler mínimo via duck typing, usado apenas em testes do registry."""

    def __init__(self, *names):
        self.names = tuple(names)

    def apply(self, settings, *, mode, ctx):
        return []


def test_resolve_is_case_insensitive():
    registry = HandlerRegistry()
    handler = DummyHandler("git")
    registry.add(handler)

    assert registry.resolve("git") is handler
    assert registry.resolve("Git") is handler
    assert registry.resolve("GIT") is handler


def test_unknown_name_returns_none():
    registry = HandlerRegistry()
    registry.add(DummyHandler("git"))
    assert registry.resolve("foobar") is None
    assert registry.resolve("gi") is None
    assert registry.resolve(None) is None  # type: ignore[arg-type]


def test_duplicate_names_are_rejected():
    """
    Verifica que dois Handlers não podem reivindicar o mesmo nome.

    Decisões arquiteturais:
        - A colisão é detectada no momento do registro
        - A comparação usa o nome normalizado (case-insensitive)
    """
    registry = HandlerRegistry()
    registry.add(DummyHandler("git"))
    with pytest.raises(DuplicateHandlerError):
        registry.add(DummyHandler("GIT"))
    with pytest.raises(DuplicateHandlerError):
        registry.add(DummyHandler("svn", "Svn"))
    assert registry.resolve("svn") is None


def test_handler_without_names_is_rejected():
    registry = HandlerRegistry()
    with pytest.raises(ValueError):
        registry.add(DummyHandler())
    with pytest.raises(ValueError):
        registry.add(DummyHandler("  "))


def test_default_registry_contains_compiled_handlers():
    registry = build_default_registry()
    assert registry.names() == ["git", "oh-my-posh", "ohmyposh", "office", "microsoft-office"]
    for name in registry.names():
        assert isinstance(registry.resolve(name), Handler)
    assert registry.resolve("OhMyPosh") is registry.resolve("oh-my-posh")
