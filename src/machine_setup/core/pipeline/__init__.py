# src/machine_setup/core/pipeline/__init__.py
"""
Contratos do motor de aplicação.

Este pacote define os elementos estruturais que conectam o Engine aos
Handlers:

- **types**    → Outcome, ExecutionMode, SettingOutcome, ApplicationResult
- **handler**  → protocolo `Handler` (apply(settings, *, mode, ctx))
- **registry** → `HandlerRegistry` fechado, case-insensitive
- **context**  → `RunContext` (runner, resolver, eventos, warnings)

## Invariantes

- Cada nome normalizado aponta para um único Handler
- O modo de execução é sempre passado explicitamente
- Comunicação com o host ocorre apenas via colaboradores do RunContext
"""
