# src/machine_setup/core/traceability/__init__.py
"""
Rastreabilidade de runs do machine_setup.

Este pacote monta e persiste o relatório JSON de uma run a partir do
RunResult e dos eventos estruturados do RunContext.

Limites explícitos:
    - Não mantém histórico de runs
    - Não compara runs entre si
"""
