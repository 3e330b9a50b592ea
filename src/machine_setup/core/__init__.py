# src/machine_setup/core/__init__.py
"""
Core do machine_setup.

Este pacote reúne o motor de aplicação idempotente: o documento de
configuração, o contrato de Handler, o registry fechado de Handlers,
a fronteira com processos externos e o Engine que orquestra a run.

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo outcome é registrado explicitamente
    - Erros são convertidos em outcomes no escopo mais estreito possível
    - Execução sequencial, sem paralelismo entre aplicativos

Limites explícitos:
    - Não faz rollback
    - Não versiona nem compara histórico de configuração
    - Não coordena múltiplas máquinas
"""
