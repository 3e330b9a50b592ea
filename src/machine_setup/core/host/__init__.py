# src/machine_setup/core/host/__init__.py
"""
Colaboradores de host do machine_setup.

Componentes:
    - process  → invocação síncrona de processos externos (`ProcessRunner`)
    - resolver → garantia de presença de comandos (`DependencyResolver`)

Limites explícitos:
    - Não aplica settings
    - Não altera o diretório de trabalho do processo corrente
"""
