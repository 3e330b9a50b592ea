# src/machine_setup/core/engine/__init__.py
"""
Engine do machine_setup.

O Engine é o orquestrador central da run, responsável por:
    - resolver a dependência de cada aplicativo
    - despachar para o Handler correto via registry
    - capturar falhas por aplicativo sem interromper a run
    - consolidar o RunResult final

Invariantes:
    - Cada aplicativo é processado exatamente uma vez por run
    - A falha de um aplicativo nunca impede os seguintes
    - Não há retries dentro de uma run; reexecutar é o mecanismo de retry

Limites explícitos:
    - Não imprime nada nem decide o status de saída do processo
    - Execução estritamente sequencial
"""
