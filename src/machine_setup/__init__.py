# src/machine_setup/__init__.py
"""
machine_setup: aplicação idempotente de configuração declarativa de aplicativos.

Este pacote raiz define o namespace público do machine_setup, uma ferramenta
que lê um documento declarativo (aplicativos nomeados e seus settings
desejados) e aproxima o estado real da máquina do estado declarado, sem
refazer trabalho já feito.

Princípios centrais:
    - Cada run é idempotente: reexecutar sem drift externo não muda nada
    - A falha de um aplicativo nunca impede o processamento dos demais
    - O modo de execução (apply | dry_run) é explícito em toda chamada

Arquitetura em alto nível:
    - core.config       → carregamento do documento, placeholders e hashing
    - core.pipeline     → tipos, contrato de Handler, registry e RunContext
    - core.host         → fronteira de processos e resolução de dependências
    - core.engine       → orquestração por aplicativo e agregação de resultados
    - core.traceability → relatório JSON da run
    - handlers          → Handlers concretos (git, oh-my-posh, office)
    - cli               → ponto de entrada de linha de comando
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
