# src/machine_setup/core/config/errors.py
"""
Exceções canônicas da camada de configuração do machine_setup.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento e a validação estrutural do documento de configuração.

Todas as exceções aqui definidas são **fatais para a run inteira**: são
levantadas antes que qualquer aplicativo seja processado e devem ser
propagadas até o ponto de entrada.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de Handler ou de dependência

Limites explícitos:
    - Não executa Handlers
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados ao documento de configuração.

    Permite captura genérica no ponto de entrada (CLI), distinguindo
    falhas fatais de configuração de falhas por aplicativo, que nunca
    são propagadas pelo Engine.
    """


class ConfigNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração não existe.

    Decisões arquiteturais:
        - O documento é obrigatório para qualquer run
        - Nenhum documento vazio é inferido automaticamente
    """


class ConfigParseError(ConfigError):
    """
    Exceção levantada quando o documento existe mas não pode ser interpretado.

    Cobre erros de sintaxe YAML/JSON e violações estruturais mínimas
    (ausência de `apps`, entradas com tipos incompatíveis).
    """


class UnsupportedConfigFormatError(ConfigParseError):
    """
    Exceção levantada quando a extensão do arquivo não é suportada.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigParseError):
    """
    Exceção levantada quando o conteúdo raiz do documento não é um mapa.

    Exemplo inválido:
        - uma lista YAML no topo do arquivo
    """
