"""
Exceções canônicas da camada de configuração do Charter Assembly.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, merge e materialização das configurações do engine
(`EngineSettings`).

Ao contrário dos defeitos de charter, que são acumulados no
`ResolutionContext`, problemas de configuração impedem qualquer passada
de resolução e por isso são levantados imediatamente.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa defeito de charter ou de registro
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Charter Assembly.

    Permite captura genérica de falhas de configuração, distinguindo-as
    de falhas de registro ou de resolução.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Não existe criação implícita de defaults
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"max_depth": 64}}
        - override: {"engine": "deep"}

    Nenhum merge parcial é produzido em caso de conflito. `key_path` guarda
    o caminho pontuado da chave conflitante (`""` para a raiz).
    """

    def __init__(self, message: str, *, key_path: str = "") -> None:
        super().__init__(message)
        self.key_path = key_path


class InvalidSettingsError(ConfigError):
    """
    Exceção levantada quando a seção `engine` da configuração resolvida
    não pode ser materializada em `EngineSettings`.

    Exemplos:
        - `max_depth` não inteiro ou fora de 1..`MAX_DEPTH_CEILING`
        - `record_events` não booleano
        - chaves desconhecidas na seção `engine`
    """
