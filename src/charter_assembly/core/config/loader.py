"""
Carregamento da configuração do engine a partir de arquivos.

Dois arquivos participam da configuração efetiva:

    defaults  → obrigatório; base versionada junto ao projeto
    local     → opcional; apenas as chaves sobrescritas (ex.: `engine.max_depth`)

O resultado do merge é um dicionário puro (`load_config`) ou, já
materializado e validado, um `EngineSettings` (`load_settings`), que é o
que o `ResolutionEngine` e o relatório de resolução consomem.

Limites explícitos:
    - O formato é decidido pela extensão do arquivo
    - Não procura arquivos implicitamente (caminhos são sempre explícitos)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Callable, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .settings import EngineSettings

_PARSERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _read_mapping(path: Path, *, role: str) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração e garante que a raiz seja um mapping.

    Arquivos vazios (YAML sem documento) valem como `{}`.

    Raises:
        UnsupportedConfigFormatError: extensão fora de `_PARSERS`.
        InvalidConfigRootTypeError: raiz que não é um dicionário.
    """
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado para {role}: {path.suffix or '<sem extensão>'} "
            f"(aceitos: {', '.join(sorted(_PARSERS))})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = parser(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Raiz da config {role} ({path.name}) deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva (defaults + local opcional).

    Um `local_path` apontando para um arquivo inexistente não é erro: a
    máquina simplesmente não tem overrides.

    Raises:
        DefaultsNotFoundError: se o arquivo de defaults não existir.
        UnsupportedConfigFormatError / InvalidConfigRootTypeError: arquivo inválido.
        ConfigTypeConflictError: se o local contradiz a estrutura dos defaults.
    """
    defaults_file = Path(defaults_path)
    if not defaults_file.is_file():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {defaults_file}")

    config = _read_mapping(defaults_file, role="defaults")

    if local_path is not None and Path(local_path).is_file():
        config = deep_merge(config, _read_mapping(Path(local_path), role="local"))

    return config


def load_settings(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> EngineSettings:
    """
    Carrega os arquivos de configuração e materializa a seção `engine`.

    Erros de validação da seção `engine` são relançados com os arquivos de
    origem na mensagem, para que o usuário saiba qual arquivo corrigir.

    Raises:
        InvalidSettingsError: seção `engine` inválida (tipo, chave ou faixa).
        ConfigError: qualquer outra falha de `load_config`.
    """
    config = load_config(defaults_path=defaults_path, local_path=local_path)
    try:
        return EngineSettings.from_config(config)
    except InvalidSettingsError as exc:
        sources = f"defaults={defaults_path}"
        if local_path is not None:
            sources += f", local={local_path}"
        raise InvalidSettingsError(f"{exc} [{sources}]") from exc
