"""
Configurações efetivas do engine de resolução.

`EngineSettings` é a forma materializada e imutável da seção `engine`
da configuração resolvida:

    engine:
      max_depth: 64        # profundidade máxima de charters aninhados
      record_events: true  # registra eventos estruturados no contexto

Chaves ausentes assumem os defaults abaixo; chaves desconhecidas,
valores com tipo errado e `max_depth` fora de 1..`MAX_DEPTH_CEILING` são
rejeitados com `InvalidSettingsError`.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidSettingsError
from .hashing import compute_config_hash

DEFAULT_MAX_DEPTH = 64
# O engine desce um frame Python por nível de charter; o teto fica bem
# abaixo do limite de recursão padrão do interpretador (1000).
MAX_DEPTH_CEILING = 500

_ENGINE_KEYS = {"max_depth", "record_events"}


@dataclass(frozen=True)
class EngineSettings:
    """Parâmetros do `ResolutionEngine` (imutáveis durante uma passada)."""

    max_depth: int = DEFAULT_MAX_DEPTH
    record_events: bool = True

    def __post_init__(self) -> None:
        # bool é subclasse de int: `max_depth: true` não é uma profundidade
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise InvalidSettingsError(
                f"engine.max_depth deve ser int, recebido: {type(self.max_depth).__name__}"
            )
        if not 1 <= self.max_depth <= MAX_DEPTH_CEILING:
            raise InvalidSettingsError(
                f"engine.max_depth deve estar entre 1 e {MAX_DEPTH_CEILING}, recebido: {self.max_depth}"
            )
        if not isinstance(self.record_events, bool):
            raise InvalidSettingsError(
                f"engine.record_events deve ser bool, recebido: {type(self.record_events).__name__}"
            )

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "EngineSettings":
        """Materializa a seção `engine` de uma configuração resolvida."""
        engine_cfg = (config or {}).get("engine", {}) or {}
        if not isinstance(engine_cfg, Mapping):
            raise InvalidSettingsError(
                f"engine deve ser um mapping, recebido: {type(engine_cfg).__name__}"
            )

        unknown = sorted(set(engine_cfg) - _ENGINE_KEYS)
        if unknown:
            raise InvalidSettingsError(f"chaves desconhecidas em engine: {unknown}")

        return cls(
            max_depth=engine_cfg.get("max_depth", DEFAULT_MAX_DEPTH),
            record_events=engine_cfg.get("record_events", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def config_hash(self) -> str:
        """Hash canônico dos settings efetivos (registrado no relatório de resolução)."""
        return compute_config_hash(self.to_dict())
