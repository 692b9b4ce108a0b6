"""
Deep-merge de configuração (defaults ← local).

Política:
    - mapping + mapping → merge chave a chave
    - lista             → substituída inteira pelo override
    - escalar           → substituído, desde que o tipo seja o mesmo
    - tipos diferentes  → `ConfigTypeConflictError` com o caminho pontuado
      da chave (ex.: `engine.max_depth`)

As entradas nunca são mutadas.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Retorna um novo dict com `override` aplicado sobre `base`."""
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts na raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}",
            key_path="",
        )
    return _merge_mapping(base, override, prefix="")


def _merge_mapping(base: Dict[str, Any], override: Dict[str, Any], *, prefix: str) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        key_path = f"{prefix}.{key}" if prefix else str(key)
        if key in merged:
            merged[key] = _merge_value(merged[key], value, key_path=key_path)
        else:
            merged[key] = deepcopy(value)
    return merged


def _merge_value(current: Any, incoming: Any, *, key_path: str) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_mapping(current, incoming, prefix=key_path)
    if isinstance(incoming, list):
        return deepcopy(incoming)
    if type(current) is not type(incoming):
        raise ConfigTypeConflictError(
            f"Conflito de tipo em '{key_path}': "
            f"{type(current).__name__} vs {type(incoming).__name__}",
            key_path=key_path,
        )
    return deepcopy(incoming)
