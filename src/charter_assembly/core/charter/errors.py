from __future__ import annotations

from typing import Any, Dict, Optional


class CharterError(Exception):
    """Erro base do domínio de charter."""


class CharterFileNotFoundError(CharterError):
    """Arquivo de charter não existe no caminho informado."""


class UnsupportedCharterFormatError(CharterError):
    """Formato de charter não suportado (v1: YAML/JSON)."""


class CharterParseError(CharterError):
    """Falha ao parsear YAML/JSON."""


class MalformedCharterError(CharterError):
    """Nó de charter não é estruturalmente válido.

    Levantado por `parse_charter` e convertido pelo engine em um payload
    MALFORMED_CHARTER local ao nó (é o único defeito que interrompe a
    inspeção da subárvore).
    """

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(reason)
        self.reason = reason
        self.details: Dict[str, Any] = dict(details or {})
