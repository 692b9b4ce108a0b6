from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AssemblyException(Exception):
    """Base class para exceções internas do Charter Assembly.

    Importante:
    - Exceções representam erros de programação ou falhas fatais,
      nunca defeitos de charter (esses são acumulados no contexto)
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RegistryFrozenError(AssemblyException):
    """Tentativa de registrar descritores após o congelamento do registry."""


# ---------------------------------------------------------------------------
# Resolução
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolutionFailed(AssemblyException):
    """Passada de resolução terminou com erros (ver `details["errors"]`)."""


@dataclass(frozen=True)
class FounderError(AssemblyException):
    """Falha de domínio levantada por um founder com detalhes estruturados."""
