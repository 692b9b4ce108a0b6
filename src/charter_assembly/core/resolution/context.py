"""
Contexto de acumulação de erros de uma passada de registro ou resolução.

Este módulo define o `ResolutionContext`, a estrutura canônica pela qual
operações de registro (`DescriptorRegistry.register_*`) e de resolução
(`ResolutionEngine`) reportam defeitos sem interromper o fluxo de controle.

O contexto atua como o único meio permitido de:
    - acumular erros (`AssemblyErrorPayload`) em ordem de descoberta
    - sinalizar o modo degradado (`ERROR_CHECK_ONLY`)
    - registrar eventos estruturados da passada

Máquina de estados:
    - NORMAL (inicial): operações executam com efeito completo
      (mutação do registry, invocação de founders)
    - ERROR_CHECK_ONLY: entrada no primeiro erro registrado; operações
      passam a apenas validar estrutura e reportar novos erros.
      O modo nunca é revertido dentro da mesma passada.

Invariantes:
    - Cada passada possui seu próprio contexto (nunca compartilhado
      entre passadas concorrentes)
    - A lista de erros é ordenada e apenas cresce
    - Eventos sempre incluem `pass_id` e `path`

Limites explícitos:
    - Não consulta o registry
    - Não invoca founders
    - Não persiste eventos (ver `core.traceability.report`)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from charter_assembly.core.errors import AssemblyErrorPayload


class ContextMode(str, Enum):
    """Modos de execução de uma passada."""
    NORMAL = "normal"
    ERROR_CHECK_ONLY = "error_check_only"


@dataclass
class ResolutionContext:
    """
    Contexto de uma única passada de registro ou resolução.

    Decisões arquiteturais:
        - Erros de configuração são dados, não exceções
        - A degradação para ERROR_CHECK_ONLY é automática e irreversível
        - Chamadores consultam `is_degraded` antes de qualquer efeito colateral

    Este contexto existe para que uma única passada enumere todos os
    defeitos de um charter, sem exigir que cada chamador propague um
    acumulador manualmente.
    """
    pass_id: str
    created_at: datetime
    record_events: bool = True
    meta: Dict[str, Any] = field(default_factory=dict)

    mode: ContextMode = field(default=ContextMode.NORMAL, init=False)
    errors: List[AssemblyErrorPayload] = field(default_factory=list, init=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    @classmethod
    def new(cls, *, record_events: bool = True, meta: Optional[Dict[str, Any]] = None) -> "ResolutionContext":
        return cls(
            pass_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            record_events=record_events,
            meta=dict(meta or {}),
        )

    # -----------------------------
    # Erros & modo
    # -----------------------------
    @property
    def is_degraded(self) -> bool:
        return self.mode is ContextMode.ERROR_CHECK_ONLY

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_count(self) -> int:
        return len(self.errors)

    def record_error(self, payload: AssemblyErrorPayload) -> None:
        self.errors.append(payload)
        self.log(
            path=payload.path or "",
            level="ERROR",
            message=payload.message,
            error_type=payload.type,
        )
        if self.mode is ContextMode.NORMAL:
            self.mode = ContextMode.ERROR_CHECK_ONLY
            self.log(path=payload.path or "", level="WARNING", message="context degraded to error-check-only")

    # -----------------------------
    # Eventos estruturados
    # -----------------------------
    def log(self, *, path: str, level: str, message: str, **extra: Any) -> None:
        if not self.record_events:
            return
        event = {
            "pass_id": self.pass_id,
            "path": path,
            "level": level,
            "message": message,
            "mode": self.mode.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
