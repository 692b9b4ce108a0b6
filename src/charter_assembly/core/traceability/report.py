"""
ResolutionReport — rastreabilidade forense de passadas de resolução.

Este módulo consolida, de forma determinística e auditável:
    - identidade da passada (pass_id, face alvo, status)
    - hashes semânticos das entradas (charter e settings efetivos)
    - erros ordenados da passada
    - Event Log ordenado emitido pelo `ResolutionContext`
    - árvore de labels do clan construído (sem os valores)

Decisões arquiteturais:
    - O formato de persistência é JSON determinístico (`sort_keys=True`)
    - O relatório é construído apenas por chamada explícita a `build_report`
    - Valores produzidos por founders não são serializados: são opacos

Invariantes:
    - `status == "success"` se e somente se `errors` está vazio
    - `clan` é None sempre que `status == "failed"`
    - `events` preserva a ordem de emissão

Limites explícitos:
    - Não executa resolução
    - Não valida semântica do conteúdo
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from charter_assembly.core.charter.hashing import compute_charter_hash
from charter_assembly.core.config.settings import EngineSettings
from charter_assembly.core.resolution.types import ResolutionResult

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


@dataclass
class ResolutionReport:
    """
    Relatório serializável de uma passada de resolução.

    Campos principais:
        - pass_id / face_label / status: identidade e desfecho da passada
        - charter_hash / settings_hash: entradas semânticas
        - errors: payloads de erro já serializados (`AssemblyErrorPayload.to_dict`)
        - events: Event Log da passada
        - clan: árvore de labels (`Clan.to_summary`) ou None
    """

    pass_id: str
    face_label: str
    status: str
    charter_hash: str
    settings_hash: str
    errors: List[Dict[str, Any]] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    clan: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Cópia serializável e independente do estado interno."""
        return {
            "pass_id": self.pass_id,
            "face_label": self.face_label,
            "status": self.status,
            "inputs": {
                "charter_hash": self.charter_hash,
                "settings_hash": self.settings_hash,
            },
            "errors": [dict(e) for e in self.errors],
            "events": [dict(e) for e in self.events],
            "clan": json.loads(json.dumps(self.clan)) if self.clan is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolutionReport":
        """Reconstrução estrutural e permissiva (campos ausentes viram vazios)."""
        inputs = data.get("inputs", {}) or {}
        return cls(
            pass_id=str(data.get("pass_id", "")),
            face_label=str(data.get("face_label", "")),
            status=str(data.get("status", STATUS_FAILED)),
            charter_hash=str(inputs.get("charter_hash", "")),
            settings_hash=str(inputs.get("settings_hash", "")),
            errors=[dict(e) for e in (data.get("errors", []) or [])],
            events=[dict(e) for e in (data.get("events", []) or [])],
            clan=data.get("clan"),
        )


def build_report(
    result: ResolutionResult[Any],
    *,
    charter: Any,
    settings: Optional[EngineSettings] = None,
) -> ResolutionReport:
    """
    Cria o relatório de uma passada já concluída.

    O charter é hasheado como recebido (antes de qualquer validação); os
    settings efetivos (default quando omitidos) entram pelo
    `EngineSettings.config_hash`.

    Raises:
        TypeError: se o charter não for serializável em JSON.
    """
    effective = settings if settings is not None else EngineSettings()
    return ResolutionReport(
        pass_id=result.pass_id,
        face_label=result.face_label,
        status=STATUS_SUCCESS if result.ok else STATUS_FAILED,
        charter_hash=compute_charter_hash(charter),
        settings_hash=effective.config_hash(),
        errors=[e.to_dict() for e in result.errors],
        events=[dict(e) for e in result.events],
        clan=result.clan.to_summary() if result.clan is not None else None,
    )


def save_report(report: Union[ResolutionReport, Dict[str, Any]], path: Path) -> None:
    """
    Persiste o relatório em JSON.

    Diretórios intermediários são criados automaticamente; a serialização
    é determinística para o mesmo conteúdo.

    Raises:
        OSError: falha ao criar diretórios ou escrever o arquivo.
        TypeError: se algum evento carregar valores não serializáveis.
    """
    data = report.to_dict() if isinstance(report, ResolutionReport) else report
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")


def load_report(path: Path) -> ResolutionReport:
    """Restaura um `ResolutionReport` persistido por `save_report`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return ResolutionReport.from_dict(data)
