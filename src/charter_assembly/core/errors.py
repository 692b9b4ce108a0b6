"""
Charter Assembly — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros acumuláveis do Charter Assembly.
Erros de registro e de resolução são artefatos de diagnóstico e fazem parte do
contrato operacional do engine, devendo ser:

- explícitos
- serializáveis
- localizáveis (path do charter, labels de face/imp/role envolvidos)
- acionáveis

Nenhum destes erros é levantado como exceção: eles são registrados no
`ResolutionContext` da passada corrente, para que uma única passada
reporte todos os defeitos independentes de um charter.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AssemblyErrorPayload:
    """
    Payload canônico de erro do Charter Assembly.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
      (sempre inclui `path` quando o erro se refere a um nó do charter)
    - hint: ação sugerida ao autor do charter ou do módulo (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    @property
    def path(self) -> Optional[str]:
        return self.details.get("path")

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Charter
MALFORMED_CHARTER = "MALFORMED_CHARTER"
CHARTERS_TOO_DEEP = "CHARTERS_TOO_DEEP"

# Registry
UNKNOWN_FACE = "UNKNOWN_FACE"
UNKNOWN_IMP = "UNKNOWN_IMP"
CONFLICTING_REGISTRATION = "CONFLICTING_REGISTRATION"

# Resolução
FACE_MISMATCH = "FACE_MISMATCH"
ROLE_MISSING = "ROLE_MISSING"
UNKNOWN_ROLE = "UNKNOWN_ROLE"
FOUNDER_FAILED = "FOUNDER_FAILED"

ERROR_TYPES = (
    MALFORMED_CHARTER,
    UNKNOWN_FACE,
    UNKNOWN_IMP,
    FACE_MISMATCH,
    ROLE_MISSING,
    UNKNOWN_ROLE,
    CONFLICTING_REGISTRATION,
    CHARTERS_TOO_DEEP,
    FOUNDER_FAILED,
)


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def malformed_charter(
    *,
    path: str,
    reason: str,
    offending: Optional[Dict[str, Any]] = None,
    hint: str = "Ajuste o nó do charter para o formato {imp, roles?, data?} ou use um valor bare apenas em faces que o permitem.",
) -> AssemblyErrorPayload:
    details: Dict[str, Any] = {"path": path, "reason": reason}
    if offending:
        details.update(offending)
    return AssemblyErrorPayload(
        type=MALFORMED_CHARTER,
        message="Charter com formato inválido",
        details=details,
        hint=hint,
    )


def unknown_face(
    *,
    face_label: str,
    path: Optional[str] = None,
    hint: str = "Garanta que o módulo que declara a face foi incluído na inicialização do registry.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=UNKNOWN_FACE,
        message="Face não registrada",
        details={"path": path, "face": face_label},
        hint=hint,
    )


def unknown_imp(
    *,
    imp_label: str,
    path: Optional[str] = None,
    hint: str = "Verifique o label do imp no charter ou inclua o módulo que o registra na inicialização.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=UNKNOWN_IMP,
        message="Imp não registrado",
        details={"path": path, "imp": imp_label},
        hint=hint,
    )


def face_mismatch(
    *,
    path: str,
    imp_label: str,
    expected_face: str,
    actual_face: str,
    hint: str = "Escolha um imp que implemente a face esperada por este slot.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=FACE_MISMATCH,
        message="Imp implementa uma face diferente da esperada",
        details={
            "path": path,
            "imp": imp_label,
            "expected_face": expected_face,
            "actual_face": actual_face,
        },
        hint=hint,
    )


def role_missing(
    *,
    path: str,
    imp_label: str,
    role_label: str,
    face_label: str,
    hint: str = "Declare o role ausente em `roles` do charter.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=ROLE_MISSING,
        message="Role obrigatório ausente no charter",
        details={
            "path": path,
            "imp": imp_label,
            "role": role_label,
            "face": face_label,
        },
        hint=hint,
    )


def unknown_role(
    *,
    path: str,
    imp_label: str,
    role_label: str,
    declared_roles: List[str],
    hint: str = "Remova o role extra do charter ou corrija o nome para um dos roles declarados pelo imp.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=UNKNOWN_ROLE,
        message="Role não declarado pelo imp",
        details={
            "path": path,
            "imp": imp_label,
            "role": role_label,
            "declared_roles": list(declared_roles),
        },
        hint=hint,
    )


def conflicting_registration(
    *,
    namespace: str,
    label: str,
    existing: Any,
    incoming: Any,
    hint: str = "Use labels distintos para descritores distintos; registros repetidos só são aceitos quando idênticos.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=CONFLICTING_REGISTRATION,
        message="Registro conflitante para o mesmo label",
        details={
            "namespace": namespace,
            "label": label,
            "existing": repr(existing),
            "incoming": repr(incoming),
        },
        hint=hint,
    )


def charters_too_deep(
    *,
    path: str,
    depth: int,
    max_depth: int,
    hint: str = "Reduza o aninhamento do charter ou aumente `engine.max_depth` na configuração.",
) -> AssemblyErrorPayload:
    return AssemblyErrorPayload(
        type=CHARTERS_TOO_DEEP,
        message="Charter excede a profundidade máxima de resolução",
        details={"path": path, "depth": depth, "max_depth": max_depth},
        hint=hint,
    )


def founder_failed(
    *,
    path: str,
    imp_label: Optional[str],
    face_label: str,
    exception_class: str,
    reason: str,
    extra: Optional[Dict[str, Any]] = None,
    hint: str = "Verifique o `data` do charter e a implementação do founder.",
) -> AssemblyErrorPayload:
    details: Dict[str, Any] = dict(extra or {})
    details.update(
        {
            "path": path,
            "imp": imp_label,
            "face": face_label,
            "exception_class": exception_class,
            "reason": reason,
        }
    )
    return AssemblyErrorPayload(
        type=FOUNDER_FAILED,
        message="Founder falhou ao construir o componente",
        details=details,
        hint=hint,
    )
