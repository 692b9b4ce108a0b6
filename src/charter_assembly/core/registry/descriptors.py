"""
Descritores autodescritivos de faces, imps e roles.

Este módulo define os metadados introspectáveis em runtime que o
`DescriptorRegistry` armazena e que o `ResolutionEngine` consulta para
validar compatibilidade de interfaces a cada passo da resolução.

Componentes:
    - RoleDescriptor → slot de dependência nomeado de um imp
    - FaceDescriptor → identidade de interface (+ política opcional de charter bare)
    - ImpDescriptor  → implementação de exatamente uma face, com founder e roles
    - Founder / BareFounder (Protocol) → contratos das fábricas de componentes

Decisões arquiteturais:
    - Conformidade é descoberta dinamicamente via labels, nunca por checagem estática
    - Founders são type-erased: o registry guarda fábricas de faces não relacionadas
    - Igualdade de descritores é igualdade de dataclass (founders por identidade),
      o que torna registros repetidos do mesmo descritor idempotentes

Invariantes:
    - Labels são strings não vazias, comparadas por igualdade exata
    - Labels de role são únicos dentro de um imp
    - A ordem de declaração dos roles é preservada

Limites explícitos:
    - Não registra nada (ver `registry.DescriptorRegistry`)
    - Não valida que faces referenciadas existem (isso ocorre na resolução)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Founder(Protocol):
    """Constrói um componente a partir do `data` do charter e dos septs resolvidos."""

    def __call__(self, data: Any, septs: Dict[str, Any]) -> Any:
        ...


@runtime_checkable
class BareFounder(Protocol):
    """Constrói um componente a partir de um charter bare (escalar ou lista)."""

    def __call__(self, value: Any) -> Any:
        ...


def _require_label(value: Any, what: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} must be a non-empty string")


@dataclass(frozen=True)
class RoleDescriptor:
    """Slot de dependência de um imp, tipado por uma face."""

    label: str
    face_label: str
    optional: bool = False

    def __post_init__(self) -> None:
        _require_label(self.label, "role.label")
        _require_label(self.face_label, "role.face_label")


@dataclass(frozen=True)
class FaceDescriptor:
    """
    Identidade de interface.

    `contract` é metadado livre para ferramentas (forma, comportamento);
    o engine nunca o interpreta. `bare_founder`, quando presente, é a
    política da face que permite charters bare (escalares ou listas)
    tratados diretamente como payload.
    """

    label: str
    contract: Dict[str, Any] = field(default_factory=dict)
    description: str = ""
    bare_founder: Optional[Callable[[Any], Any]] = None

    def __post_init__(self) -> None:
        _require_label(self.label, "face.label")
        if self.bare_founder is not None and not callable(self.bare_founder):
            raise ValueError("face.bare_founder must be callable")

    @property
    def accepts_bare(self) -> bool:
        return self.bare_founder is not None


@dataclass(frozen=True)
class ImpDescriptor:
    """
    Implementação nomeada de exatamente uma face.

    Por convenção o label é prefixado pelo módulo dono
    (`<OwningModule>.<name>`), mas o engine o trata como string opaca.
    """

    label: str
    face_label: str
    founder: Callable[[Any, Dict[str, Any]], Any]
    roles: Tuple[RoleDescriptor, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        _require_label(self.label, "imp.label")
        _require_label(self.face_label, "imp.face_label")
        if not callable(self.founder):
            raise ValueError("imp.founder must be callable")

        declared = tuple(self.roles)
        seen = set()
        for r in declared:
            if not isinstance(r, RoleDescriptor):
                raise ValueError("imp.roles must contain RoleDescriptor instances")
            if r.label in seen:
                raise ValueError(f"duplicate role label in imp {self.label}: {r.label}")
            seen.add(r.label)
        object.__setattr__(self, "roles", declared)

    @property
    def role_labels(self) -> Tuple[str, ...]:
        return tuple(r.label for r in self.roles)

    def role(self, label: str) -> Optional[RoleDescriptor]:
        for r in self.roles:
            if r.label == label:
                return r
        return None


def declare_roles(*pairs: Tuple[str, str], optional: Iterable[str] = ()) -> Tuple[RoleDescriptor, ...]:
    """Atalho: `declare_roles(("w", "Number"), ("s", "Number"), optional=["s"])`."""
    opt = set(optional)
    return tuple(RoleDescriptor(label=label, face_label=face, optional=label in opt) for label, face in pairs)
