"""
Tipos canônicos do resultado de resolução.

Componentes principais:
    - Clan             → componente concreto resolvido + árvore de septs
    - ResolutionResult → (clan | ausente, erros ordenados) de uma passada

Princípios fundamentais:
    - Tipos são imutáveis (frozen)
    - Não existe sucesso parcial: qualquer erro implica `clan is None`
    - Clans são árvores: cada sept pertence exclusivamente ao clan pai

Limites explícitos:
    - Não executa resolução
    - Não define semântica de execução dos componentes construídos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from charter_assembly.core.charter.model import ROOT_PATH, child_path
from charter_assembly.core.errors import AssemblyErrorPayload
from charter_assembly.core.exceptions import ResolutionFailed

T = TypeVar("T")


@dataclass(frozen=True)
class Clan(Generic[T]):
    """
    Componente resolvido, completo e executável.

    Campos:
        - value: instância produzida pelo founder (ou bare founder)
        - face_label: face que o componente satisfaz
        - imp_label: imp utilizado (None para charters bare)
        - septs: clans que preencheram cada role, em ordem de declaração
        - data: `data` do charter, repassado ao founder

    O parâmetro de tipo é apenas uma dica para o chamador: o registry
    é type-erased e a conformidade é verificada por label.
    """
    value: T
    face_label: str
    imp_label: Optional[str] = None
    septs: Dict[str, "Clan[Any]"] = field(default_factory=dict)
    data: Any = None

    def walk(self, path: str = ROOT_PATH) -> Iterator[Tuple[str, "Clan[Any]"]]:
        """Percorre a árvore em profundidade (pré-ordem), em ordem de declaração."""
        yield path, self
        for role_label, sept in self.septs.items():
            yield from sept.walk(child_path(path, role_label))

    def to_summary(self) -> Dict[str, Any]:
        """Árvore de labels (sem valores), serializável."""
        return {
            "face": self.face_label,
            "imp": self.imp_label,
            "septs": {k: v.to_summary() for k, v in self.septs.items()},
        }


@dataclass(frozen=True)
class ResolutionResult(Generic[T]):
    """Resultado terminal de uma passada de resolução."""
    face_label: str
    pass_id: str
    clan: Optional[Clan[T]] = None
    errors: Tuple[AssemblyErrorPayload, ...] = ()
    events: Tuple[Dict[str, Any], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors and self.clan is not None

    @property
    def value(self) -> Optional[T]:
        return self.clan.value if self.clan is not None else None

    @property
    def error_types(self) -> List[str]:
        return [e.type for e in self.errors]

    def raise_for_errors(self) -> Clan[T]:
        """Retorna o clan ou levanta `ResolutionFailed` com todos os erros."""
        if self.ok and self.clan is not None:
            return self.clan
        raise ResolutionFailed(
            message=f"resolution of {self.face_label} failed with {len(self.errors)} error(s)",
            details={
                "face": self.face_label,
                "pass_id": self.pass_id,
                "errors": [e.to_dict() for e in self.errors],
            },
            hint="Corrija todos os defeitos listados e resolva o charter novamente.",
        )
