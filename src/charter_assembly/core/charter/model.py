"""
Modelo e validação estrutural de charters.

Um charter é uma árvore de valores JSON que descreve como construir um
componente:

    {
      "imp": "<ownerModule>.<impName>",
      "roles": { "<roleLabel>": <Charter>, ... },   # opcional
      "data": <qualquer valor JSON>                 # opcional
    }

Um valor bare (escalar ou lista) também é um charter válido *quanto à
forma*; se ele é aceito depende da face alvo (`FaceDescriptor.bare_founder`),
decisão que pertence ao engine.

Regras de forma (por nó):
    - objeto → precisa de `imp` string não vazia
    - `roles`, se presente → objeto com chaves string
    - `data`, se presente → opaco, repassado intacto ao founder
    - chaves além de `imp`, `roles`, `data` → malformado

Invariantes:
    - `parse_charter` valida apenas um nó; sub-charters são validados
      quando (e se) forem resolvidos
    - A ordem das chaves de `roles` é preservada
    - `data` nunca é inspecionado nem copiado
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from charter_assembly.core.errors import AssemblyErrorPayload, malformed_charter

from .errors import MalformedCharterError

CHARTER_KEYS = ("imp", "roles", "data")
ROOT_PATH = "$"

_BARE_TYPES = (str, int, float, bool, list, tuple, type(None))


def child_path(parent: str, role_label: str) -> str:
    return f"{parent}.{role_label}"


@dataclass(frozen=True)
class Charter:
    """Nó de charter validado quanto à forma."""
    imp: Optional[str]
    roles: Dict[str, Any] = field(default_factory=dict)
    data: Any = None
    bare: bool = False

    @classmethod
    def bare_value(cls, value: Any) -> "Charter":
        return cls(imp=None, roles={}, data=value, bare=True)


def _expect(cond: bool, reason: str, **details: Any) -> None:
    if not cond:
        raise MalformedCharterError(reason, details)


def parse_charter(raw: Any) -> Charter:
    """Valida a forma de um nó e o materializa como `Charter`.

    Raises:
        MalformedCharterError: se o nó não respeitar as regras de forma.
    """
    if isinstance(raw, _BARE_TYPES):
        return Charter.bare_value(raw)

    _expect(
        isinstance(raw, Mapping),
        "charter must be an object or a bare scalar/array",
        received=type(raw).__name__,
    )

    extra = [k for k in raw.keys() if k not in CHARTER_KEYS]
    _expect(not extra, "charter has unexpected keys", unexpected_keys=[str(k) for k in extra])

    _expect("imp" in raw, "charter object requires an `imp` field")
    imp = raw["imp"]
    _expect(isinstance(imp, str), "`imp` must be a string", received=type(imp).__name__)
    _expect(bool(imp.strip()), "`imp` must be a non-empty string")

    roles_raw = raw.get("roles", {})
    if roles_raw is None:
        roles_raw = {}
    _expect(isinstance(roles_raw, Mapping), "`roles` must be an object", received=type(roles_raw).__name__)

    bad_keys = [repr(k) for k in roles_raw.keys() if not isinstance(k, str)]
    _expect(not bad_keys, "`roles` keys must be strings", bad_keys=bad_keys)

    return Charter(
        imp=imp,
        roles=dict(roles_raw),
        data=raw.get("data"),
        bare=False,
    )


def validate_charter_tree(raw: Any, *, path: str = ROOT_PATH) -> List[AssemblyErrorPayload]:
    """Verifica a forma de toda a árvore sem consultar o registry.

    Útil para ferramentas que querem rejeitar charters estruturalmente
    inválidos antes de existir um registry. Nós malformados não têm sua
    subárvore inspecionada. A varredura usa uma pilha explícita (pré-ordem,
    roles na ordem do charter), então a profundidade não esbarra no limite
    de recursão do interpretador.
    """
    errors: List[AssemblyErrorPayload] = []
    pending = [(raw, path)]
    while pending:
        current, current_path = pending.pop()
        try:
            node = parse_charter(current)
        except MalformedCharterError as e:
            errors.append(malformed_charter(path=current_path, reason=e.reason, offending=e.details))
            continue

        for role_label, sub in reversed(list(node.roles.items())):
            pending.append((sub, child_path(current_path, role_label)))
    return errors
