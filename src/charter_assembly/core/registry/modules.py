"""
Entrypoints de registro por módulo e bootstrap do registry.

Cada módulo que contribui faces/imps expõe um entrypoint de registro.
O entrypoint executa os registros do próprio módulo e, em seguida,
invoca os entrypoints dos módulos dos quais depende, na ordem declarada.

Exemplo:

    @registration_entrypoint("ItemOrder", depends_on=[register_number])
    def register_item_order(registry, ctx):
        registry.register_face(FaceDescriptor(label="ItemOrder"), ctx)
        registry.register_imp(ImpDescriptor(...), ctx)

    result = bootstrap(register_item_order)
    assert result.ok

Invariantes:
    - Um entrypoint executa no máximo uma vez por registry (idempotência),
      o que torna seguras dependências em diamante
    - O módulo é marcado antes de recursar, então ciclos entre módulos terminam
    - `bootstrap` congela o registry ao final, com ou sem erros
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from charter_assembly.core.errors import AssemblyErrorPayload
from charter_assembly.core.resolution.context import ResolutionContext

from .registry import DescriptorRegistry

RegisterFn = Callable[[DescriptorRegistry, ResolutionContext], None]


class RegistrationEntrypoint:
    """Entrypoint idempotente de registro de um módulo."""

    def __init__(self, name: str, fn: RegisterFn, depends_on: Sequence["RegistrationEntrypoint"] = ()):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("entrypoint name must be a non-empty string")
        self.name = name
        self.fn = fn
        self.depends_on: Tuple[RegistrationEntrypoint, ...] = tuple(depends_on)
        self.__doc__ = getattr(fn, "__doc__", None)

    def __call__(self, registry: DescriptorRegistry, ctx: ResolutionContext) -> None:
        if not registry.mark_initialized(self.name):
            return

        ctx.log(path="", level="DEBUG", message="module registration started", module=self.name)
        self.fn(registry, ctx)
        for dep in self.depends_on:
            dep(registry, ctx)

    def __repr__(self) -> str:
        return f"RegistrationEntrypoint({self.name!r})"


def registration_entrypoint(
    name: str,
    *,
    depends_on: Iterable[RegistrationEntrypoint] = (),
) -> Callable[[RegisterFn], RegistrationEntrypoint]:
    deps = tuple(depends_on)

    def decorate(fn: RegisterFn) -> RegistrationEntrypoint:
        return RegistrationEntrypoint(name, fn, deps)

    return decorate


@dataclass(frozen=True)
class BootstrapResult:
    """Resultado da passada de inicialização do registry."""
    registry: DescriptorRegistry
    errors: Tuple[AssemblyErrorPayload, ...]
    events: Tuple[Dict[str, Any], ...]

    @property
    def ok(self) -> bool:
        return not self.errors


def bootstrap(
    *entrypoints: RegistrationEntrypoint,
    registry: Optional[DescriptorRegistry] = None,
    record_events: bool = True,
) -> BootstrapResult:
    """
    Executa a fase de inicialização (single-writer) e congela o registry.

    A passada de registro possui seu próprio `ResolutionContext`: após o
    primeiro conflito ela entra em ERROR_CHECK_ONLY, continua verificando
    os módulos restantes e não insere mais descritores.
    """
    reg = registry if registry is not None else DescriptorRegistry()
    ctx = ResolutionContext.new(record_events=record_events, meta={"phase": "registration"})

    for entry in entrypoints:
        entry(reg, ctx)

    reg.freeze()
    ctx.log(
        path="",
        level="INFO",
        message="registry frozen",
        faces=len(reg.list_faces()),
        imps=len(reg.list_imps()),
        errors=ctx.error_count(),
    )

    errors: List[AssemblyErrorPayload] = list(ctx.errors)
    return BootstrapResult(registry=reg, errors=tuple(errors), events=tuple(ctx.events))
