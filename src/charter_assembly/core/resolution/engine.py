"""
Engine de resolução de charters do Charter Assembly.

Dado o label de uma face alvo e um charter, o engine consulta o registry,
valida a compatibilidade de interfaces a cada nó e constrói recursivamente
a árvore de componentes (clan), acumulando todos os defeitos encontrados
no `ResolutionContext` da passada.

Algoritmo por nó (path `$` na raiz, `$.<role>` a cada nível):
    1. Profundidade acima de `max_depth` → CHARTERS_TOO_DEEP, ausente
    2. Face alvo desconhecida → UNKNOWN_FACE (a inspeção continua)
    3. Forma inválida → MALFORMED_CHARTER, ausente (único curto-circuito local)
    4. Charter bare → aceito apenas se a face possui `bare_founder`
    5. Imp desconhecido → UNKNOWN_IMP, ausente
    6. Imp de outra face → FACE_MISMATCH, ausente
    7. Roles declarados, em ordem de declaração: ausente → ROLE_MISSING;
       presente → resolução recursiva com a face do role
    8. Chaves extras em `roles` → UNKNOWN_ROLE (sub-charter não é resolvido)
    9. Founder invocado somente se nenhum erro foi registrado na passada
       (modo NORMAL) e todos os septs obrigatórios foram construídos

Guardrails:
- Exceções levantadas por founders são capturadas e convertidas em
  payload FOUNDER_FAILED; `AssemblyException` preserva details/hint.
- Nenhum stack trace cru é exposto no payload.

Concorrência:
- O engine não guarda estado por passada; cada `resolve` usa seu próprio
  contexto, então passadas concorrentes sobre um registry congelado são seguras.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, cast

from charter_assembly.core.charter.errors import MalformedCharterError
from charter_assembly.core.charter.model import ROOT_PATH, Charter, child_path, parse_charter
from charter_assembly.core.config.loader import load_settings
from charter_assembly.core.config.settings import EngineSettings
from charter_assembly.core.errors import (
    AssemblyErrorPayload,
    charters_too_deep,
    face_mismatch,
    founder_failed,
    malformed_charter,
    role_missing,
    unknown_role,
)
from charter_assembly.core.exceptions import AssemblyException

from .context import ResolutionContext
from .types import Clan, ResolutionResult

if TYPE_CHECKING:
    from charter_assembly.core.registry.descriptors import FaceDescriptor, ImpDescriptor
    from charter_assembly.core.registry.registry import DescriptorRegistry


class ResolutionEngine:
    """Engine canônico de resolução (registry + settings)."""

    def __init__(self, *, registry: "DescriptorRegistry", settings: Optional[EngineSettings] = None):
        self.registry = registry
        self.settings: EngineSettings = settings if settings is not None else EngineSettings()

    @classmethod
    def from_config_files(
        cls,
        registry: "DescriptorRegistry",
        *,
        defaults_path: str,
        local_path: Optional[str] = None,
    ) -> "ResolutionEngine":
        """Cria o engine com settings carregados de defaults (+ local opcional)."""
        settings = load_settings(defaults_path=defaults_path, local_path=local_path)
        return cls(registry=registry, settings=settings)

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    def resolve(
        self,
        face_label: str,
        charter: Any,
        *,
        ctx: Optional[ResolutionContext] = None,
    ) -> ResolutionResult[Any]:
        if ctx is None:
            ctx = ResolutionContext.new(
                record_events=self.settings.record_events,
                meta={"face": face_label},
            )

        ctx.log(path=ROOT_PATH, level="INFO", message="resolution started", face=face_label)
        clan = self._resolve_node(face_label, charter, path=ROOT_PATH, depth=0, ctx=ctx)

        # Sem sucesso parcial: qualquer erro descarta a árvore inteira
        if ctx.has_errors:
            clan = None

        ctx.log(
            path=ROOT_PATH,
            level="INFO" if clan is not None else "ERROR",
            message="resolution finished",
            status="success" if clan is not None else "failed",
            errors=ctx.error_count(),
        )
        return ResolutionResult(
            face_label=face_label,
            pass_id=ctx.pass_id,
            clan=clan,
            errors=tuple(ctx.errors),
            events=tuple(ctx.events),
        )

    # ------------------------------------------------------------------
    # Recursão
    # ------------------------------------------------------------------
    def _resolve_node(
        self,
        face_label: str,
        raw: Any,
        *,
        path: str,
        depth: int,
        ctx: ResolutionContext,
    ) -> Optional[Clan[Any]]:
        if depth > self.settings.max_depth:
            ctx.record_error(charters_too_deep(path=path, depth=depth, max_depth=self.settings.max_depth))
            return None

        face = self.registry.get_face(face_label, ctx, path=path)

        try:
            node = parse_charter(raw)
        except MalformedCharterError as e:
            ctx.record_error(malformed_charter(path=path, reason=e.reason, offending=e.details))
            return None

        if node.bare:
            return self._resolve_bare(face, face_label, node, path=path, ctx=ctx)

        # nó não-bare sempre tem `imp` (garantido por parse_charter)
        imp = self.registry.get_imp(cast(str, node.imp), ctx, path=path)
        if imp is None:
            return None

        if imp.face_label != face_label:
            ctx.record_error(
                face_mismatch(
                    path=path,
                    imp_label=imp.label,
                    expected_face=face_label,
                    actual_face=imp.face_label,
                )
            )
            return None

        septs: Dict[str, Clan[Any]] = {}
        complete = True
        for role in imp.roles:
            if role.label not in node.roles:
                if role.optional:
                    continue
                ctx.record_error(
                    role_missing(
                        path=path,
                        imp_label=imp.label,
                        role_label=role.label,
                        face_label=role.face_label,
                    )
                )
                complete = False
                continue

            sept = self._resolve_node(
                role.face_label,
                node.roles[role.label],
                path=child_path(path, role.label),
                depth=depth + 1,
                ctx=ctx,
            )
            if sept is None:
                complete = False
            else:
                septs[role.label] = sept

        declared = set(imp.role_labels)
        for role_label in node.roles:
            if role_label not in declared:
                ctx.record_error(
                    unknown_role(
                        path=path,
                        imp_label=imp.label,
                        role_label=role_label,
                        declared_roles=list(imp.role_labels),
                    )
                )

        # Qualquer erro na passada (neste nó, nos septs ou em outro ramo) já
        # degradou o contexto: a partir daqui só há verificação estrutural.
        if not complete or ctx.is_degraded:
            return None

        return self._found(imp, face_label, node, septs, path=path, ctx=ctx)

    def _resolve_bare(
        self,
        face: Optional["FaceDescriptor"],
        face_label: str,
        node: Charter,
        *,
        path: str,
        ctx: ResolutionContext,
    ) -> Optional[Clan[Any]]:
        if face is None:
            return None

        if not face.accepts_bare:
            ctx.record_error(
                malformed_charter(
                    path=path,
                    reason="face does not accept bare-value charters",
                    offending={"face": face_label, "received": type(node.data).__name__},
                )
            )
            return None

        if ctx.is_degraded:
            return None

        # accepts_bare implica bare_founder definido
        bare_founder = cast(Callable[[Any], Any], face.bare_founder)
        try:
            value = bare_founder(node.data)
        except Exception as exc:
            ctx.record_error(self._exception_to_error(exc, path=path, imp_label=None, face_label=face_label))
            return None

        ctx.log(path=path, level="DEBUG", message="bare founder invoked", face=face_label)
        return Clan(value=value, face_label=face_label, imp_label=None, septs={}, data=node.data)

    # ------------------------------------------------------------------
    # Founders
    # ------------------------------------------------------------------
    def _found(
        self,
        imp: "ImpDescriptor",
        face_label: str,
        node: Charter,
        septs: Dict[str, Clan[Any]],
        *,
        path: str,
        ctx: ResolutionContext,
    ) -> Optional[Clan[Any]]:
        sept_values = {label: sept.value for label, sept in septs.items()}
        try:
            value = imp.founder(node.data, sept_values)
        except Exception as exc:
            ctx.record_error(self._exception_to_error(exc, path=path, imp_label=imp.label, face_label=face_label))
            return None

        ctx.log(path=path, level="DEBUG", message="founder invoked", imp=imp.label, face=face_label)
        return Clan(value=value, face_label=face_label, imp_label=imp.label, septs=septs, data=node.data)

    def _exception_to_error(
        self,
        exc: Exception,
        *,
        path: str,
        imp_label: Optional[str],
        face_label: str,
    ) -> AssemblyErrorPayload:
        """Converte exceções de founders em payload FOUNDER_FAILED.

        Regras:
        - AssemblyException: details/hint do founder são preservados.
        - Outras exceções: apenas classe e mensagem, sem stack trace.
        """
        if isinstance(exc, AssemblyException):
            payload = founder_failed(
                path=path,
                imp_label=imp_label,
                face_label=face_label,
                exception_class=exc.__class__.__name__,
                reason=exc.message,
                extra=dict(exc.details or {}),
            )
            if exc.hint:
                payload = replace(payload, hint=exc.hint)
            return payload

        return founder_failed(
            path=path,
            imp_label=imp_label,
            face_label=face_label,
            exception_class=exc.__class__.__name__,
            reason=str(exc) or "Erro inesperado no founder",
        )


def resolve(
    registry: "DescriptorRegistry",
    face_label: str,
    charter: Any,
    *,
    settings: Optional[EngineSettings] = None,
) -> ResolutionResult[Any]:
    """Atalho: `resolve(face, charter) -> (clan | ausente, erros ordenados)`."""
    return ResolutionEngine(registry=registry, settings=settings).resolve(face_label, charter)
