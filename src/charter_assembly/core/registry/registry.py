"""
Registro de descritores de faces e imps.

Este módulo define o `DescriptorRegistry`, a tabela que mapeia labels para
descritores autodescritivos, com namespaces separados para faces e imps.

Ciclo de vida em duas fases:
    - Inicialização (single-writer): entrypoints de registro de cada módulo
      inserem descritores; conflitos são acumulados no contexto da passada
    - Após `freeze()`: somente leitura; qualquer número de passadas de
      resolução pode consultar o registry concorrentemente sem sincronização

Regra de dedup-ou-conflito:
    - Mesmo label + descritor igual → sucesso silencioso (dedup)
    - Mesmo label + descritor diferente → CONFLICTING_REGISTRATION no contexto
      (o descritor existente é mantido; não há sobrescrita)

Decisões arquiteturais:
    - O registry é um objeto explícito, passado por referência; nunca um
      singleton de processo, de modo que registries independentes coexistam
    - Defeitos de configuração são acumulados; registrar após o freeze é
      erro de programação e levanta `RegistryFrozenError`
    - Em ERROR_CHECK_ONLY a checagem de conflito continua, mas nenhuma
      mutação ocorre; o primeiro descritor de um label novo fica num mapa
      sombra usado só para detectar conflitos posteriores

Limites explícitos:
    - Não resolve charters
    - Não valida que a face de um imp existe (checado na resolução, para
      tolerar ordem arbitrária de registro)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from charter_assembly.core.errors import conflicting_registration, unknown_face, unknown_imp
from charter_assembly.core.exceptions import RegistryFrozenError
from charter_assembly.core.resolution.context import ResolutionContext

from .descriptors import FaceDescriptor, ImpDescriptor


class DescriptorRegistry:
    """Tabela label → descritor para faces e imps, com ciclo de vida init/freeze."""

    def __init__(self) -> None:
        self._faces: Dict[str, FaceDescriptor] = {}
        self._imps: Dict[str, ImpDescriptor] = {}
        # descritores vistos em ERROR_CHECK_ONLY; invisíveis às consultas
        self._shadow_faces: Dict[str, FaceDescriptor] = {}
        self._shadow_imps: Dict[str, ImpDescriptor] = {}
        self._initialized: Set[str] = set()
        self._frozen = False

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _require_mutable(self, what: str, label: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                message="registry is frozen",
                details={"namespace": what, "label": label},
                hint="Registre descritores apenas durante a fase de inicialização.",
            )

    def mark_initialized(self, module_name: str) -> bool:
        """Marca um módulo como inicializado; False se ele já havia sido executado."""
        if module_name in self._initialized:
            return False
        self._require_mutable("module", module_name)
        self._initialized.add(module_name)
        return True

    def initialized_modules(self) -> List[str]:
        return sorted(self._initialized)

    # -----------------------------
    # Registro
    # -----------------------------
    def register_face(self, descriptor: FaceDescriptor, ctx: ResolutionContext) -> None:
        if not isinstance(descriptor, FaceDescriptor):
            raise TypeError("descriptor must be a FaceDescriptor")
        self._require_mutable("face", descriptor.label)
        self._register("face", self._faces, self._shadow_faces, descriptor, ctx, face=descriptor.label)

    def register_imp(self, descriptor: ImpDescriptor, ctx: ResolutionContext) -> None:
        if not isinstance(descriptor, ImpDescriptor):
            raise TypeError("descriptor must be an ImpDescriptor")
        self._require_mutable("imp", descriptor.label)
        self._register(
            "imp",
            self._imps,
            self._shadow_imps,
            descriptor,
            ctx,
            imp=descriptor.label,
            face=descriptor.face_label,
        )

    def _register(
        self,
        namespace: str,
        table: Dict[str, Any],
        shadow: Dict[str, Any],
        descriptor: Any,
        ctx: ResolutionContext,
        **log_extra: Any,
    ) -> None:
        label = descriptor.label
        existing = table.get(label, shadow.get(label))
        if existing is not None:
            if existing != descriptor:
                ctx.record_error(
                    conflicting_registration(
                        namespace=namespace,
                        label=label,
                        existing=existing,
                        incoming=descriptor,
                    )
                )
            return

        if ctx.is_degraded:
            shadow[label] = descriptor
            ctx.log(path="", level="DEBUG", message=f"{namespace} registration skipped (error-check-only)", **log_extra)
            return

        table[label] = descriptor
        ctx.log(path="", level="DEBUG", message=f"{namespace} registered", **log_extra)

    # -----------------------------
    # Consulta
    # -----------------------------
    def get_face(self, label: str, ctx: ResolutionContext, *, path: str = "$") -> Optional[FaceDescriptor]:
        face = self._faces.get(label)
        if face is None:
            ctx.record_error(unknown_face(face_label=label, path=path))
        return face

    def get_imp(self, label: str, ctx: ResolutionContext, *, path: str = "$") -> Optional[ImpDescriptor]:
        imp = self._imps.get(label)
        if imp is None:
            ctx.record_error(unknown_imp(imp_label=label, path=path))
        return imp

    def has_face(self, label: str) -> bool:
        return label in self._faces

    def has_imp(self, label: str) -> bool:
        return label in self._imps

    def list_faces(self) -> List[str]:
        return sorted(self._faces.keys())

    def list_imps(self) -> List[str]:
        return sorted(self._imps.keys())

    def imps_for_face(self, face_label: str) -> List[str]:
        return sorted(label for label, imp in self._imps.items() if imp.face_label == face_label)
