"""
Charter Assembly — montagem de componentes guiada por charters.

Este pacote raiz define o namespace público do Charter Assembly. Um
programa declara faces (interfaces) e imps (implementações com roles)
em um registry; um charter JSON/YAML descreve qual imp preenche cada
slot; o engine valida o charter contra o registry e constrói a árvore
de componentes concretos (clan), reportando todos os defeitos de uma vez.

Arquitetura em alto nível:
    - core.registry     → descritores, registry e bootstrap por módulo
    - core.charter      → forma, leitura e hashing de charters
    - core.resolution   → engine recursivo e contexto de erros
    - core.traceability → relatório serializável de uma passada
    - notebook_ui       → renderizadores puros para notebooks

Limites explícitos:
    - Não verifica estaticamente a conformidade de interfaces
    - Não busca wiring automaticamente
    - Não define semântica de execução dos componentes montados
"""

from .core.charter.loader import load_charter
from .core.charter.model import Charter, parse_charter, validate_charter_tree
from .core.config.loader import load_settings
from .core.config.settings import EngineSettings
from .core.errors import AssemblyErrorPayload
from .core.exceptions import AssemblyException, RegistryFrozenError, ResolutionFailed
from .core.registry.descriptors import FaceDescriptor, ImpDescriptor, RoleDescriptor, declare_roles
from .core.registry.modules import BootstrapResult, bootstrap, registration_entrypoint
from .core.registry.registry import DescriptorRegistry
from .core.resolution.context import ContextMode, ResolutionContext
from .core.resolution.engine import ResolutionEngine, resolve
from .core.resolution.types import Clan, ResolutionResult

__all__ = [
    "AssemblyErrorPayload",
    "AssemblyException",
    "BootstrapResult",
    "Charter",
    "Clan",
    "ContextMode",
    "DescriptorRegistry",
    "EngineSettings",
    "FaceDescriptor",
    "ImpDescriptor",
    "RegistryFrozenError",
    "ResolutionContext",
    "ResolutionEngine",
    "ResolutionFailed",
    "ResolutionResult",
    "RoleDescriptor",
    "bootstrap",
    "declare_roles",
    "load_charter",
    "load_settings",
    "parse_charter",
    "registration_entrypoint",
    "resolve",
    "validate_charter_tree",
]
