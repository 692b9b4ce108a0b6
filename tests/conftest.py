# tests/conftest.py
"""
Fixtures compartilhados para testes do Charter Assembly.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (YAML em string)
- registries inicializados com os módulos de exemplo (`tests/fixtures/modules`)
- contexto de passada controlado (ResolutionContext)
- charters canônicos usados em vários testes

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Cada teste recebe um registry novo (nunca compartilhado)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture contém lógica de resolução
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não acoplar testes a um registry global
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults), base do deep-merge.

    Usado por:
        - Testes do loader de config
        - Testes de `EngineSettings.from_config`
    """
    return """\
engine:
  max_depth: 64
  record_events: true
charters:
  search_paths:
    - charters
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de override local (apenas as chaves sobrescritas)."""
    return """\
engine:
  max_depth: 8
"""


# =====================================================
# Registry / contexto
# =====================================================

@pytest.fixture
def empty_registry():
    """Registry novo, mutável e sem descritores."""
    from charter_assembly.core.registry.registry import DescriptorRegistry

    return DescriptorRegistry()


@pytest.fixture
def item_order_registry():
    """
    Registry congelado com os módulos de exemplo `ItemOrder` e `Morphics.Number`.

    O bootstrap parte apenas de `register_item_order`; `Morphics.Number`
    entra pela dependência declarada do entrypoint.
    """
    from charter_assembly.core.registry.modules import bootstrap
    from tests.fixtures.modules.item_order import register_item_order

    result = bootstrap(register_item_order)
    assert result.ok, result.errors
    return result.registry


@pytest.fixture
def dummy_ctx():
    """
    ResolutionContext determinístico (pass_id e created_at fixos).

    Usado por testes de registry e de contexto que precisam inspecionar
    erros/eventos sem passar pelo engine.
    """
    from charter_assembly.core.resolution.context import ResolutionContext

    return ResolutionContext(
        pass_id="pass-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )


# =====================================================
# Charters canônicos
# =====================================================

@pytest.fixture
def blend_charter() -> dict:
    """Charter `ItemOrder.orderByBlend` com w=0.3 e s=0.7."""
    return {
        "imp": "ItemOrder.orderByBlend",
        "roles": {
            "w": {"imp": "Morphics.Number.number", "data": 0.3},
            "s": {"imp": "Morphics.Number.number", "data": 0.7},
        },
    }


@pytest.fixture
def items() -> list:
    return [
        {"id": "a", "weight": 10.0, "size": 1.0},
        {"id": "b", "weight": 1.0, "size": 2.0},
        {"id": "c", "weight": 2.0, "size": 8.0},
    ]
