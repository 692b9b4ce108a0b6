# tests/core/resolution/test_engine_errors.py
"""
Testes de acumulação de erros do engine de resolução.

Os testes asseguram que:
- uma passada reporta todos os defeitos independentes (não só o primeiro)
- nenhum founder é invocado após o primeiro erro da passada
- nenhum founder é invocado para um nó com sept falho
- cada tipo de defeito é reportado com o path do nó
- não existe sucesso parcial: qualquer erro implica clan ausente

Decisões arquiteturais:
    - Erros de charter são dados (payloads), nunca exceções
    - Exceções de founders são convertidas em FOUNDER_FAILED
"""

import sys

import pytest

from charter_assembly.core.config.settings import MAX_DEPTH_CEILING, EngineSettings
from charter_assembly.core.errors import (
    CHARTERS_TOO_DEEP,
    FACE_MISMATCH,
    FOUNDER_FAILED,
    MALFORMED_CHARTER,
    ROLE_MISSING,
    UNKNOWN_FACE,
    UNKNOWN_IMP,
    UNKNOWN_ROLE,
)
from charter_assembly.core.exceptions import FounderError, ResolutionFailed
from charter_assembly.core.registry.descriptors import FaceDescriptor, ImpDescriptor, declare_roles
from charter_assembly.core.registry.modules import bootstrap, registration_entrypoint
from charter_assembly.core.resolution.context import ResolutionContext
from charter_assembly.core.resolution.engine import ResolutionEngine, resolve


# -----------------------------------------------------
# Registry instrumentado (conta invocações de founders)
# -----------------------------------------------------

@pytest.fixture
def counting():
    """Registry com founders que registram cada invocação em `calls`."""
    calls = []

    def leaf(data, septs):
        calls.append(("Leaf.value", data))
        return data

    def pair(data, septs):
        calls.append(("Pair.of", tuple(septs)))
        return (septs["a"], septs["b"])

    def failing(data, septs):
        calls.append(("Leaf.failing", data))
        raise ValueError("boom")

    def domain_failing(data, septs):
        calls.append(("Leaf.domainFailing", data))
        raise FounderError(message="invalid leaf data", details={"field": "data", "got": data}, hint="use a number")

    @registration_entrypoint("Counting")
    def register(registry, ctx):
        registry.register_face(FaceDescriptor(label="Leaf"), ctx)
        registry.register_face(FaceDescriptor(label="Pair"), ctx)
        registry.register_imp(ImpDescriptor(label="Leaf.value", face_label="Leaf", founder=leaf), ctx)
        registry.register_imp(ImpDescriptor(label="Leaf.failing", face_label="Leaf", founder=failing), ctx)
        registry.register_imp(
            ImpDescriptor(label="Leaf.domainFailing", face_label="Leaf", founder=domain_failing), ctx
        )
        registry.register_imp(
            ImpDescriptor(
                label="Pair.of",
                face_label="Pair",
                founder=pair,
                roles=declare_roles(("a", "Leaf"), ("b", "Leaf")),
            ),
            ctx,
        )

    result = bootstrap(register)
    assert result.ok
    return result.registry, calls


def _pair(a, b):
    return {"imp": "Pair.of", "roles": {"a": a, "b": b}}


def _leaf(value, imp="Leaf.value"):
    return {"imp": imp, "data": value}


# -----------------------------------------------------
# Completude
# -----------------------------------------------------

def test_all_independent_defects_reported_in_one_pass(item_order_registry):
    """
    Verifica a completude da acumulação de erros.

    Dois roles ausentes em um ramo e um imp desconhecido em outro ramo
    produzem exatamente três erros, em ordem de descoberta.
    """
    charter = {
        "imp": "ItemOrder.thenBy",
        "roles": {
            "primary": {"imp": "ItemOrder.orderByBlend", "roles": {}},
            "secondary": {"imp": "Nonexistent.thing"},
        },
    }
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.clan is None
    assert result.error_types == [ROLE_MISSING, ROLE_MISSING, UNKNOWN_IMP]
    assert [e.path for e in result.errors] == ["$.primary", "$.primary", "$.secondary"]
    assert [e.details.get("role") for e in result.errors[:2]] == ["w", "s"]


def test_malformed_node_does_not_hide_sibling_defects(item_order_registry):
    charter = {
        "imp": "ItemOrder.orderByBlend",
        "roles": {
            "w": {"imp": "Morphics.Number.number", "extra": 1},
            "s": {"imp": "Nonexistent.thing"},
        },
    }
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.error_types == [MALFORMED_CHARTER, UNKNOWN_IMP]
    assert [e.path for e in result.errors] == ["$.w", "$.s"]
    assert result.errors[0].details["unexpected_keys"] == ["extra"]


# -----------------------------------------------------
# Founders não invocados em falha
# -----------------------------------------------------

def test_parent_founder_not_invoked_when_sept_fails(counting):
    registry, calls = counting
    result = resolve(registry, "Pair", _pair(_leaf(1), {"imp": "Nonexistent.thing"}))

    assert result.error_types == [UNKNOWN_IMP]
    # `a` foi construído antes do primeiro erro; `Pair.of` nunca
    assert calls == [("Leaf.value", 1)]


def test_no_founder_invoked_after_first_error(counting):
    registry, calls = counting
    result = resolve(registry, "Pair", _pair({"imp": "Nonexistent.thing"}, _leaf(2)))

    assert result.error_types == [UNKNOWN_IMP]
    assert calls == []


def test_successful_pass_invokes_each_founder_once(counting):
    registry, calls = counting
    result = resolve(registry, "Pair", _pair(_leaf(1), _leaf(2)))

    assert result.ok
    assert result.value == (1, 2)
    assert calls == [("Leaf.value", 1), ("Leaf.value", 2), ("Pair.of", ("a", "b"))]


# -----------------------------------------------------
# Tipos de erro por nó
# -----------------------------------------------------

def test_face_mismatch(item_order_registry):
    result = resolve(item_order_registry, "Number", {"imp": "ItemOrder.byWeight"})

    assert result.error_types == [FACE_MISMATCH]
    err = result.errors[0]
    assert err.details["expected_face"] == "Number"
    assert err.details["actual_face"] == "ItemOrder"


def test_face_mismatch_in_role(item_order_registry):
    charter = {
        "imp": "ItemOrder.orderByBlend",
        "roles": {"w": {"imp": "ItemOrder.byWeight"}, "s": 0.7},
    }
    result = resolve(item_order_registry, "ItemOrder", charter)
    assert result.error_types == [FACE_MISMATCH]
    assert result.errors[0].path == "$.w"


def test_unknown_role_is_reported_and_not_resolved(item_order_registry, blend_charter):
    charter = dict(blend_charter)
    charter["roles"] = dict(blend_charter["roles"], x={"imp": "Nonexistent.thing"})
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.error_types == [UNKNOWN_ROLE]
    err = result.errors[0]
    assert err.details["role"] == "x"
    assert err.details["declared_roles"] == ["w", "s"]


def test_unknown_target_face_keeps_inspecting(item_order_registry):
    """Face desconhecida não interrompe a inspeção do nó."""
    result = resolve(item_order_registry, "Nope", {"imp": "Morphics.Number.number"})
    assert result.error_types == [UNKNOWN_FACE, FACE_MISMATCH]


def test_unknown_role_face(empty_registry, dummy_ctx):
    """Role tipado por uma face nunca registrada: UNKNOWN_FACE no path do sept."""

    def found(data, septs):
        return septs

    empty_registry.register_face(FaceDescriptor(label="Root"), dummy_ctx)
    empty_registry.register_imp(
        ImpDescriptor(label="Root.r", face_label="Root", founder=found, roles=declare_roles(("c", "Ghost"))),
        dummy_ctx,
    )
    assert dummy_ctx.errors == []

    result = resolve(empty_registry, "Root", {"imp": "Root.r", "roles": {"c": {"imp": "Ghost.g"}}})
    assert result.error_types == [UNKNOWN_FACE, UNKNOWN_IMP]
    assert [e.path for e in result.errors] == ["$.c", "$.c"]


def test_malformed_root():
    from charter_assembly.core.registry.registry import DescriptorRegistry

    result = resolve(DescriptorRegistry(), "Anything", {"imp": 3})
    assert result.error_types == [UNKNOWN_FACE, MALFORMED_CHARTER]


# -----------------------------------------------------
# Roles opcionais e charters bare
# -----------------------------------------------------

def test_optional_role_may_be_omitted(item_order_registry, items):
    charter = {"imp": "ItemOrder.thenBy", "roles": {"primary": {"imp": "ItemOrder.byWeight"}}}
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.ok
    assert list(result.clan.septs) == ["primary"]
    assert result.value.secondary is None
    assert [i["id"] for i in result.value(items)] == ["b", "c", "a"]


def test_optional_role_when_supplied(item_order_registry, blend_charter):
    charter = {
        "imp": "ItemOrder.thenBy",
        "roles": {"primary": {"imp": "ItemOrder.byWeight", "data": {"descending": True}}, "secondary": blend_charter},
    }
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.ok
    assert list(result.clan.septs) == ["primary", "secondary"]
    assert result.value.key({"weight": 2.0, "size": 1.0}) == pytest.approx((-2.0, 0.3 * 2.0 + 0.7 * 1.0))


def test_bare_values_for_face_with_bare_founder(item_order_registry, items):
    charter = {"imp": "ItemOrder.orderByBlend", "roles": {"w": 0.3, "s": 0.7}}
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.ok
    assert result.clan.septs["w"].imp_label is None
    assert [i["id"] for i in result.value(items)] == ["b", "a", "c"]


def test_bare_value_rejected_for_face_without_bare_founder(item_order_registry):
    charter = {"imp": "ItemOrder.thenBy", "roles": {"primary": "ItemOrder.byWeight"}}
    result = resolve(item_order_registry, "ItemOrder", charter)

    assert result.error_types == [MALFORMED_CHARTER]
    assert result.errors[0].path == "$.primary"
    assert result.errors[0].details["face"] == "ItemOrder"


# -----------------------------------------------------
# Profundidade
# -----------------------------------------------------

def _then_by_chain(levels):
    node = {"imp": "ItemOrder.byWeight"}
    for _ in range(levels):
        node = {"imp": "ItemOrder.thenBy", "roles": {"primary": node}}
    return node


def test_depth_limit(item_order_registry):
    engine = ResolutionEngine(registry=item_order_registry, settings=EngineSettings(max_depth=2))
    result = engine.resolve("ItemOrder", _then_by_chain(3))

    assert result.error_types == [CHARTERS_TOO_DEEP]
    assert result.errors[0].path == "$.primary.primary.primary"
    assert result.errors[0].details["max_depth"] == 2


def test_depth_at_limit_is_ok(item_order_registry):
    engine = ResolutionEngine(registry=item_order_registry, settings=EngineSettings(max_depth=3))
    assert engine.resolve("ItemOrder", _then_by_chain(3)).ok


def test_depth_ceiling_stops_chain_deeper_than_recursion_limit(item_order_registry):
    """
    Com o maior `max_depth` permitido, uma cadeia muito mais profunda que o
    limite de recursão do interpretador termina em CHARTERS_TOO_DEEP.

    Invariantes:
        - Nenhum RecursionError escapa da passada
        - O erro aponta o primeiro nó além do limite
    """
    levels = sys.getrecursionlimit() * 3
    engine = ResolutionEngine(registry=item_order_registry, settings=EngineSettings(max_depth=MAX_DEPTH_CEILING))

    result = engine.resolve("ItemOrder", _then_by_chain(levels))

    assert result.error_types == [CHARTERS_TOO_DEEP]
    assert result.errors[0].path == "$" + ".primary" * (MAX_DEPTH_CEILING + 1)
    assert result.errors[0].details["max_depth"] == MAX_DEPTH_CEILING
    assert result.clan is None


# -----------------------------------------------------
# Falhas de founders
# -----------------------------------------------------

def test_founder_exception_becomes_payload(counting):
    registry, calls = counting
    result = resolve(registry, "Pair", _pair(_leaf(1, "Leaf.failing"), _leaf(2)))

    assert result.error_types == [FOUNDER_FAILED]
    err = result.errors[0]
    assert err.path == "$.a"
    assert err.details["exception_class"] == "ValueError"
    assert err.details["reason"] == "boom"
    assert err.details["imp"] == "Leaf.failing"
    # após a falha, `b` e `Pair.of` não são construídos
    assert calls == [("Leaf.failing", 1)]


def test_domain_founder_error_keeps_details_and_hint(counting):
    registry, _ = counting
    result = resolve(registry, "Leaf", _leaf("x", "Leaf.domainFailing"))

    err = result.errors[0]
    assert err.type == FOUNDER_FAILED
    assert err.details["exception_class"] == "FounderError"
    assert err.details["field"] == "data"
    assert err.details["got"] == "x"
    assert err.details["path"] == "$"
    assert err.hint == "use a number"


# -----------------------------------------------------
# Resultado
# -----------------------------------------------------

def test_raise_for_errors(item_order_registry):
    result = resolve(item_order_registry, "ItemOrder", {"imp": "Nonexistent.thing"})
    with pytest.raises(ResolutionFailed) as exc:
        result.raise_for_errors()
    assert exc.value.details["errors"][0]["type"] == UNKNOWN_IMP


def test_raise_for_errors_returns_clan_on_success(item_order_registry, blend_charter):
    result = resolve(item_order_registry, "ItemOrder", blend_charter)
    assert result.raise_for_errors() is result.clan


def test_caller_supplied_context(item_order_registry):
    ctx = ResolutionContext.new(meta={"caller": "test"})
    result = ResolutionEngine(registry=item_order_registry).resolve("ItemOrder", {"imp": "Nonexistent.thing"}, ctx=ctx)

    assert result.pass_id == ctx.pass_id
    assert ctx.is_degraded
    assert list(result.errors) == ctx.errors


def test_events_bracket_the_pass(item_order_registry, blend_charter):
    result = resolve(item_order_registry, "ItemOrder", blend_charter)
    assert result.events[0]["message"] == "resolution started"
    assert result.events[-1]["message"] == "resolution finished"
    assert result.events[-1]["status"] == "success"
    invoked = [ev["path"] for ev in result.events if ev["message"] == "founder invoked"]
    assert invoked == ["$.w", "$.s", "$"]


def test_events_can_be_disabled(item_order_registry, blend_charter):
    result = resolve(item_order_registry, "ItemOrder", blend_charter, settings=EngineSettings(record_events=False))
    assert result.ok
    assert result.events == ()
