"""
Notebook UI Adapter (v1)

Objetivo:
- Renderizar payloads de erro, relatórios e clans para leitura em notebooks.
- NÃO altera payloads.
- NÃO resolve charters nem consulta o registry.
- Consome apenas estruturas de resultado (`ResolutionResult`, `Clan`).

Saídas:
- HTML (string) quando possível
- fallback seguro em string (JSON pretty, árvore textual ou repr)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Optional
import copy
import html
import json

from charter_assembly.core.charter.model import ROOT_PATH
from charter_assembly.core.resolution.types import Clan, ResolutionResult


@dataclass(frozen=True)
class RenderResult:
    """Resultado de renderização (apenas apresentação)."""
    html: Optional[str]  # HTML string (quando aplicável)
    text: str            # fallback textual (sempre preenchido)


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _as_pretty_json(payload: Any) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    except TypeError:
        return repr(payload)


def render_payload(payload: Any) -> RenderResult:
    """
    Renderizador genérico:
    - dict (ex.: `AssemblyErrorPayload.to_dict()`) -> tabela key/value
    - list[dict] (ex.: lista de erros ou eventos) -> tabela
    - caso contrário -> JSON pretty (fallback)

    Pureza verificada apenas para tipos mutáveis comuns (dict, list).
    """
    before = copy.deepcopy(payload) if isinstance(payload, (dict, list)) else None

    html_out: Optional[str] = None
    text_out: str

    if isinstance(payload, Mapping):
        html_out = render_kv_table_html(payload)
        text_out = _as_pretty_json(payload)
    elif isinstance(payload, Sequence) and not isinstance(payload, (str, bytes, bytearray)):
        html_out = render_table_html(payload)
        text_out = _as_pretty_json(payload)
    else:
        text_out = _as_pretty_json(payload)

    after = copy.deepcopy(payload) if isinstance(payload, (dict, list)) else None
    if before is not None and before != after:
        raise AssertionError("Notebook UI renderer mutated the input payload")

    return RenderResult(html=html_out, text=text_out)


def render_kv_table_html(payload: Mapping[str, Any], title: Optional[str] = None) -> str:
    """Renderiza dict como tabela key/value (HTML puro)."""
    rows = "".join(
        f"<tr><td><code>{_escape(k)}</code></td><td>{_escape(v)}</td></tr>"
        for k, v in payload.items()
    )
    heading = f"<h4>{_escape(title)}</h4>" if title else ""
    return (
        f"{heading}"
        "<table>"
        "<thead><tr><th>key</th><th>value</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
    )


def _columns(items: Sequence[Mapping[str, Any]]) -> List[str]:
    # união das chaves, na ordem em que aparecem
    columns: List[str] = []
    for row in items:
        for k in row.keys():
            if k not in columns:
                columns.append(k)
    return columns


def render_table_html(payload: Sequence[Any], title: Optional[str] = None, max_rows: int = 50) -> str:
    """
    Renderiza listas como tabela:
    - list[dict] -> colunas = união das chaves (ordem estável)
    - caso contrário -> tabela de 1 coluna (value)
    """
    items = list(payload)[:max_rows]
    heading = f"<h4>{_escape(title)}</h4>" if title else ""

    if not items:
        return f"{heading}<div><em>(empty)</em></div>"

    if all(isinstance(x, Mapping) for x in items):
        columns = _columns(items)
        th = "".join(f"<th>{_escape(c)}</th>" for c in columns)
        trs = "".join(
            "<tr>" + "".join(f"<td>{_escape(row.get(c))}</td>" for c in columns) + "</tr>"
            for row in items
        )
        return f"{heading}<table><thead><tr>{th}</tr></thead><tbody>{trs}</tbody></table>"

    trs = "".join(f"<tr><td>{_escape(x)}</td></tr>" for x in items)
    return (
        f"{heading}"
        "<table>"
        "<thead><tr><th>value</th></tr></thead>"
        f"<tbody>{trs}</tbody>"
        "</table>"
    )


def render_card_html(payload: Mapping[str, Any], title: str, subtitle: Optional[str] = None) -> str:
    """Renderiza um card simples em HTML (apresentação pura)."""
    st = f"<div style='opacity:0.75'>{_escape(subtitle)}</div>" if subtitle else ""
    body = render_kv_table_html(payload)
    return (
        "<div style='border:1px solid #ddd; border-radius:12px; padding:12px; margin:8px 0;'>"
        f"<h3 style='margin:0 0 6px 0;'>{_escape(title)}</h3>"
        f"{st}"
        f"{body}"
        "</div>"
    )


def clan_tree_text(clan: Clan[Any]) -> str:
    """
    Árvore textual de um clan, uma linha por nó em pré-ordem:

        $ : ItemOrder <- ItemOrder.orderByBlend
          $.w : Number <- Morphics.Number.number
    """
    lines = []
    for path, node in clan.walk(ROOT_PATH):
        indent = "  " * path.count(".")
        imp = node.imp_label if node.imp_label is not None else "(bare)"
        lines.append(f"{indent}{path} : {node.face_label} <- {imp}")
    return "\n".join(lines)


def render_result(result: ResolutionResult[Any]) -> RenderResult:
    """
    Renderiza o desfecho de uma passada:
    - sucesso -> card com a face alvo + árvore do clan
    - falha   -> card com a contagem + tabela de erros (type, path, message, hint)
    """
    if result.ok and result.clan is not None:
        tree = clan_tree_text(result.clan)
        header = {"face": result.face_label, "pass_id": result.pass_id, "status": "success"}
        html_out = (
            render_card_html(header, title="Resolution succeeded")
            + f"<pre>{_escape(tree)}</pre>"
        )
        return RenderResult(html=html_out, text=tree)

    rows = [
        {"type": e.type, "path": e.path, "message": e.message, "hint": e.hint}
        for e in result.errors
    ]
    header = {"face": result.face_label, "pass_id": result.pass_id, "errors": len(rows)}
    html_out = (
        render_card_html(header, title="Resolution failed")
        + render_table_html(rows, title="errors", max_rows=max(len(rows), 1))
    )
    text_out = "\n".join(f"[{r['type']}] {r['path']}: {r['message']}" for r in rows)
    return RenderResult(html=html_out, text=text_out)
