from .renderers import (
    RenderResult,
    render_payload,
    render_kv_table_html,
    render_table_html,
    render_card_html,
    render_result,
    clan_tree_text,
)
from .frames import diagnostics_frame, events_frame

__all__ = [
    "RenderResult",
    "render_payload",
    "render_kv_table_html",
    "render_table_html",
    "render_card_html",
    "render_result",
    "clan_tree_text",
    "diagnostics_frame",
    "events_frame",
]
