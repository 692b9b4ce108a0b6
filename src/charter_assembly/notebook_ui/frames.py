"""
Visões tabulares (pandas) de resultados de resolução.

Apenas apresentação: os DataFrames são derivados dos payloads e nunca
os alteram.
"""

from __future__ import annotations

from typing import Any

from charter_assembly.core.resolution.types import ResolutionResult

DIAGNOSTIC_COLUMNS = ["type", "path", "message", "hint"]


def diagnostics_frame(result: ResolutionResult[Any]) -> Any:
    """Um erro por linha, na ordem de descoberta (colunas `DIAGNOSTIC_COLUMNS`)."""
    try:
        import pandas as pd  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("pandas is required for diagnostics_frame") from e

    rows = [
        {"type": e.type, "path": e.path, "message": e.message, "hint": e.hint}
        for e in result.errors
    ]
    return pd.DataFrame(rows, columns=DIAGNOSTIC_COLUMNS)


def events_frame(result: ResolutionResult[Any]) -> Any:
    """Event Log da passada como DataFrame (colunas = união das chaves)."""
    try:
        import pandas as pd  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("pandas is required for events_frame") from e

    return pd.DataFrame([dict(ev) for ev in result.events])
