from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml

from .errors import (
    CharterFileNotFoundError,
    CharterParseError,
    UnsupportedCharterFormatError,
)


def load_charter(path: Union[str, Path]) -> Any:
    """Carrega um charter a partir de YAML/JSON.

    O conteúdo não é validado aqui: a forma de cada nó é verificada
    durante a resolução (ou por `validate_charter_tree`), de modo que
    todos os defeitos sejam acumulados numa única passada.

    Args:
        path: caminho para arquivo do charter.

    Raises:
        CharterFileNotFoundError: se arquivo não existir.
        UnsupportedCharterFormatError: se extensão não suportada.
        CharterParseError: se parsing falhar ou o arquivo estiver vazio.
    """
    p = Path(path)
    if not p.exists():
        raise CharterFileNotFoundError(f"charter file not found: {p}")

    suffix = p.suffix.lower()
    raw = p.read_text(encoding="utf-8")

    try:
        if suffix in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        elif suffix == ".json":
            data = json.loads(raw)
        else:
            raise UnsupportedCharterFormatError(f"unsupported charter format: {suffix}")
    except UnsupportedCharterFormatError:
        raise
    except Exception as e:
        raise CharterParseError(str(e) or "failed to parse charter") from e

    if data is None:
        # YAML vazio -> None; `null` não é um charter bare útil
        raise CharterParseError("charter file is empty")

    return data
