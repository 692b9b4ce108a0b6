from __future__ import annotations

import hashlib
import json
from typing import Any


def compute_charter_hash(charter: Any) -> str:
    """SHA-256 do JSON canônico de um charter (qualquer valor JSON, não só dict)."""
    canonical_json = json.dumps(
        charter,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
