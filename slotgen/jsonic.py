from __future__ import annotations

import json
from typing import Any


def _default(obj: Any) -> Any:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)


def dumps(obj: Any) -> str:
    """
    Compact JSON for CLI output.
    No pretty printing; ensure_ascii=False; the CLI adds the trailing newline.
    """
    return json.dumps(obj, ensure_ascii=False, default=_default)
