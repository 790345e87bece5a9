"""Canonical JSON serialization: single dump path for CLI artifacts and locale files.

Guarantees:
  - Stable key ordering (``sort_keys=True`` for artifacts; locale trees keep
    their insertion order, which follows the reference language)
  - Trailing newline at EOF
  - Non-ASCII text written as-is
  - ``Path`` objects → POSIX strings, sets → sorted lists
  - Dataclasses → dicts (via ``dataclasses.asdict``)
"""

from __future__ import annotations

import json
from dataclasses import is_dataclass, asdict
from pathlib import Path
from typing import Any, Mapping


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None:
        return None
    if isinstance(obj, (str, int, bool, float)):
        return obj
    if isinstance(obj, Path):
        return obj.as_posix()
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_builtin(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (set, frozenset)):
        return sorted(_to_builtin(v) for v in obj)
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(v) for v in obj]
    # Fall back to string (keeps CLI resilient)
    return str(obj)


def stable_json_dumps(
    obj: Any,
    *,
    indent: int | None = 2,
    sort_keys: bool = True,
) -> str:
    """
    Canonical JSON serialization used across the CLI and artifacts.

    Pass ``sort_keys=False`` for locale trees so the written file mirrors
    the reference key order.
    """
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
    )
    return s + "\n"
