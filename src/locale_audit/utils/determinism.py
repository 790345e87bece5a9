"""Determinism utilities for CI-reproducible output.

With ``ci_mode`` enabled:
- Timestamps are fixed to a known epoch
- Run IDs are derived from the locale files' content hash

Two CI-mode runs over the same locale tree produce byte-identical JSON.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timezone
from pathlib import Path

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Return FIXED_TIMESTAMP in CI mode, else the current UTC time."""
    if ci_mode:
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def content_digest(locales_dir: Path) -> str:
    """sha256 over every ``*.json`` file under *locales_dir* (path + bytes)."""
    h = hashlib.sha256()
    if locales_dir.is_dir():
        for p in sorted(locales_dir.rglob("*.json")):
            if not p.is_file():
                continue
            h.update(p.relative_to(locales_dir).as_posix().encode("utf-8"))
            h.update(b"\0")
            h.update(p.read_bytes())
            h.update(b"\0")
    return h.hexdigest()


def deterministic_run_id(locales_dir: Path, ci_mode: bool = False) -> str:
    """Content-derived run ID in CI mode, random otherwise."""
    if ci_mode:
        return f"ci-{content_digest(locales_dir)[:16]}"
    return f"run-{uuid.uuid4().hex[:16]}"
