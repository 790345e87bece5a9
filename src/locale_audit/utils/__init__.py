"""Shared utilities for locale_audit."""

from locale_audit.utils.determinism import (
    FIXED_TIMESTAMP,
    content_digest,
    deterministic_run_id,
    deterministic_timestamp,
)
from locale_audit.utils.json_norm import stable_json_dumps

__all__ = [
    "FIXED_TIMESTAMP",
    "content_digest",
    "deterministic_run_id",
    "deterministic_timestamp",
    "stable_json_dumps",
]
