"""Finding: one reportable problem for a (language, namespace) pair."""

from __future__ import annotations

from dataclasses import dataclass

from . import FindingKind, Severity


@dataclass(frozen=True, slots=True)
class Finding:
    """Immutable, schema-aligned finding.

    Corresponds to ``findings[]`` in ``audit_result.schema.json``.
    ``keys`` is sorted and empty for file-level kinds.
    """

    kind: FindingKind
    lang: str
    namespace: str
    keys: tuple[str, ...] = ()
    detail: str = ""

    @property
    def severity(self) -> Severity:
        return self.kind.severity

    @property
    def is_blocking(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def file_label(self) -> str:
        return f"{self.lang}/{self.namespace}.json"

    def sample(self, limit: int) -> tuple[tuple[str, ...], int]:
        """First *limit* keys and how many were left out."""
        shown = self.keys[:limit]
        return shown, len(self.keys) - len(shown)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "lang": self.lang,
            "namespace": self.namespace,
            "keys": list(self.keys),
            "detail": self.detail,
        }
