"""Run results: per-pair reconciliation outcomes and their aggregates.

Every (language, namespace) pair yields one immutable ``NamespaceResult``.
Per-language totals are derived by :func:`fold_language_stats`; nothing
accumulates counters across calls.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from locale_audit import __version__
from locale_audit.core.config import LocaleConfig
from locale_audit.model import FindingKind, Severity
from locale_audit.model.finding import Finding
from locale_audit.policy.exit_codes import DEFAULT_POLICY, ExitCodePolicy, is_blocking


def coverage_percentage(translated: int, total: int) -> int:
    """``round(100 * translated / total)``; an empty namespace counts as complete."""
    if total <= 0:
        return 100
    return round(100 * translated / total)


@dataclass(frozen=True, slots=True)
class NamespaceResult:
    """Outcome of reconciling one target namespace file against the reference."""

    lang: str
    namespace: str
    total: int
    exists: bool = True
    parse_error: str | None = None
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()
    untranslated: tuple[str, ...] = ()
    # Placeholders sitting on reference keys; extra keys never count.
    pending: int = 0

    @property
    def readable(self) -> bool:
        return self.exists and self.parse_error is None

    @property
    def translated(self) -> int:
        return max(self.total - len(self.missing) - self.pending, 0)

    @property
    def percentage(self) -> int:
        return coverage_percentage(self.translated, self.total)

    @property
    def is_complete(self) -> bool:
        return self.readable and not self.missing and not self.untranslated and not self.extra

    def findings(self) -> list[Finding]:
        if not self.exists:
            return [Finding(FindingKind.MISSING_FILE, self.lang, self.namespace,
                            detail="file missing")]
        if self.parse_error is not None:
            return [Finding(FindingKind.PARSE_ERROR, self.lang, self.namespace,
                            detail=self.parse_error)]
        out: list[Finding] = []
        if self.missing:
            out.append(Finding(FindingKind.MISSING_KEY, self.lang, self.namespace,
                               keys=self.missing,
                               detail=f"{len(self.missing)} missing keys"))
        if self.untranslated:
            out.append(Finding(FindingKind.UNTRANSLATED, self.lang, self.namespace,
                               keys=self.untranslated,
                               detail=f"{len(self.untranslated)} untranslated keys"))
        if self.extra:
            out.append(Finding(FindingKind.EXTRA_KEY, self.lang, self.namespace,
                               keys=self.extra,
                               detail=f"{len(self.extra)} extra keys"))
        return out

    def to_dict(self) -> dict[str, Any]:
        return {
            "exists": self.exists,
            "parse_error": self.parse_error,
            "translated": self.translated,
            "untranslated": self.pending,
            "missing": len(self.missing),
            "extra": len(self.extra),
            "percentage": self.percentage,
        }


@dataclass(frozen=True, slots=True)
class LanguageStats:
    """Aggregate coverage for one target language across all namespaces."""

    total: int = 0
    translated: int = 0
    untranslated: int = 0
    missing: int = 0

    @property
    def percentage(self) -> int:
        return coverage_percentage(self.translated, self.total)

    def __add__(self, other: "LanguageStats") -> "LanguageStats":
        return LanguageStats(
            total=self.total + other.total,
            translated=self.translated + other.translated,
            untranslated=self.untranslated + other.untranslated,
            missing=self.missing + other.missing,
        )

    @classmethod
    def of(cls, result: NamespaceResult) -> "LanguageStats":
        return cls(
            total=result.total,
            translated=result.translated,
            untranslated=result.pending,
            missing=len(result.missing),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "translated": self.translated,
            "untranslated": self.untranslated,
            "missing": self.missing,
            "percentage": self.percentage,
        }


def fold_language_stats(
    results: Iterable[NamespaceResult],
    langs: Iterable[str],
) -> dict[str, LanguageStats]:
    """Sum per-pair results into per-language totals, keyed in *langs* order."""
    stats: dict[str, LanguageStats] = {lang: LanguageStats() for lang in langs}
    for r in results:
        stats[r.lang] = stats.get(r.lang, LanguageStats()) + LanguageStats.of(r)
    return stats


@dataclass(slots=True)
class AuditResult:
    """Assembled audit/check/report result matching ``audit_result.schema.json``."""

    command: str
    config: LocaleConfig
    # namespace -> reference key count, in processing order
    reference_counts: dict[str, int] = field(default_factory=dict)
    results: list[NamespaceResult] = field(default_factory=list)
    reference_findings: list[Finding] = field(default_factory=list)
    run_id: str = ""
    created_at: str = ""
    tool_version: str = __version__
    # Decides ``passed``; the errors/warnings counts follow severity.
    policy: ExitCodePolicy = DEFAULT_POLICY

    @property
    def namespaces(self) -> list[str]:
        return list(self.reference_counts)

    @property
    def findings(self) -> list[Finding]:
        out = list(self.reference_findings)
        for r in self.results:
            out.extend(r.findings())
        return out

    @property
    def errors(self) -> int:
        return sum(1 for f in self.findings if f.severity is Severity.ERROR)

    @property
    def warnings(self) -> int:
        return sum(1 for f in self.findings if f.severity is Severity.WARNING)

    @property
    def blocking(self) -> list[Finding]:
        return [f for f in self.findings if is_blocking(f, self.policy)]

    @property
    def passed(self) -> bool:
        return not self.blocking

    def results_for(self, namespace: str) -> dict[str, NamespaceResult]:
        return {r.lang: r for r in self.results if r.namespace == namespace}

    def language_stats(self) -> dict[str, LanguageStats]:
        return fold_language_stats(self.results, self.config.target_langs)

    def to_dict(self) -> dict[str, Any]:
        findings = self.findings
        blocking = [f for f in findings if is_blocking(f, self.policy)]
        by_kind = Counter(f.kind.value for f in findings)
        return {
            "schema_version": "audit_result_v1",
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "command": self.command,
                "config": self.config.to_dict(),
                "policy": self.policy.to_dict(),
            },
            "summary": {
                "passed": not blocking,
                "blocking": len(blocking),
                "errors": sum(1 for f in findings if f.severity is Severity.ERROR),
                "warnings": sum(1 for f in findings if f.severity is Severity.WARNING),
                "by_kind": dict(sorted(by_kind.items())),
            },
            "languages": {
                lang: stats.to_dict() for lang, stats in self.language_stats().items()
            },
            "namespaces": [
                {
                    "namespace": ns,
                    "total": total,
                    "languages": {
                        lang: r.to_dict() for lang, r in self.results_for(ns).items()
                    },
                }
                for ns, total in self.reference_counts.items()
            ],
            "findings": [f.to_dict() for f in findings],
        }


@dataclass(frozen=True, slots=True)
class SyncChange:
    """What sync or skeleton generation did (or would do) to one target file."""

    lang: str
    namespace: str
    created: bool = False
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    remarked: int = 0
    changed: bool = False
    written: bool = False
    error: str | None = None

    @property
    def file_label(self) -> str:
        return f"{self.lang}/{self.namespace}.json"


@dataclass(slots=True)
class SyncResult:
    """Outcome of a sync or skeleton run."""

    command: str
    dry_run: bool = False
    changes: list[SyncChange] = field(default_factory=list)
    created_dirs: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def changed(self) -> list[SyncChange]:
        return [c for c in self.changes if c.changed]

    @property
    def failed(self) -> list[SyncChange]:
        return [c for c in self.changes if c.error is not None]

    @property
    def keys_added(self) -> int:
        return sum(len(c.added) for c in self.changed)

    @property
    def keys_removed(self) -> int:
        return sum(len(c.removed) for c in self.changed)

    @property
    def files_created(self) -> int:
        return sum(1 for c in self.changed if c.created)

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "dry_run": self.dry_run,
            "created_dirs": list(self.created_dirs),
            "skipped": list(self.skipped),
            "totals": {
                "files_changed": len(self.changed),
                "files_created": self.files_created,
                "keys_added": self.keys_added,
                "keys_removed": self.keys_removed,
                "errors": len(self.failed),
            },
            "changes": [
                {
                    "file": c.file_label,
                    "created": c.created,
                    "added": list(c.added),
                    "removed": list(c.removed),
                    "remarked": c.remarked,
                    "changed": c.changed,
                    "written": c.written,
                    "error": c.error,
                }
                for c in self.changes
            ],
        }
