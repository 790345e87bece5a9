"""Plain-text renderers for terminal and CI logs.

Each renderer takes a result object and returns a string; printing is the
CLI's job.  No third-party formatting, so output stays greppable.
"""

from __future__ import annotations

from typing import Mapping

from locale_audit.core.config import LocaleConfig
from locale_audit.model import FindingKind
from locale_audit.model.finding import Finding
from locale_audit.model.run_result import (
    AuditResult,
    LanguageStats,
    SyncChange,
    SyncResult,
)
from locale_audit.policy.exit_codes import ExitCodePolicy, is_blocking

_RULE = "─" * 50


def _sample_lines(finding: Finding, limit: int) -> list[str]:
    shown, rest = finding.sample(limit)
    lines = [f"     - {k}" for k in shown]
    if rest > 0:
        lines.append(f"     ... and {rest} more")
    return lines


def _pair_lines(finding: Finding, config: LocaleConfig) -> list[str]:
    tag = f"[{finding.lang}]"
    kind = finding.kind
    if kind is FindingKind.MISSING_FILE:
        return [f"  ❌ {tag} File missing: {finding.namespace}.json"]
    if kind is FindingKind.PARSE_ERROR:
        return [f"  ❌ {tag} Parse error in {finding.namespace}.json: {finding.detail}"]
    if kind is FindingKind.MISSING_KEY:
        return [f"  ❌ {tag} Missing {len(finding.keys)} keys:",
                *_sample_lines(finding, config.missing_sample)]
    if kind is FindingKind.UNTRANSLATED:
        return [f"  ❌ {tag} {len(finding.keys)} untranslated keys "
                "(still have [TRANSLATE] placeholders):",
                *_sample_lines(finding, config.other_sample)]
    return [f"  ⚠️  {tag} {len(finding.keys)} extra keys (not in "
            f"{config.source_lang}):",
            *_sample_lines(finding, config.other_sample)]


def render_audit(result: AuditResult) -> str:
    """Human-readable audit: one block per namespace, one line group per language."""
    config = result.config
    lines: list[str] = ["🔍 Running i18n audit...", ""]

    for f in result.reference_findings:
        lines.append(f"❌ [{f.lang}] {f.namespace}.json: {f.detail}")
    if result.reference_findings:
        lines.append("")

    for ns, total in result.reference_counts.items():
        lines.append(f"📄 Checking {ns}.json ({total} keys in {config.source_lang})")
        for lang, r in result.results_for(ns).items():
            findings = r.findings()
            if not findings:
                lines.append(f"  ✅ [{lang}] All keys present and translated")
                continue
            for f in findings:
                lines.extend(_pair_lines(f, config))
        lines.append("")

    lines.append(_RULE)
    errors, warnings = result.errors, result.warnings
    if errors == 0 and warnings == 0:
        lines.append("✅ All translations are complete and valid!")
    else:
        lines.append(f"Summary: {errors} errors, {warnings} warnings")
        if errors:
            lines.extend([
                "",
                "💡 To fix issues:",
                "   1. Run: locale-audit sync      (adds missing keys)",
                "   2. Translate [TRANSLATE] placeholders",
                "   3. Run: locale-audit audit     (verify fixes)",
            ])
    return "\n".join(lines)


_CHECK_LABELS = {
    FindingKind.MISSING_REFERENCE: "MISSING REFERENCE FILE",
    FindingKind.MISSING_FILE: "MISSING FILE",
    FindingKind.PARSE_ERROR: "PARSE ERROR",
    FindingKind.MISSING_KEY: "MISSING KEY",
    FindingKind.UNTRANSLATED: "UNTRANSLATED",
    FindingKind.EXTRA_KEY: "EXTRA KEY",
}


def render_check(result: AuditResult, *, policy: ExitCodePolicy | None = None) -> str:
    """Terse one-line-per-problem output for CI gates; advisory findings are omitted.

    *policy* defaults to the one the result was produced under.
    """
    policy = policy or result.policy
    lines: list[str] = []
    blocking = [f for f in result.findings if is_blocking(f, policy)]
    for f in blocking:
        label = _CHECK_LABELS[f.kind]
        if f.keys:
            lines.extend(f"[i18n] {label}: {f.file_label} -> {k}" for k in f.keys)
        elif f.kind is FindingKind.PARSE_ERROR:
            lines.append(f"[i18n] {label}: {f.file_label} ({f.detail})")
        else:
            lines.append(f"[i18n] {label}: {f.file_label}")
    if not blocking:
        lines.append("[i18n] ✅ All locale files complete")
    else:
        lines.append(
            "[i18n] ❌ Translation validation failed. "
            "Fix missing files/keys before deployment."
        )
    return "\n".join(lines)


def render_coverage(stats: Mapping[str, LanguageStats]) -> str:
    lines = ["Coverage by language:"]
    for lang, s in stats.items():
        lines.append(f"  {lang}: {s.percentage}% ({s.translated}/{s.total} translated)")
    return "\n".join(lines)


def _change_summary(change: SyncChange) -> str:
    parts = []
    if change.added:
        parts.append(f"+{len(change.added)} keys")
    if change.removed:
        parts.append(f"-{len(change.removed)} keys")
    if change.remarked:
        parts.append(f"{change.remarked} placeholders refreshed")
    return ", ".join(parts) or "reformatted"


def render_sync(result: SyncResult) -> str:
    verb = "Would sync" if result.dry_run else "Synced"
    lines = ["🔄 Syncing translation keys...", ""]
    dir_verb = "Would create" if result.dry_run else "Created"
    for lang in result.created_dirs:
        lines.append(f"📁 {dir_verb} directory: {lang}/")
    for c in result.failed:
        lines.append(f"❌ {c.file_label}: {c.error} (left untouched)")
    for c in result.changed:
        lines.append(f"✓ {c.file_label}: {_change_summary(c)}")
        if c.removed:
            lines.append(f"  Removed obsolete keys: {', '.join(c.removed)}")

    lines.extend([
        "",
        "✅ Key sync complete!" if not result.dry_run else "✅ Key sync dry run complete!",
        f"   {verb} files: {len(result.changed)}",
        f"   Keys added: {result.keys_added}",
        f"   Keys removed: {result.keys_removed}",
    ])
    if result.keys_added:
        lines.extend([
            "",
            f"⚠️  {result.keys_added} new keys added with [TRANSLATE] placeholders",
            "   Please translate these keys before deployment",
            "   Run: locale-audit audit to check status",
        ])
    return "\n".join(lines)


def render_skeletons(result: SyncResult) -> str:
    lines = ["🔨 Generating translation skeleton files...", ""]
    dir_verb = "Would create" if result.dry_run else "Created"
    for lang in result.created_dirs:
        lines.append(f"📁 {dir_verb} directory: {lang}/")
    for c in result.failed:
        lines.append(f"❌ {c.file_label}: {c.error}")
    for c in result.changed:
        lines.append(f"✨ Created {c.file_label}")

    lines.extend([
        "",
        "✅ Skeleton generation complete!",
        f"   Created: {result.files_created} files",
        f"   Skipped: {len(result.skipped)} files (already exist)",
    ])
    if result.files_created:
        lines.extend([
            "",
            "⚠️  Next steps:",
            "   1. Review generated files with [TRANSLATE] placeholders",
            "   2. Replace placeholders with actual translations",
            "   3. Run: locale-audit audit",
        ])
    return "\n".join(lines)
