"""Exit-code policy: which findings fail a run.

Philosophy:
  - Deterministic in CI
  - Extra keys are advisory unless explicitly promoted
  - Untranslated placeholders block by default
  - No hidden magic inside CLI glue
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping

from locale_audit.model import FindingKind
from locale_audit.model.finding import Finding
from locale_audit.utils.exit_codes import ExitCode

if TYPE_CHECKING:
    from locale_audit.model.run_result import LanguageStats, SyncResult


@dataclass(frozen=True)
class ExitCodePolicy:
    """Tunable gate for finding → exit-code mapping."""

    fail_on_untranslated: bool = True
    fail_on_extra: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "fail_on_untranslated": self.fail_on_untranslated,
            "fail_on_extra": self.fail_on_extra,
        }


DEFAULT_POLICY = ExitCodePolicy()


def is_blocking(finding: Finding, policy: ExitCodePolicy = DEFAULT_POLICY) -> bool:
    if finding.kind is FindingKind.EXTRA_KEY:
        return policy.fail_on_extra
    if finding.kind is FindingKind.UNTRANSLATED:
        return policy.fail_on_untranslated
    return finding.is_blocking


def exit_code_for_findings(
    findings: Iterable[Finding],
    *,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> int:
    """``VIOLATION`` when any finding blocks under *policy*, else ``SUCCESS``."""
    if any(is_blocking(f, policy) for f in findings):
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


def exit_code_for_coverage(
    stats: Mapping[str, LanguageStats],
    fail_under: int | None,
) -> int:
    """``VIOLATION`` when any language's coverage is below *fail_under* percent."""
    if fail_under is None:
        return ExitCode.SUCCESS
    if any(s.percentage < fail_under for s in stats.values()):
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


def exit_code_for_sync(result: SyncResult, *, check: bool = False) -> int:
    """Unreadable targets always fail; with *check*, pending changes fail too."""
    if result.failed:
        return ExitCode.VIOLATION
    if check and result.changed:
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS
