"""Enums shared across the runner, policy and report layers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """ERROR findings fail a run; WARNING findings are advisory."""

    ERROR = "error"
    WARNING = "warning"


class FindingKind(str, Enum):
    """What went wrong for one (language, namespace) pair."""

    MISSING_REFERENCE = "missing_reference"
    MISSING_FILE = "missing_file"
    PARSE_ERROR = "parse_error"
    MISSING_KEY = "missing_key"
    UNTRANSLATED = "untranslated"
    EXTRA_KEY = "extra_key"

    @property
    def severity(self) -> Severity:
        if self is FindingKind.EXTRA_KEY:
            return Severity.WARNING
        return Severity.ERROR
