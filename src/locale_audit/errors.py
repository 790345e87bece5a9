"""Exception types raised by the storage and configuration layers.

Missing keys, untranslated placeholders and extra keys are findings, not
exceptions; see :mod:`locale_audit.model`.
"""

from __future__ import annotations

from pathlib import Path


class LocaleAuditError(Exception):
    """Base class for all locale_audit errors."""


class ReferenceDirectoryMissing(LocaleAuditError, FileNotFoundError):
    """The reference language directory does not exist.  Fatal for a run."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"reference directory not found: {path}")


class LocaleFileMissing(LocaleAuditError, FileNotFoundError):
    """A namespace file is absent for one language."""

    def __init__(self, lang: str, namespace: str, path: Path) -> None:
        self.lang = lang
        self.namespace = namespace
        self.path = path
        super().__init__(f"{lang}/{namespace}.json does not exist")


class LocaleParseError(LocaleAuditError, ValueError):
    """A namespace file exists but is not a JSON object."""

    def __init__(self, lang: str, namespace: str, path: Path, reason: str) -> None:
        self.lang = lang
        self.namespace = namespace
        self.path = path
        self.reason = reason
        super().__init__(f"{lang}/{namespace}.json: {reason}")


class ConfigError(LocaleAuditError, ValueError):
    """Invalid configuration file or option combination."""
