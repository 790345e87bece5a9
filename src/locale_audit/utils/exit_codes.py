"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success: locales complete (extra keys alone never fail a run)
  1   Violation: missing files or keys, untranslated placeholders,
      unparseable locale files, or a missing reference namespace
  2   Error: usage error, bad config, missing reference directory
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
