"""File-system storage for locale trees.

Layout::

    <root>/<lang>/<namespace>.json

Reads surface two distinct failures, :class:`LocaleFileMissing` and
:class:`LocaleParseError`; callers decide whether either is fatal.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from locale_audit.errors import (
    LocaleFileMissing,
    LocaleParseError,
    ReferenceDirectoryMissing,
)
from locale_audit.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class LocaleStore:
    """Read and write namespace files under a locales root directory."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"LocaleStore({self.root.as_posix()!r})"

    def lang_dir(self, lang: str) -> Path:
        return self.root / lang

    def path_for(self, lang: str, namespace: str) -> Path:
        return self.lang_dir(lang) / f"{namespace}{_SUFFIX}"

    def has_language(self, lang: str) -> bool:
        return self.lang_dir(lang).is_dir()

    def exists(self, lang: str, namespace: str) -> bool:
        return self.path_for(lang, namespace).is_file()

    def list_namespaces(self, lang: str) -> list[str]:
        """Sorted namespace names (file stems) present for *lang*.

        Raises ``ReferenceDirectoryMissing`` when the language directory is
        absent; this is only ever called for the reference language.
        """
        lang_dir = self.lang_dir(lang)
        if not lang_dir.is_dir():
            raise ReferenceDirectoryMissing(lang_dir)
        return sorted(
            p.stem for p in lang_dir.glob(f"*{_SUFFIX}") if p.is_file()
        )

    def read_tree(self, lang: str, namespace: str) -> dict[str, Any]:
        path = self.path_for(lang, namespace)
        if not path.is_file():
            raise LocaleFileMissing(lang, namespace, path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            raise LocaleParseError(lang, namespace, path, f"not UTF-8 ({e.reason})") from e
        except json.JSONDecodeError as e:
            raise LocaleParseError(lang, namespace, path, f"invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise LocaleParseError(
                lang, namespace, path,
                f"top level is {type(data).__name__}, expected object",
            )
        _logger.debug("read %s (%d top-level keys)", path, len(data))
        return data

    @staticmethod
    def render_tree(tree: dict[str, Any]) -> str:
        """Exact text ``write_tree`` produces: key order kept, trailing newline."""
        return stable_json_dumps(tree, indent=2, sort_keys=False)

    def write_tree(self, lang: str, namespace: str, tree: dict[str, Any]) -> Path:
        path = self.path_for(lang, namespace)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_tree(tree), encoding="utf-8")
        _logger.debug("wrote %s", path)
        return path

    def read_text(self, lang: str, namespace: str) -> str | None:
        """Raw file content, or None when the file does not exist."""
        path = self.path_for(lang, namespace)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def ensure_directory(self, lang: str) -> bool:
        """Create ``<root>/<lang>`` if needed.  Returns True when it was created."""
        lang_dir = self.lang_dir(lang)
        if lang_dir.is_dir():
            return False
        lang_dir.mkdir(parents=True, exist_ok=True)
        _logger.info("created directory %s", lang_dir)
        return True
