"""Shared fixtures for locale_audit tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Callable

import pytest

from locale_audit.core.config import LocaleConfig

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "locales"

# tests/fixtures/locales/basic:
#   en: nav (3 keys), errors (2 keys)
#   fr: nav has one placeholder and one extra key; errors misses server.down
#   de: complete
#   es: nav is truncated JSON; errors is absent
BASIC = FIXTURES / "basic"


@pytest.fixture
def basic_config() -> LocaleConfig:
    """Read-only config over the checked-in fixture tree."""
    return LocaleConfig(
        locales_dir=BASIC,
        target_langs=("fr", "de", "es"),
        namespaces=("nav", "errors"),
    )


@pytest.fixture
def basic_copy(tmp_path: Path) -> LocaleConfig:
    """Config over a writable copy of the fixture tree."""
    root = tmp_path / "locales"
    shutil.copytree(BASIC, root)
    return LocaleConfig(
        locales_dir=root,
        target_langs=("fr", "de", "es"),
        namespaces=("nav", "errors"),
        report_dir=tmp_path / "reports",
    )


@pytest.fixture
def write_locale(tmp_path: Path) -> Callable[[str, str, Any], Path]:
    """Write ``<tmp>/locales/<lang>/<ns>.json``; strings are written raw."""

    def _write(lang: str, ns: str, data: Any) -> Path:
        path = tmp_path / "locales" / lang / f"{ns}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data, indent=2) + "\n"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
