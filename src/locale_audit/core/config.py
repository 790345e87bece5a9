"""Locale configuration dataclass.

Defaults are the project constants; a ``.locale-audit.yml`` file at the
project root overrides any of them.  Example::

    locales_dir: public/locales
    source_lang: en
    target_langs: [ar, es, fr, de, ru]
    namespaces: [nav, actions, errors]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from locale_audit.contracts.load import validate_instance
from locale_audit.errors import ConfigError

_logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".locale-audit.yml", ".locale-audit.yaml")

DEFAULT_TARGET_LANGS: tuple[str, ...] = ("ar", "es", "fr", "de", "ru")

DEFAULT_NAMESPACES: tuple[str, ...] = (
    "nav",
    "actions",
    "kpis",
    "tooltips",
    "errors",
    "hero",
    "links",
    "sales",
    "finance",
    "crm",
    "inventory",
    "support",
    "marketing",
)

_PATH_FIELDS = ("locales_dir", "report_dir")
_TUPLE_FIELDS = ("target_langs", "namespaces")


def _dedupe(items: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)


@dataclass(frozen=True)
class LocaleConfig:
    """Immutable locale configuration."""

    locales_dir: Path = Path("public/locales")
    source_lang: str = "en"
    target_langs: tuple[str, ...] = DEFAULT_TARGET_LANGS
    # Namespaces the check command requires in the reference language.
    namespaces: tuple[str, ...] = DEFAULT_NAMESPACES
    report_dir: Path = Path("reports")
    report_name: str = "i18n-coverage.html"
    missing_sample: int = 5
    other_sample: int = 3
    config_path: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "locales_dir", Path(self.locales_dir))
        object.__setattr__(self, "report_dir", Path(self.report_dir))
        object.__setattr__(self, "target_langs", _dedupe(self.target_langs))
        object.__setattr__(self, "namespaces", _dedupe(self.namespaces))
        if not self.source_lang:
            raise ConfigError("source_lang must not be empty")
        if self.source_lang in self.target_langs:
            raise ConfigError(
                f"source language {self.source_lang!r} cannot also be a target language"
            )
        if self.missing_sample < 0 or self.other_sample < 0:
            raise ConfigError("sample sizes must be >= 0")

    @property
    def report_path(self) -> Path:
        return self.report_dir / self.report_name

    # ── loading ────────────────────────────────────────────────────

    @classmethod
    def from_yaml(cls, path: Path) -> "LocaleConfig":
        """Load configuration from a YAML file.

        Relative directories are resolved against the file's directory.
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except FileNotFoundError as e:
            raise ConfigError(f"config file not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML ({e})") from e

        try:
            validate_instance(data, "locale_config.schema.json")
        except jsonschema.ValidationError as e:
            where = ".".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigError(f"{path}: {where}: {e.message}") from e

        base = path.resolve().parent
        kwargs: dict[str, Any] = {}
        for name, value in data.items():
            if name in _PATH_FIELDS:
                p = Path(value)
                kwargs[name] = p if p.is_absolute() else base / p
            elif name in _TUPLE_FIELDS:
                kwargs[name] = tuple(value)
            else:
                kwargs[name] = value
        _logger.debug("loaded config %s: %s", path, sorted(kwargs))
        return cls(config_path=path, **kwargs)

    @classmethod
    def discover(cls, root: Path) -> "LocaleConfig":
        """Use ``<root>/.locale-audit.yml`` when present, else defaults under *root*."""
        for name in CONFIG_FILENAMES:
            candidate = root / name
            if candidate.is_file():
                return cls.from_yaml(candidate)
        return cls(
            locales_dir=root / cls.locales_dir,
            report_dir=root / cls.report_dir,
        )

    def with_overrides(self, **overrides: Any) -> "LocaleConfig":
        """Copy with every non-None override applied (CLI flags)."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"unknown config option(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        for name in _TUPLE_FIELDS:
            if name in changes:
                changes[name] = tuple(changes[name])
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, Any]:
        return {
            "locales_dir": self.locales_dir.as_posix(),
            "source_lang": self.source_lang,
            "target_langs": list(self.target_langs),
            "namespaces": list(self.namespaces),
        }
