"""Tests for LocaleConfig defaults, YAML loading, discovery and overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from locale_audit.core.config import DEFAULT_NAMESPACES, LocaleConfig
from locale_audit.errors import ConfigError


def _yaml(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_project_constants(self) -> None:
        cfg = LocaleConfig()
        assert cfg.locales_dir == Path("public/locales")
        assert cfg.source_lang == "en"
        assert cfg.target_langs == ("ar", "es", "fr", "de", "ru")
        assert cfg.namespaces == DEFAULT_NAMESPACES
        assert len(cfg.namespaces) == 13
        assert cfg.report_path == Path("reports") / "i18n-coverage.html"
        assert (cfg.missing_sample, cfg.other_sample) == (5, 3)

    def test_source_in_targets_rejected(self) -> None:
        with pytest.raises(ConfigError, match="cannot also be a target"):
            LocaleConfig(target_langs=("fr", "en"))

    def test_empty_source_rejected(self) -> None:
        with pytest.raises(ConfigError):
            LocaleConfig(source_lang="")

    def test_negative_sample_rejected(self) -> None:
        with pytest.raises(ConfigError):
            LocaleConfig(missing_sample=-1)

    def test_duplicates_dropped_in_order(self) -> None:
        cfg = LocaleConfig(target_langs=("fr", "de", "fr"), namespaces=["nav", "nav"])
        assert cfg.target_langs == ("fr", "de")
        assert cfg.namespaces == ("nav",)

    def test_strings_coerced_to_paths(self) -> None:
        cfg = LocaleConfig(locales_dir="x/locales", report_dir="out")
        assert cfg.locales_dir == Path("x/locales")
        assert cfg.report_dir == Path("out")


class TestFromYaml:
    def test_relative_dirs_resolve_against_file(self, tmp_path: Path) -> None:
        path = _yaml(
            tmp_path / ".locale-audit.yml",
            "locales_dir: i18n\n"
            "source_lang: en\n"
            "target_langs: [fr, de]\n"
            "namespaces: [nav]\n"
            "report_dir: out\n",
        )
        cfg = LocaleConfig.from_yaml(path)
        assert cfg.locales_dir == tmp_path.resolve() / "i18n"
        assert cfg.report_dir == tmp_path.resolve() / "out"
        assert cfg.target_langs == ("fr", "de")
        assert cfg.namespaces == ("nav",)
        assert cfg.config_path == path

    def test_absolute_dir_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere"
        path = _yaml(tmp_path / "cfg.yml", f"locales_dir: {target.as_posix()}\n")
        assert LocaleConfig.from_yaml(path).locales_dir == target

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        cfg = LocaleConfig.from_yaml(_yaml(tmp_path / "cfg.yml", ""))
        assert cfg.target_langs == LocaleConfig().target_langs

    def test_unknown_key_is_config_error(self, tmp_path: Path) -> None:
        path = _yaml(tmp_path / "cfg.yml", "languages: [fr]\n")
        with pytest.raises(ConfigError, match="languages"):
            LocaleConfig.from_yaml(path)

    def test_wrong_type_names_the_field(self, tmp_path: Path) -> None:
        path = _yaml(tmp_path / "cfg.yml", "missing_sample: lots\n")
        with pytest.raises(ConfigError, match="missing_sample"):
            LocaleConfig.from_yaml(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = _yaml(tmp_path / "cfg.yml", "target_langs: [fr\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            LocaleConfig.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            LocaleConfig.from_yaml(tmp_path / "nope.yml")

    def test_source_in_targets_from_file(self, tmp_path: Path) -> None:
        path = _yaml(tmp_path / "cfg.yml", "target_langs: [en, fr]\n")
        with pytest.raises(ConfigError):
            LocaleConfig.from_yaml(path)


class TestDiscover:
    def test_defaults_rooted_at_root(self, tmp_path: Path) -> None:
        cfg = LocaleConfig.discover(tmp_path)
        assert cfg.locales_dir == tmp_path / "public" / "locales"
        assert cfg.report_path == tmp_path / "reports" / "i18n-coverage.html"
        assert cfg.config_path is None

    @pytest.mark.parametrize("name", [".locale-audit.yml", ".locale-audit.yaml"])
    def test_finds_config_file(self, tmp_path: Path, name: str) -> None:
        _yaml(tmp_path / name, "target_langs: [it]\n")
        cfg = LocaleConfig.discover(tmp_path)
        assert cfg.target_langs == ("it",)
        assert cfg.config_path == tmp_path / name


class TestOverrides:
    def test_none_values_ignored(self) -> None:
        cfg = LocaleConfig()
        assert cfg.with_overrides(source_lang=None, target_langs=None) is cfg

    def test_values_applied_and_validated(self) -> None:
        cfg = LocaleConfig().with_overrides(target_langs=["fr", "fr", "de"])
        assert cfg.target_langs == ("fr", "de")
        with pytest.raises(ConfigError):
            cfg.with_overrides(source_lang="fr")

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigError, match="unknown config option"):
            LocaleConfig().with_overrides(colour="blue")

    def test_to_dict_is_json_ready(self) -> None:
        d = LocaleConfig(locales_dir="a/b", target_langs=("fr",), namespaces=("nav",)).to_dict()
        assert d == {
            "locales_dir": "a/b",
            "source_lang": "en",
            "target_langs": ["fr"],
            "namespaces": ["nav"],
        }
