"""CLI entry-point for locale_audit.

Usage:
    python -m locale_audit audit    [--root DIR] [--config FILE] [--json] [--ci]
    python -m locale_audit check    [--namespaces nav,errors] [--json] [--ci]
    python -m locale_audit report   [--format html|json|markdown] [--output FILE] [--fail-under N]
    python -m locale_audit skeleton [--dry-run] [--json]
    python -m locale_audit sync     [--dry-run | --check] [--json]
    python -m locale_audit validate <instance.json> <schema_name>

Shared options: --locales-dir DIR, --source-lang LANG, --langs a,b,c, -v/--verbose.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema

from locale_audit import __version__
from locale_audit.api import (
    audit_locales as _api_audit_locales,
    check_locales as _api_check_locales,
    coverage_report as _api_coverage_report,
    generate_skeletons as _api_generate_skeletons,
    sync_locales as _api_sync_locales,
)
from locale_audit.contracts.load import validate_file
from locale_audit.core.config import LocaleConfig
from locale_audit.errors import ConfigError, ReferenceDirectoryMissing
from locale_audit.policy.exit_codes import (
    ExitCodePolicy,
    exit_code_for_coverage,
    exit_code_for_findings,
    exit_code_for_sync,
)
from locale_audit.reports.console import (
    render_audit,
    render_check,
    render_coverage,
    render_skeletons,
    render_sync,
)
from locale_audit.reports.exporters import FORMATS, export_json, export_result
from locale_audit.utils.exit_codes import ExitCode
from locale_audit.utils.json_norm import stable_json_dumps


def _csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


# ── parser ──────────────────────────────────────────────────────────


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root; .locale-audit.yml is looked up here (default: cwd).",
    )
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Explicit YAML config file (overrides --root discovery).",
    )
    common.add_argument(
        "--locales-dir",
        type=Path,
        default=None,
        help="Locale root; relative paths are taken from --root.",
    )
    common.add_argument("--source-lang", default=None)
    common.add_argument(
        "--langs",
        type=_csv,
        default=None,
        metavar="a,b,c",
        help="Comma-separated target languages.",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging on stderr.",
    )
    return common


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="locale-audit",
        description="Validate, report on and synchronize JSON translation files.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command", required=True)
    common = _common_parser()

    def _gate_flags(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--json",
            dest="json_out",
            action="store_true",
            default=False,
            help="Print the full result JSON to stdout.",
        )
        sp.add_argument(
            "--ci",
            "--deterministic",
            dest="ci_mode",
            action="store_true",
            default=False,
            help="Enable deterministic output (stable run IDs and timestamps).",
        )
        sp.add_argument(
            "--allow-untranslated",
            action="store_true",
            default=False,
            help="Do not fail on [TRANSLATE] placeholders.",
        )
        sp.add_argument(
            "--fail-on-extra",
            action="store_true",
            default=False,
            help="Treat keys absent from the reference as failures.",
        )

    # ── audit ───────────────────────────────────────────────────────
    audit_p = sub.add_parser(
        "audit",
        parents=[common],
        help="Report missing, untranslated and extra keys per language.",
    )
    _gate_flags(audit_p)

    # ── check ───────────────────────────────────────────────────────
    check_p = sub.add_parser(
        "check",
        parents=[common],
        help="CI gate: configured namespaces must exist and be complete.",
    )
    check_p.add_argument(
        "--namespaces",
        type=_csv,
        default=None,
        metavar="a,b,c",
        help="Comma-separated namespaces required in the reference language.",
    )
    _gate_flags(check_p)

    # ── report ──────────────────────────────────────────────────────
    report_p = sub.add_parser(
        "report",
        parents=[common],
        help="Write a coverage report (HTML by default).",
    )
    report_p.add_argument(
        "--format",
        dest="report_format",
        choices=FORMATS,
        default="html",
    )
    report_p.add_argument(
        "--output",
        dest="report_output",
        default=None,
        help="Output file ('-' for stdout).  Default: <report_dir>/<report_name>.",
    )
    report_p.add_argument(
        "--fail-under",
        type=int,
        default=None,
        metavar="PCT",
        help="Exit 1 if any language's coverage is below PCT.",
    )
    report_p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
    )

    # ── skeleton ────────────────────────────────────────────────────
    skel_p = sub.add_parser(
        "skeleton",
        parents=[common],
        help="Create placeholder files for target namespaces that do not exist.",
    )
    skel_p.add_argument("--dry-run", action="store_true", default=False)
    skel_p.add_argument("--json", dest="json_out", action="store_true", default=False)

    # ── sync ────────────────────────────────────────────────────────
    sync_p = sub.add_parser(
        "sync",
        parents=[common],
        help="Add missing keys as placeholders and drop obsolete keys.",
    )
    mode = sync_p.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", action="store_true", default=False)
    mode.add_argument(
        "--check",
        dest="sync_check",
        action="store_true",
        default=False,
        help="Write nothing; exit 1 if any file is out of sync.",
    )
    sync_p.add_argument("--json", dest="json_out", action="store_true", default=False)

    # ── validate ────────────────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON instance against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument("schema_name", help="Schema filename, e.g. audit_result.schema.json")

    return p


# ── helpers ─────────────────────────────────────────────────────────


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _load_config(args: argparse.Namespace) -> LocaleConfig:
    if args.config is not None:
        cfg = LocaleConfig.from_yaml(args.config)
    else:
        cfg = LocaleConfig.discover(args.root)
    locales_dir = args.locales_dir
    if locales_dir is not None and not locales_dir.is_absolute():
        locales_dir = args.root / locales_dir
    return cfg.with_overrides(
        locales_dir=locales_dir,
        source_lang=args.source_lang,
        target_langs=args.langs,
        namespaces=getattr(args, "namespaces", None),
    )


def _policy(args: argparse.Namespace) -> ExitCodePolicy:
    return ExitCodePolicy(
        fail_on_untranslated=not args.allow_untranslated,
        fail_on_extra=args.fail_on_extra,
    )


# ── handlers ────────────────────────────────────────────────────────


def _handle_audit(args: argparse.Namespace, cfg: LocaleConfig) -> int:
    """Dispatch ``locale-audit audit``."""
    result = _api_audit_locales(cfg, ci_mode=args.ci_mode, policy=_policy(args))
    if args.json_out:
        print(export_json(result), end="")
    else:
        print(render_audit(result))
    return exit_code_for_findings(result.findings, policy=result.policy)


def _handle_check(args: argparse.Namespace, cfg: LocaleConfig) -> int:
    """Dispatch ``locale-audit check``."""
    result = _api_check_locales(cfg, ci_mode=args.ci_mode, policy=_policy(args))
    rc = exit_code_for_findings(result.findings, policy=result.policy)
    if args.json_out:
        print(export_json(result), end="")
    else:
        stream = sys.stdout if rc == ExitCode.SUCCESS else sys.stderr
        print(render_check(result), file=stream)
    return rc


def _handle_report(args: argparse.Namespace, cfg: LocaleConfig) -> int:
    """Dispatch ``locale-audit report``."""
    result = _api_coverage_report(cfg, ci_mode=args.ci_mode)
    output = export_result(result, fmt=args.report_format)

    if args.report_output == "-":
        print(output, end="" if output.endswith("\n") else "\n")
        print(render_coverage(result.language_stats()), file=sys.stderr)
    else:
        out = Path(args.report_output) if args.report_output else cfg.report_path
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(output, encoding="utf-8")
        print(render_coverage(result.language_stats()))
        print(f"\n✅ Report generated: {out}")

    return exit_code_for_coverage(result.language_stats(), args.fail_under)


def _handle_skeleton(args: argparse.Namespace, cfg: LocaleConfig) -> int:
    """Dispatch ``locale-audit skeleton``."""
    result = _api_generate_skeletons(cfg, dry_run=args.dry_run)
    if args.json_out:
        print(stable_json_dumps(result.to_dict()), end="")
    else:
        print(render_skeletons(result))
    return exit_code_for_sync(result)


def _handle_sync(args: argparse.Namespace, cfg: LocaleConfig) -> int:
    """Dispatch ``locale-audit sync``."""
    dry_run = args.dry_run or args.sync_check
    result = _api_sync_locales(cfg, dry_run=dry_run)
    if args.json_out:
        print(stable_json_dumps(result.to_dict()), end="")
    else:
        print(render_sync(result))
    return exit_code_for_sync(result, check=args.sync_check)


def _handle_validate(args: argparse.Namespace) -> int:
    """Dispatch ``locale-audit validate``.

    Exit code contract:
      1 = schema violation
      2 = unreadable instance, unknown schema, wrong schema_version
    """
    try:
        validate_file(Path(args.instance), args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


_HANDLERS = {
    "audit": _handle_audit,
    "check": _handle_check,
    "report": _handle_report,
    "skeleton": _handle_skeleton,
    "sync": _handle_sync,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an exit code (0 = ok, 1 = violations, 2 = error)."""
    args = _build_parser().parse_args(argv)

    if args.command == "validate":
        return _handle_validate(args)

    _configure_logging(args.verbose)
    try:
        cfg = _load_config(args)
        return int(_HANDLERS[args.command](args, cfg))
    except (ConfigError, ReferenceDirectoryMissing) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
