"""
locale_audit.api
================

Programmatic entrypoints for using locale_audit from build scripts and tests.

Goals:
  - No argparse / printing
  - Deterministic mode support (ci_mode=True)
  - Structured results; presentation lives in :mod:`locale_audit.reports`

Usage::

    from locale_audit.api import audit_locales, sync_locales

    result = audit_locales(".", ci_mode=True)
    if not result.passed:
        sync_locales(".")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from locale_audit.contracts.load import validate_instance as _validate_instance
from locale_audit.core.config import LocaleConfig
from locale_audit.core.runner import run_audit, run_skeletons, run_sync
from locale_audit.core.store import LocaleStore
from locale_audit.model.run_result import AuditResult, SyncResult
from locale_audit.policy.exit_codes import DEFAULT_POLICY, ExitCodePolicy
from locale_audit.utils.determinism import (
    deterministic_run_id,
    deterministic_timestamp,
)


def _resolve_config(config: LocaleConfig | str | Path | None) -> LocaleConfig:
    if isinstance(config, LocaleConfig):
        return config
    root = Path(config) if config is not None else Path(".")
    return LocaleConfig.discover(root)


def _audit(
    config: LocaleConfig | str | Path | None,
    *,
    command: str,
    require_namespaces: bool,
    ci_mode: bool,
    policy: ExitCodePolicy,
) -> AuditResult:
    cfg = _resolve_config(config)
    return run_audit(
        cfg,
        LocaleStore(cfg.locales_dir),
        command=command,
        require_namespaces=require_namespaces,
        run_id=deterministic_run_id(cfg.locales_dir, ci_mode),
        created_at=deterministic_timestamp(ci_mode),
        policy=policy,
    )


# ── read-only operations ────────────────────────────────────────────


def audit_locales(
    config: LocaleConfig | str | Path | None = None,
    *,
    ci_mode: bool = False,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> AuditResult:
    """Audit every target language against the reference.

    Parameters
    ----------
    config:
        A ``LocaleConfig``, or a project root to discover one from.
    ci_mode:
        If True, ``run_id`` and ``created_at`` are content-derived / fixed.
    policy:
        Which findings make ``result.passed`` false (and the CLI exit 1).

    Raises
    ------
    ReferenceDirectoryMissing
        If the reference language directory does not exist.
    """
    return _audit(config, command="audit", require_namespaces=False, ci_mode=ci_mode,
                  policy=policy)


def check_locales(
    config: LocaleConfig | str | Path | None = None,
    *,
    ci_mode: bool = False,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> AuditResult:
    """Like :func:`audit_locales`, but every configured namespace must exist in the reference."""
    return _audit(config, command="check", require_namespaces=True, ci_mode=ci_mode,
                  policy=policy)


def coverage_report(
    config: LocaleConfig | str | Path | None = None,
    *,
    ci_mode: bool = False,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> AuditResult:
    """Audit result tagged for coverage reporting; see :mod:`locale_audit.reports.exporters`."""
    return _audit(config, command="report", require_namespaces=False, ci_mode=ci_mode,
                  policy=policy)


# ── writing operations ──────────────────────────────────────────────


def sync_locales(
    config: LocaleConfig | str | Path | None = None,
    *,
    dry_run: bool = False,
) -> SyncResult:
    """Synchronize every target file with the reference key set."""
    cfg = _resolve_config(config)
    return run_sync(cfg, LocaleStore(cfg.locales_dir), dry_run=dry_run)


def generate_skeletons(
    config: LocaleConfig | str | Path | None = None,
    *,
    dry_run: bool = False,
) -> SyncResult:
    """Create placeholder files for target namespaces that do not exist yet."""
    cfg = _resolve_config(config)
    return run_skeletons(cfg, LocaleStore(cfg.locales_dir), dry_run=dry_run)


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against a bundled schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    _validate_instance(instance, schema_name)
