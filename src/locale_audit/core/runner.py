"""Runner: drives the reconciler over every (language, namespace) pair.

Per-pair failures (missing or unparseable target files) are recorded and
processing continues.  Only a missing reference directory aborts a run.
"""

from __future__ import annotations

import logging
from typing import Any

from locale_audit.core.config import LocaleConfig
from locale_audit.core.store import LocaleStore
from locale_audit.core.tree import (
    diff_keys,
    find_untranslated,
    flatten_keys,
    generate_skeleton,
    is_placeholder,
    iter_leaves,
    merge_tree,
)
from locale_audit.errors import LocaleFileMissing, LocaleParseError
from locale_audit.model import FindingKind
from locale_audit.model.finding import Finding
from locale_audit.model.run_result import (
    AuditResult,
    NamespaceResult,
    SyncChange,
    SyncResult,
)
from locale_audit.policy.exit_codes import DEFAULT_POLICY, ExitCodePolicy

_logger = logging.getLogger(__name__)


def _store_for(config: LocaleConfig, store: LocaleStore | None) -> LocaleStore:
    return store if store is not None else LocaleStore(config.locales_dir)


def reconcile_pair(
    reference: dict[str, Any],
    lang: str,
    namespace: str,
    store: LocaleStore,
) -> NamespaceResult:
    """Compare one target file with its reference tree.  Never raises per-pair errors."""
    ref_keys = flatten_keys(reference)
    every_key_missing = tuple(sorted(ref_keys))
    try:
        target = store.read_tree(lang, namespace)
    except LocaleFileMissing:
        _logger.debug("%s/%s.json missing", lang, namespace)
        return NamespaceResult(
            lang, namespace, total=len(ref_keys), exists=False,
            missing=every_key_missing,
        )
    except LocaleParseError as e:
        _logger.warning("%s", e)
        return NamespaceResult(
            lang, namespace, total=len(ref_keys), parse_error=e.reason,
            missing=every_key_missing,
        )

    diff = diff_keys(reference, target)
    untranslated = find_untranslated(target)
    return NamespaceResult(
        lang,
        namespace,
        total=len(ref_keys),
        missing=tuple(sorted(diff.missing)),
        extra=tuple(sorted(diff.extra)),
        untranslated=tuple(sorted(untranslated)),
        pending=len(untranslated & ref_keys),
    )


def _load_references(
    config: LocaleConfig,
    store: LocaleStore,
    namespaces: list[str],
    reference_findings: list[Finding],
) -> dict[str, dict[str, Any]]:
    """Read every reference namespace; unreadable ones become blocking findings."""
    trees: dict[str, dict[str, Any]] = {}
    for ns in namespaces:
        try:
            trees[ns] = store.read_tree(config.source_lang, ns)
        except LocaleFileMissing:
            reference_findings.append(Finding(
                FindingKind.MISSING_REFERENCE, config.source_lang, ns,
                detail="reference file missing",
            ))
        except LocaleParseError as e:
            _logger.warning("%s", e)
            reference_findings.append(Finding(
                FindingKind.PARSE_ERROR, config.source_lang, ns, detail=e.reason,
            ))
    return trees


def run_audit(
    config: LocaleConfig,
    store: LocaleStore | None = None,
    *,
    command: str = "audit",
    require_namespaces: bool = False,
    run_id: str = "",
    created_at: str = "",
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> AuditResult:
    """Audit every target language against the reference language.

    Namespaces are those present in the reference directory.  With
    *require_namespaces* the configured namespace list is authoritative too:
    each configured namespace absent from the reference is a
    ``missing_reference`` finding.  A reference namespace that exists but is
    not configured is still audited.  *policy* decides ``result.passed``.

    Raises ``ReferenceDirectoryMissing`` if the reference directory is absent.
    """
    store = _store_for(config, store)
    present = store.list_namespaces(config.source_lang)
    reference_findings: list[Finding] = []

    namespaces = list(present)
    if require_namespaces:
        # Configured order first, then anything extra found on disk.
        namespaces = list(config.namespaces) + [
            ns for ns in present if ns not in config.namespaces
        ]

    references = _load_references(config, store, namespaces, reference_findings)
    _logger.info(
        "auditing %d namespace(s) across %d language(s)",
        len(references), len(config.target_langs),
    )

    result = AuditResult(
        command=command,
        config=config,
        reference_findings=reference_findings,
        run_id=run_id,
        created_at=created_at,
        policy=policy,
    )
    for ns, reference in references.items():
        result.reference_counts[ns] = len(flatten_keys(reference))
        for lang in config.target_langs:
            result.results.append(reconcile_pair(reference, lang, ns, store))
    return result


def _count_remarked(old: dict[str, Any], merged: dict[str, Any]) -> int:
    """Existing placeholders whose text the merge regenerated."""
    old_leaves = dict(iter_leaves(old))
    return sum(
        1
        for path, value in iter_leaves(merged)
        if is_placeholder(old_leaves.get(path)) and old_leaves[path] != value
    )


def sync_pair(
    reference: dict[str, Any],
    lang: str,
    namespace: str,
    store: LocaleStore,
    *,
    dry_run: bool = False,
) -> SyncChange:
    """Merge one target file with its reference and write it back if it changed.

    A target that does not parse is left untouched and reported.
    """
    created = False
    try:
        existing = store.read_tree(lang, namespace)
        old_text = store.read_text(lang, namespace)
    except LocaleFileMissing:
        existing, old_text, created = {}, None, True
    except LocaleParseError as e:
        _logger.warning("skipping %s", e)
        return SyncChange(lang, namespace, error=e.reason)

    merged = merge_tree(existing, reference)
    diff = diff_keys(reference, existing)
    new_text = store.render_tree(merged)
    changed = new_text != old_text
    if changed and not dry_run:
        store.write_tree(lang, namespace, merged)

    return SyncChange(
        lang,
        namespace,
        created=created,
        added=tuple(sorted(diff.missing)),
        removed=tuple(sorted(diff.extra)),
        remarked=_count_remarked(existing, merged),
        changed=changed,
        written=changed and not dry_run,
    )


def run_sync(
    config: LocaleConfig,
    store: LocaleStore | None = None,
    *,
    dry_run: bool = False,
) -> SyncResult:
    """Bring every target namespace file to the reference key set.

    Existing translations are kept, missing or stale entries get
    placeholders, and obsolete keys are removed.
    """
    store = _store_for(config, store)
    namespaces = store.list_namespaces(config.source_lang)
    result = SyncResult(command="sync", dry_run=dry_run)
    reference_findings: list[Finding] = []
    references = _load_references(config, store, namespaces, reference_findings)
    for f in reference_findings:
        result.changes.append(SyncChange(config.source_lang, f.namespace, error=f.detail))

    for lang in config.target_langs:
        if not store.has_language(lang):
            result.created_dirs.append(lang)
            if not dry_run:
                store.ensure_directory(lang)

    for ns, reference in references.items():
        for lang in config.target_langs:
            result.changes.append(sync_pair(reference, lang, ns, store, dry_run=dry_run))
    return result


def run_skeletons(
    config: LocaleConfig,
    store: LocaleStore | None = None,
    *,
    dry_run: bool = False,
) -> SyncResult:
    """Create placeholder-only files for target namespaces that do not exist yet.

    Existing target files are never touched.
    """
    store = _store_for(config, store)
    namespaces = store.list_namespaces(config.source_lang)
    result = SyncResult(command="skeleton", dry_run=dry_run)
    reference_findings: list[Finding] = []
    references = _load_references(config, store, namespaces, reference_findings)
    for f in reference_findings:
        result.changes.append(SyncChange(config.source_lang, f.namespace, error=f.detail))

    for lang in config.target_langs:
        if not store.has_language(lang):
            result.created_dirs.append(lang)
            if not dry_run:
                store.ensure_directory(lang)
        for ns, reference in references.items():
            if store.exists(lang, ns):
                result.skipped.append(f"{lang}/{ns}.json")
                continue
            skeleton = generate_skeleton(reference)
            if not dry_run:
                store.write_tree(lang, ns, skeleton)
            result.changes.append(SyncChange(
                lang,
                ns,
                created=True,
                added=tuple(sorted(flatten_keys(skeleton))),
                changed=True,
                written=not dry_run,
            ))
    return result
