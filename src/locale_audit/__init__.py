"""locale_audit: keep JSON translation files in step with the reference language."""

__all__ = [
    "__version__",
    # Programmatic entrypoints
    "audit_locales",
    "check_locales",
    "coverage_report",
    "generate_skeletons",
    "sync_locales",
    "validate_instance",
    # Key-tree reconciler
    "diff_keys",
    "find_untranslated",
    "flatten_keys",
    "generate_skeleton",
    "merge_tree",
]
__version__ = "0.1.0"

from locale_audit.api import (  # noqa: E402, F401
    audit_locales,
    check_locales,
    coverage_report,
    generate_skeletons,
    sync_locales,
    validate_instance,
)
from locale_audit.core.tree import (  # noqa: E402, F401
    diff_keys,
    find_untranslated,
    flatten_keys,
    generate_skeleton,
    merge_tree,
)
