"""Key-tree reconciler: diff, merge and skeleton generation for locale trees.

A locale tree is the ``dict`` produced by ``json.load`` for one namespace
file: nested mappings are namespaces, everything else is a leaf.  Arrays are
opaque leaves; they are never traversed and never flattened.

Every function here is pure.  Inputs are never mutated; ``merge_tree`` and
``generate_skeleton`` return freshly built dicts whose key order follows the
reference tree.

Usage::

    from locale_audit.core.tree import diff_keys, merge_tree

    diff = diff_keys(en_tree, fr_tree)
    synced = merge_tree(fr_tree, en_tree)
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator

# Substring that flags an untranslated leaf.  No closing bracket required.
PLACEHOLDER_MARKER = "[TRANSLATE"


def is_subtree(value: Any) -> bool:
    """Return True when *value* is a nested namespace rather than a leaf.

    The single classification rule shared by every traversal: mappings are
    subtrees, anything else (str, number, bool, None, list) is a leaf.
    """
    return isinstance(value, Mapping)


def join_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def iter_leaves(tree: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(key_path, value)`` for every leaf, depth-first, in tree order."""
    for key, value in tree.items():
        path = join_path(prefix, str(key))
        if is_subtree(value):
            yield from iter_leaves(value, path)
        else:
            yield path, value


def flatten_keys(tree: Mapping[str, Any]) -> set[str]:
    """Return the set of dotted key paths of all leaves in *tree*."""
    return {path for path, _ in iter_leaves(tree)}


@dataclass(frozen=True)
class KeyDiff:
    """Key-path set difference between a reference and a target tree."""

    missing: frozenset[str] = field(default_factory=frozenset)
    extra: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_clean(self) -> bool:
        return not self.missing and not self.extra


def diff_keys(reference: Mapping[str, Any], target: Mapping[str, Any]) -> KeyDiff:
    """Compare key paths only; leaf values are irrelevant."""
    ref_keys = flatten_keys(reference)
    target_keys = flatten_keys(target)
    return KeyDiff(
        missing=frozenset(ref_keys - target_keys),
        extra=frozenset(target_keys - ref_keys),
    )


def is_placeholder(value: Any) -> bool:
    """True for string leaves still carrying the placeholder marker."""
    return isinstance(value, str) and PLACEHOLDER_MARKER in value


def find_untranslated(tree: Mapping[str, Any]) -> set[str]:
    """Return key paths of string leaves that contain the placeholder marker."""
    return {path for path, value in iter_leaves(tree) if is_placeholder(value)}


def _leaf_text(value: Any, nested: bool = False) -> str:
    """Plain-text rendering of a reference leaf for its placeholder.

    Arrays are joined with commas, booleans and null keep their JSON
    spelling, and anything that is not a JSON value falls back to ``str``.
    Inside an array, null renders as an empty item.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "" if nested else "null"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_leaf_text(item, nested=True) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def make_placeholder(path: str, reference_value: Any) -> str:
    """Build the placeholder for *path*: ``[TRANSLATE: <path>] <reference text>``."""
    return f"{PLACEHOLDER_MARKER}: {path}] {_leaf_text(reference_value)}"


def _is_translation(value: Any) -> bool:
    return isinstance(value, str) and PLACEHOLDER_MARKER not in value


def merge_tree(
    target: Mapping[str, Any] | None,
    reference: Mapping[str, Any],
    prefix: str = "",
) -> dict[str, Any]:
    """Return *target* reshaped to exactly the key set of *reference*.

    Rules, applied per reference key:

    * reference leaf: keep the target value when it is a string without the
      placeholder marker, otherwise emit a fresh placeholder.  Absent keys,
      stale placeholders, non-string values and subtrees all end up as the
      placeholder.
    * reference subtree: recurse, using the target's subtree at the same key
      (or an empty tree when absent or not a mapping).

    Keys that only exist in *target* are dropped.
    """
    source: Mapping[str, Any] = target if is_subtree(target) else {}
    merged: dict[str, Any] = {}
    for key, ref_value in reference.items():
        path = join_path(prefix, str(key))
        existing = source.get(key)
        if is_subtree(ref_value):
            merged[key] = merge_tree(
                existing if is_subtree(existing) else {},
                ref_value,
                path,
            )
        elif _is_translation(existing):
            merged[key] = existing
        else:
            merged[key] = make_placeholder(path, ref_value)
    return merged


def generate_skeleton(reference: Mapping[str, Any]) -> dict[str, Any]:
    """Placeholder-only copy of *reference*; same as ``merge_tree({}, reference)``."""
    return merge_tree({}, reference)
