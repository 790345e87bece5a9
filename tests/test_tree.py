"""Tests for the key-tree reconciler (flatten, diff, untranslated, merge, skeleton)."""

from __future__ import annotations

import copy
from decimal import Decimal

import pytest

from locale_audit.core.tree import (
    PLACEHOLDER_MARKER,
    diff_keys,
    find_untranslated,
    flatten_keys,
    generate_skeleton,
    is_subtree,
    iter_leaves,
    make_placeholder,
    merge_tree,
)


# Reference/target pairs shared by the property tests below.
PAIRS = [
    pytest.param({}, {}, id="empty"),
    pytest.param({"a": "A"}, {}, id="missing-everything"),
    pytest.param(
        {"a": "A", "b": {"c": "C"}},
        {"a": "x", "b": {"c": "y", "d": "z"}},
        id="extra-nested",
    ),
    pytest.param(
        {"a": {"b": {"c": "C"}}, "d": "D"},
        {"a": "flat", "d": "[TRANSLATE: d] D"},
        id="type-mismatch",
    ),
    pytest.param(
        {"list": [1, 2], "n": 3, "flag": True, "nil": None},
        {"list": ["x"], "n": "trois", "old": {"k": "v"}},
        id="non-string-leaves",
    ),
    pytest.param(
        {"menu": {"open": "Open", "close": "Close"}, "home": "Home"},
        {"home": "Accueil", "menu": {"close": "Fermer"}, "legacy": "Ancien"},
        id="realistic",
    ),
]


class TestFlatten:
    def test_nested_paths_use_dots(self) -> None:
        tree = {"a": "1", "b": {"c": "2", "d": {"e": "3"}}}
        assert flatten_keys(tree) == {"a", "b.c", "b.d.e"}

    def test_arrays_are_leaves(self) -> None:
        tree = {"items": [{"x": 1}, {"y": 2}], "s": "v"}
        assert flatten_keys(tree) == {"items", "s"}

    def test_empty_subtree_contributes_nothing(self) -> None:
        assert flatten_keys({"a": {}, "b": "x"}) == {"b"}

    def test_non_string_scalars_are_leaves(self) -> None:
        assert flatten_keys({"n": 1, "f": 1.5, "t": False, "z": None}) == {
            "n", "f", "t", "z",
        }

    def test_iter_leaves_keeps_tree_order(self) -> None:
        tree = {"z": "1", "a": {"m": "2", "b": "3"}}
        assert [p for p, _ in iter_leaves(tree)] == ["z", "a.m", "a.b"]

    def test_only_mappings_are_subtrees(self) -> None:
        assert is_subtree({})
        assert not is_subtree([])
        assert not is_subtree("x")
        assert not is_subtree(None)


class TestDiff:
    def test_scenario_missing_key(self) -> None:
        ref = {"a": "A", "b": {"c": "C"}}
        target = {"a": "x"}
        diff = diff_keys(ref, target)
        assert diff.missing == {"b.c"}
        assert diff.extra == set()
        assert not diff.is_clean

    def test_extra_keys_reported(self) -> None:
        diff = diff_keys({"a": "A"}, {"a": "x", "old": {"k": "v"}})
        assert diff.missing == set()
        assert diff.extra == {"old.k"}

    def test_values_are_ignored(self) -> None:
        ref = {"a": "A", "b": [1]}
        assert diff_keys(ref, {"a": 5, "b": "[TRANSLATE] x"}).is_clean

    def test_leaf_versus_subtree_counts_both_ways(self) -> None:
        diff = diff_keys({"a": {"b": "B"}}, {"a": "flat"})
        assert diff.missing == {"a.b"}
        assert diff.extra == {"a"}


class TestFindUntranslated:
    def test_marker_anywhere_in_string(self) -> None:
        tree = {
            "a": "[TRANSLATE: a] Hello",
            "b": "prefix [TRANSLATE no bracket",
            "c": {"d": "[TRANSLATE: c.d] x"},
            "e": "done",
        }
        assert find_untranslated(tree) == {"a", "b", "c.d"}

    def test_non_strings_are_never_untranslated(self) -> None:
        tree = {"list": ["[TRANSLATE] x"], "n": 1, "z": None}
        assert find_untranslated(tree) == set()

    def test_marker_is_case_sensitive(self) -> None:
        assert find_untranslated({"a": "[translate] x"}) == set()


class TestMerge:
    def test_scenario_placeholder_for_missing_key(self) -> None:
        ref = {"a": "A", "b": {"c": "C"}}
        target = {"a": "x"}
        assert merge_tree(target, ref) == {
            "a": "x",
            "b": {"c": "[TRANSLATE: b.c] C"},
        }

    def test_scenario_stale_placeholder_is_regenerated_and_extras_pruned(self) -> None:
        ref = {"greet": "Hello"}
        target = {"greet": "[TRANSLATE] Hello", "old": "Bye"}
        assert merge_tree(target, ref) == {"greet": "[TRANSLATE: greet] Hello"}

    def test_leaf_replaced_by_subtree(self) -> None:
        ref = {"a": {"b": "B"}}
        assert merge_tree({"a": "flat"}, ref) == {"a": {"b": "[TRANSLATE: a.b] B"}}

    def test_subtree_replaced_by_leaf(self) -> None:
        ref = {"a": "A"}
        assert merge_tree({"a": {"b": "x"}}, ref) == {"a": "[TRANSLATE: a] A"}

    def test_non_string_target_value_gets_placeholder(self) -> None:
        assert merge_tree({"n": 3}, {"n": "N"}) == {"n": "[TRANSLATE: n] N"}

    def test_non_string_reference_rendered_as_text(self) -> None:
        ref = {"items": ["a", "b"], "count": 2, "on": True, "none": None}
        assert merge_tree({}, ref) == {
            "items": "[TRANSLATE: items] a,b",
            "count": "[TRANSLATE: count] 2",
            "on": "[TRANSLATE: on] true",
            "none": "[TRANSLATE: none] null",
        }

    def test_array_items_render_like_joined_text(self) -> None:
        ref = {"mixed": [1, 2.0, 2.5, False, None, ["x", "y"]], "empty": []}
        assert merge_tree({}, ref) == {
            "mixed": "[TRANSLATE: mixed] 1,2,2.5,false,,x,y",
            "empty": "[TRANSLATE: empty] ",
        }

    def test_non_json_leaves_do_not_break_merge(self) -> None:
        ref = {"d": Decimal("1.5"), "s": {1, 2}, "n": {"inner": Decimal("2")}}
        merged = merge_tree({}, ref)
        assert merged["d"] == "[TRANSLATE: d] 1.5"
        assert merged["s"] == "[TRANSLATE: s] {1, 2}"
        assert merged["n"] == {"inner": "[TRANSLATE: n.inner] 2"}
        assert generate_skeleton(ref) == merged

    def test_translated_array_slot_keeps_string(self) -> None:
        # A string translation of an array leaf is still a translation.
        assert merge_tree({"items": "a, b"}, {"items": ["a", "b"]}) == {"items": "a, b"}

    def test_key_order_follows_reference(self) -> None:
        ref = {"z": "Z", "a": {"y": "Y", "b": "B"}, "m": "M"}
        target = {"m": "m", "a": {"b": "b", "y": "y"}, "z": "z"}
        merged = merge_tree(target, ref)
        assert list(merged) == ["z", "a", "m"]
        assert list(merged["a"]) == ["y", "b"]

    def test_none_target_treated_as_empty(self) -> None:
        assert merge_tree(None, {"a": "A"}) == {"a": "[TRANSLATE: a] A"}

    def test_non_mapping_target_treated_as_empty(self) -> None:
        assert merge_tree(["junk"], {"a": "A"}) == {"a": "[TRANSLATE: a] A"}

    def test_empty_reference_subtree_is_kept(self) -> None:
        assert merge_tree({"a": {"x": "1"}}, {"a": {}}) == {"a": {}}

    def test_returns_fresh_nested_dicts(self) -> None:
        target = {"a": {"b": "x"}}
        merged = merge_tree(target, {"a": {"b": "B"}})
        assert merged["a"] is not target["a"]

    @pytest.mark.parametrize("ref, target", PAIRS)
    def test_completeness(self, ref, target) -> None:
        assert flatten_keys(merge_tree(target, ref)) == flatten_keys(ref)

    @pytest.mark.parametrize("ref, target", PAIRS)
    def test_idempotent(self, ref, target) -> None:
        once = merge_tree(target, ref)
        assert merge_tree(once, ref) == once

    @pytest.mark.parametrize("ref, target", PAIRS)
    def test_translations_preserved(self, ref, target) -> None:
        merged = dict(iter_leaves(merge_tree(target, ref)))
        ref_keys = flatten_keys(ref)
        for path, value in iter_leaves(target):
            if path in ref_keys and isinstance(value, str) and PLACEHOLDER_MARKER not in value:
                assert merged[path] == value

    @pytest.mark.parametrize("ref, target", PAIRS)
    def test_inputs_not_mutated(self, ref, target) -> None:
        ref_before, target_before = copy.deepcopy(ref), copy.deepcopy(target)
        merge_tree(target, ref)
        assert ref == ref_before
        assert target == target_before

    @pytest.mark.parametrize("ref, target", PAIRS)
    def test_untranslated_after_merge_are_exactly_the_placeholders(self, ref, target) -> None:
        merged = merge_tree(target, ref)
        kept = {
            p for p, v in iter_leaves(target)
            if p in flatten_keys(ref) and isinstance(v, str) and PLACEHOLDER_MARKER not in v
        }
        assert find_untranslated(merged) == flatten_keys(ref) - kept


class TestSkeleton:
    def test_every_leaf_is_a_placeholder(self) -> None:
        ref = {"a": "A", "b": {"c": "C", "d": 4}}
        skel = generate_skeleton(ref)
        assert find_untranslated(skel) == flatten_keys(ref)
        assert skel == {
            "a": "[TRANSLATE: a] A",
            "b": {"c": "[TRANSLATE: b.c] C", "d": "[TRANSLATE: b.d] 4"},
        }

    def test_deterministic(self) -> None:
        ref = {"x": {"y": "Y"}, "z": ["1"]}
        assert generate_skeleton(ref) == generate_skeleton(copy.deepcopy(ref))

    def test_matches_merge_of_empty_target(self) -> None:
        ref = {"x": {"y": "Y"}, "z": "Z"}
        assert generate_skeleton(ref) == merge_tree({}, ref)

    def test_make_placeholder_format(self) -> None:
        assert make_placeholder("nav.home", "Home") == "[TRANSLATE: nav.home] Home"
