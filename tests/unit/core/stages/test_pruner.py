from __future__ import annotations

"""
Unit tests for redundant path pruning.

Verifies the frontier property (no survivor is an ancestor of another
selected path), idempotence and separator handling.
"""

from context4ai.core.pipeline.stages.pruner import prune_redundant_paths, split_segments


def test_split_segments_handles_both_separators() -> None:
    assert split_segments("/p/src/") == ("", "p", "src")
    assert split_segments("C:\\p\\src") == ("C:", "p", "src")
    assert split_segments("C:\\p/src//a.ts") == ("C:", "p", "src", "a.ts")
    assert split_segments("p") == ("p",)


def test_ancestor_of_selected_file_is_removed() -> None:
    result = prune_redundant_paths(["/p/src", "/p/src/a.ts", "/p/docs"])

    assert result == ["/p/src/a.ts", "/p/docs"]


def test_sibling_prefix_is_not_an_ancestor() -> None:
    result = prune_redundant_paths(["/p/src", "/p/src-old/a.ts"])

    assert sorted(result) == ["/p/src", "/p/src-old/a.ts"]


def test_every_selected_path_is_covered() -> None:
    selection = ["/p", "/p/a", "/p/a/b", "/p/c/d.txt", "/q"]
    result = prune_redundant_paths(selection)

    assert sorted(result) == ["/p/a/b", "/p/c/d.txt", "/q"]
    for survivor in result:
        others = [s for s in result if s != survivor]
        assert not any(o.startswith(survivor + "/") for o in others)


def test_pruning_is_idempotent() -> None:
    once = prune_redundant_paths(["/p/src", "/p/src/a.ts", "/p/docs", "/p/docs/x/y.md"])

    assert prune_redundant_paths(once) == once


def test_duplicates_and_separator_variants_collapse() -> None:
    result = prune_redundant_paths(["/p/a.ts", "/p/a.ts", "\\p\\a.ts"])

    assert result == ["/p/a.ts"]


def test_mixed_separators_still_prune_ancestors() -> None:
    result = prune_redundant_paths(["C:\\p\\src", "C:/p/src/a.ts"])

    assert result == ["C:/p/src/a.ts"]


def test_empty_input() -> None:
    assert prune_redundant_paths([]) == []
    assert prune_redundant_paths([""]) == []
