from __future__ import annotations

"""
Unit tests for CLI argument parsing and override mapping.
"""

import pytest

from context4ai.interface.cli.args import args_to_overrides, build_parser


def test_defaults_produce_no_overrides() -> None:
    args = build_parser().parse_args([])
    overrides = args_to_overrides(args)

    assert args.paths == []
    assert all(v is None for v in overrides.values())


def test_full_argument_mapping() -> None:
    args = build_parser().parse_args([
        "src", "README.md",
        "-r", "/proj",
        "--mode", "all",
        "--max-tokens", "2000",
        "--model", "gpt-4o",
        "--ignore", "**/node_modules, **/.git",
        "--hide-children", "**/dist",
        "--always-show", "setup.py",
        "--always-hide", "*.log,*.lock",
        "--show-if-selected", "**/tests",
    ])
    overrides = args_to_overrides(args)

    assert args.paths == ["src", "README.md"]
    assert overrides["project_root"] == "/proj"
    assert overrides["tree_mode"] == "all"
    assert overrides["max_tokens"] == 2000
    assert overrides["target_model"] == "gpt-4o"
    assert overrides["core_ignore_globs"] == ["**/node_modules", "**/.git"]
    assert overrides["hide_children_globs"] == ["**/dist"]
    assert overrides["always_show_globs"] == ["setup.py"]
    assert overrides["always_hide_globs"] == ["*.log", "*.lock"]
    assert overrides["show_if_selected_globs"] == ["**/tests"]


def test_empty_csv_clears_list() -> None:
    args = build_parser().parse_args(["--always-hide", ""])

    assert args_to_overrides(args)["always_hide_globs"] == []


def test_invalid_mode_is_rejected() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--mode", "partial"])
