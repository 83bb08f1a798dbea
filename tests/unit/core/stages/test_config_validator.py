from __future__ import annotations

"""
Unit tests for configuration validation.

Verifies default filling, type coercion with warnings, strict mode and
file group normalization.
"""

import pytest

from context4ai.core.pipeline.stages.validator import GLOB_FIELDS, validate_config
from context4ai.domain.config import get_default_config


def test_non_dict_returns_defaults_with_warning() -> None:
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg == get_default_config()
    assert len(warnings) == 1
    assert "expected dict" in warnings[0]


def test_non_dict_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_missing_keys_are_filled() -> None:
    cfg, warnings = validate_config({})

    assert warnings == []
    for field in GLOB_FIELDS:
        assert isinstance(cfg[field], list)
    assert cfg["tree_mode"] == "selected"
    assert cfg["file_groups"] == {}


def test_empty_glob_lists_are_kept() -> None:
    cfg, warnings = validate_config({"core_ignore_globs": [], "always_hide_globs": []})

    assert cfg["core_ignore_globs"] == []
    assert cfg["always_hide_globs"] == []
    assert warnings == []


def test_csv_string_is_converted() -> None:
    cfg, warnings = validate_config({"always_hide_globs": "*.log, *.tmp ,"})

    assert cfg["always_hide_globs"] == ["*.log", "*.tmp"]
    assert any("CSV" in w for w in warnings)


def test_non_string_glob_items_are_discarded() -> None:
    cfg, warnings = validate_config({"hide_children_globs": ["**/dist", 3, "  "]})

    assert cfg["hide_children_globs"] == ["**/dist"]
    assert any("hide_children_globs[1]" in w for w in warnings)


@pytest.mark.parametrize("value,expected,warns", [
    (1000, 1000, False),
    ("2_000", 2000, True),
    ("1,500", 1500, True),
    (0, 500_000, True),
    (-5, 500_000, True),
    (True, 500_000, True),
    ("many", 500_000, True),
])
def test_max_tokens_coercion(value, expected, warns) -> None:
    cfg, warnings = validate_config({"max_tokens": value})

    assert cfg["max_tokens"] == expected
    assert bool(warnings) is warns


def test_tree_mode_is_normalized() -> None:
    cfg, _ = validate_config({"tree_mode": " ALL "})
    assert cfg["tree_mode"] == "all"

    cfg, warnings = validate_config({"tree_mode": "everything"})
    assert cfg["tree_mode"] == "selected"
    assert warnings


def test_strict_mode_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        validate_config({"tree_mode": "everything"}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"max_tokens": 0}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"always_hide_globs": "*.log"}, strict=True)


def test_file_groups_are_normalized() -> None:
    cfg, warnings = validate_config({
        "file_groups": {
            "tests": {"items": ["**/tests", 7], "visible": False},
            "docs": {"items": "docs/,*.md"},
            "broken": "oops",
        }
    })

    assert cfg["file_groups"] == {
        "tests": {"items": ["**/tests"], "visible": False},
        "docs": {"items": ["docs/", "*.md"], "visible": True},
    }
    assert any("broken" in w for w in warnings)


def test_blank_project_root_falls_back() -> None:
    cfg, _ = validate_config({"project_root": "   "})

    assert cfg["project_root"] == get_default_config()["project_root"]
