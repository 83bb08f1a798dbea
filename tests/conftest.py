from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Provides shared project trees, configuration and tokenizer doubles.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from context4ai.core.processing.strategies import HeuristicStrategy  # noqa: E402
from context4ai.core.processing.tokenizer import TokenizerService  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small project on disk.

    Structure:
    /proj
      /src
        main.py
        utils.py
      /tests
        test_main.py
      /node_modules
        lib.js
      /dist
        bundle.js
      README.md
      debug.log
    """
    root = tmp_path / "proj"
    root.mkdir()

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("print('main')\n", encoding="utf-8")
    (src / "utils.py").write_text("def helper():\n    return 1\n", encoding="utf-8")

    tests = root / "tests"
    tests.mkdir()
    (tests / "test_main.py").write_text("def test_one():\n    assert True\n", encoding="utf-8")

    modules = root / "node_modules"
    modules.mkdir()
    (modules / "lib.js").write_text("module.exports = {}\n", encoding="utf-8")

    dist = root / "dist"
    dist.mkdir()
    (dist / "bundle.js").write_text("var a = 1;\n", encoding="utf-8")

    (root / "README.md").write_text("# Proj\n", encoding="utf-8")
    (root / "debug.log").write_text("noise\n", encoding="utf-8")

    return root


@pytest.fixture
def heuristic_tokenizer() -> TokenizerService:
    """Offline tokenizer: ceil(len / 4) for every text."""
    return TokenizerService(backend=HeuristicStrategy())


@pytest.fixture
def base_config(sample_project: Path) -> Dict[str, Any]:
    """Configuration pointing at the sample project with explicit rules."""
    return {
        "project_root": str(sample_project),
        "tree_mode": "selected",
        "max_tokens": 10_000,
        "core_ignore_globs": ["**/node_modules", "**/node_modules/**"],
        "explorer_ignore_globs": [],
        "hide_children_globs": ["**/dist"],
        "always_show_globs": [],
        "always_hide_globs": ["**/*.log"],
        "show_if_selected_globs": ["**/tests", "**/tests/**"],
        "file_groups": {},
    }
