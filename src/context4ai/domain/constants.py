from __future__ import annotations

"""
Domain Constants.

Centralizes default budgets, tree modes, output tags and the baseline glob
rule sets shipped with a fresh configuration.
"""

from typing import List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_MODEL_KEY = "- Default Model -"
DEFAULT_MAX_TOKENS = 500_000
DEFAULT_ROOT_NAME = "ProjectRoot"

# Project tree modes
TREE_MODE_ALL = "all"
TREE_MODE_SELECTED = "selected"
TREE_MODE_NONE = "none"
TREE_MODES: Tuple[str, ...] = (TREE_MODE_ALL, TREE_MODE_SELECTED, TREE_MODE_NONE)

# Output document tags
CONTEXT_TAG = "context"
PROJECT_TREE_TAG = "project_tree"
PROJECT_FILES_TAG = "project_files"

# -----------------------------------------------------------------------------
# DEFAULT GLOB RULES
# -----------------------------------------------------------------------------

# Shell-glob semantics: '*' stays within one segment, '**/' reaches any depth.
# Directory rules list the directory and its contents separately.

DEFAULT_CORE_IGNORE_GLOBS: List[str] = [
    "**/.git",
    "**/.git/**",
    "**/node_modules",
    "**/node_modules/**",
    "**/__pycache__",
    "**/__pycache__/**",
    "**/.venv",
    "**/.venv/**",
    "**/*.pyc",
    "**/.DS_Store",
]

DEFAULT_EXPLORER_IGNORE_GLOBS: List[str] = [
    "**/.idea",
    "**/.idea/**",
    "**/.vscode",
    "**/.vscode/**",
]

# Matched against directories only
DEFAULT_HIDE_CHILDREN_GLOBS: List[str] = [
    "**/dist",
    "**/build",
    "**/coverage",
]

DEFAULT_ALWAYS_SHOW_GLOBS: List[str] = []

DEFAULT_ALWAYS_HIDE_GLOBS: List[str] = [
    "**/*.log",
    "**/*.lock",
]

DEFAULT_SHOW_IF_SELECTED_GLOBS: List[str] = [
    "**/tests",
    "**/tests/**",
    "**/*.test.*",
    "**/*.spec.*",
    "**/test_*.py",
]
