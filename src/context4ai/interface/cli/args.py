from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

from context4ai.domain.constants import TREE_MODES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the context4ai CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="context4ai",
        description="Assemble a project tree and file contents into a token-bounded LLM context.",
    )

    # --- Selection ---
    p.add_argument(
        "paths",
        nargs="*",
        help="Selected files or directories (defaults to the project root).",
    )
    p.add_argument(
        "-r", "--root",
        dest="project_root",
        default=None,
        help="Project root directory (defaults to the current directory).",
    )

    # --- Tree and Budget ---
    p.add_argument(
        "--mode",
        dest="tree_mode",
        choices=TREE_MODES,
        default=None,
        help="Project tree mode: whole project, selection only, or no tree.",
    )
    p.add_argument(
        "--max-tokens",
        dest="max_tokens",
        type=int,
        default=None,
        help="Token budget for file contents.",
    )
    p.add_argument(
        "--model",
        dest="target_model",
        default=None,
        help="Model identifier used to pick the token encoding.",
    )

    # --- Glob Rules (comma separated) ---
    p.add_argument("--ignore", dest="core_ignore_globs", default=None, help="Globs excluded from scanning.")
    p.add_argument("--hide-children", dest="hide_children_globs", default=None,
                   help="Directories listed without their contents.")
    p.add_argument("--always-show", dest="always_show_globs", default=None, help="Globs always shown in the tree.")
    p.add_argument("--always-hide", dest="always_hide_globs", default=None, help="Globs never shown in the tree.")
    p.add_argument("--show-if-selected", dest="show_if_selected_globs", default=None,
                   help="Globs shown in the tree only when selected.")

    # --- Output ---
    p.add_argument("-o", "--output", dest="output_file", default=None, help="Write the context to a file.")
    p.add_argument("--json", dest="json_output", action="store_true", help="Print the full result as JSON.")

    # --- Configuration and Diagnostics ---
    p.add_argument("--config", dest="config_file", default=None, help="Load configuration from this JSON file.")
    p.add_argument("--use-defaults", action="store_true", help="Ignore the persisted configuration.")
    p.add_argument("--dump-config", action="store_true", help="Print the effective configuration and exit.")
    p.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to this file.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides; None means "keep the base value".
    """
    overrides: Dict[str, Any] = {
        "project_root": args.project_root,
        "tree_mode": args.tree_mode,
        "max_tokens": args.max_tokens,
        "target_model": args.target_model,
    }

    for key in (
            "core_ignore_globs",
            "hide_children_globs",
            "always_show_globs",
            "always_hide_globs",
            "show_if_selected_globs",
    ):
        overrides[key] = _split_csv(getattr(args, key))

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed items."""
    if value is None:
        return None
    return [x.strip() for x in value.split(",") if x.strip()]
