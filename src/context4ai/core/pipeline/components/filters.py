from __future__ import annotations

"""
Glob Filtering Engine.

Shell-glob matching (via wcmatch) against root-relative POSIX paths, plus the
single precedence policy that decides whether an entry is visible in the
rendered project tree.

Patterns follow shell semantics: '*' and '?' never cross '/', '**' spans any
number of directories and a pattern without a directory part only matches
top-level names. Use '**/name' to match at any depth.
"""

from typing import Iterable, List

from wcmatch import glob

from context4ai.domain.context_models import FileSystemEntry, FilterRules

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.FORCEUNIX

# -----------------------------------------------------------------------------
# PATTERN MATCHING
# -----------------------------------------------------------------------------

def clean_patterns(patterns: Iterable[str]) -> List[str]:
    """Strip glob strings and drop blank entries."""
    return [p for p in (str(x).strip() for x in patterns) if p]


def is_match(relative_path: str, patterns: Iterable[str]) -> bool:
    """
    Check a root-relative path against a glob list.

    The root itself ("") never matches, and neither does anything when the
    list is empty.

    Args:
        relative_path: POSIX path relative to the project root.
        patterns: Glob list.

    Returns:
        bool: True if any pattern matches.
    """
    candidate = relative_path.strip("/")
    if not candidate:
        return False

    cleaned = clean_patterns(patterns)
    if not cleaned:
        return False
    # wcmatch caches compiled patterns internally
    return glob.globmatch(candidate, cleaned, flags=GLOB_FLAGS)

# -----------------------------------------------------------------------------
# TREE VISIBILITY POLICY
# -----------------------------------------------------------------------------

def is_visible_in_tree(entry: FileSystemEntry, rules: FilterRules) -> bool:
    """
    Decide whether an entry appears in the project tree.

    First match wins:
        1. always_hide      -> hidden
        2. always_show      -> shown
        3. show_if_selected -> shown only when the entry was checked
        4. no rule          -> shown

    Args:
        entry: Collected entry.
        rules: Output rule sets.

    Returns:
        bool: True if the entry should be rendered.
    """
    path = entry.relative_path

    if is_match(path, rules.always_hide):
        return False
    if is_match(path, rules.always_show):
        return True
    if is_match(path, rules.show_if_selected):
        return entry.uri in rules.initially_checked
    return True
