from __future__ import annotations

"""
Context Assembly Domain Models.

Immutable, request-scoped structures exchanged between the collector, the
tree formatting service and the content provider.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Set, Tuple

# -----------------------------------------------------------------------------
# FILESYSTEM ENTRIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileSystemEntry:
    """
    Metadata for a path reachable under the project root.

    Attributes:
        uri: Absolute filesystem path (map key).
        is_file: True for files, False for directories.
        name: Basename shown in the tree.
        relative_path: POSIX-style path relative to the project root ("" for the root).
        size: Size in bytes, when known.
    """
    uri: str
    is_file: bool
    name: str
    relative_path: str
    size: Optional[int] = None


EntryMap = Dict[str, FileSystemEntry]


@dataclass(frozen=True)
class CollectionResult:
    """Output of the collector: tree metadata plus the content-eligible files."""
    tree_entries: EntryMap
    content_file_uris: Set[str]

# -----------------------------------------------------------------------------
# TREE NODES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class InternalTreeNode:
    """Hierarchical node built from flat entries before display projection."""
    entry: FileSystemEntry
    children: Tuple["InternalTreeNode", ...] = ()


@dataclass(frozen=True)
class FormatterTreeNode:
    """
    Display-only node consumed by the tree renderer.

    Attributes:
        label: Text printed for the node.
        is_directory: Adds a trailing slash when True.
        details: Optional annotation appended after one space (e.g. file size).
        children: Already-sorted child nodes.
    """
    label: str
    is_directory: bool
    details: Optional[str] = None
    children: Tuple["FormatterTreeNode", ...] = ()

# -----------------------------------------------------------------------------
# FILTER RULES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FilterRules:
    """
    Output visibility rules for the project tree.

    Evaluated in a fixed order by
    ``context4ai.core.pipeline.components.filters.is_visible_in_tree``.
    """
    always_show: Tuple[str, ...] = ()
    always_hide: Tuple[str, ...] = ()
    show_if_selected: Tuple[str, ...] = ()
    initially_checked: FrozenSet[str] = field(default_factory=frozenset)

# -----------------------------------------------------------------------------
# CONTENT AGGREGATION
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ContentAggregationResult:
    """
    Result of one budgeted content aggregation pass.

    Attributes:
        content_string: Concatenated ``<file>`` blocks.
        processed_tokens: Tokens consumed by the included files.
        limit_reached: True iff at least one eligible file was dropped by the budget.
        included_files: Relative paths admitted, in output order.
        skipped_files: Relative paths that could not be read.
        first_excluded: Relative path of the first file rejected by the budget.
    """
    content_string: str = ""
    processed_tokens: int = 0
    limit_reached: bool = False
    included_files: Tuple[str, ...] = ()
    skipped_files: Tuple[str, ...] = ()
    first_excluded: Optional[str] = None
