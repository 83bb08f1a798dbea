from __future__ import annotations

"""
Context Formatting Service.

Filters collected entries through the tree visibility rules, assembles them
into a sorted InternalTreeNode hierarchy keyed by relative path segments and
projects it onto display nodes for the renderer.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from context4ai.core.analysis.tree_renderer import TreeFormatterService
from context4ai.core.pipeline.components.filters import is_visible_in_tree
from context4ai.domain.context_models import (
    EntryMap,
    FileSystemEntry,
    FilterRules,
    FormatterTreeNode,
    InternalTreeNode,
)
from context4ai.infra.fs import format_file_size

logger = logging.getLogger(__name__)


@dataclass
class _Branch:
    """Mutable scaffold used only while building; frozen into InternalTreeNode."""
    entry: FileSystemEntry
    children: Dict[str, "_Branch"] = field(default_factory=dict)

    def freeze(self) -> InternalTreeNode:
        ordered = sorted(self.children.values(), key=_sort_key)
        return InternalTreeNode(entry=self.entry, children=tuple(c.freeze() for c in ordered))


def _sort_key(branch: _Branch):
    # Directories first, then by name
    return (branch.entry.is_file, branch.entry.name)


class ContextFormattingService:
    """
    Builds the project tree string.

    Args:
        tree_formatter: Renderer. Defaults to TreeFormatterService.
    """

    def __init__(self, tree_formatter: Optional[TreeFormatterService] = None) -> None:
        self.tree_formatter = tree_formatter or TreeFormatterService()

    def generate_project_tree(
            self,
            entries: EntryMap,
            project_root: str,
            project_root_name: str,
            always_show: Iterable[str],
            always_hide: Iterable[str],
            show_if_selected: Iterable[str],
            initially_checked: Iterable[str],
    ) -> str:
        """
        Render the filtered project tree.

        Args:
            entries: Collected entries keyed by absolute path.
            project_root: Absolute project root.
            project_root_name: Label for a synthesized root.
            always_show: Globs always rendered.
            always_hide: Globs never rendered.
            show_if_selected: Globs rendered only when checked.
            initially_checked: Paths the user checked.

        Returns:
            str: Rendered tree, or "" when nothing survives filtering.
        """
        rules = FilterRules(
            always_show=tuple(always_show),
            always_hide=tuple(always_hide),
            show_if_selected=tuple(show_if_selected),
            initially_checked=frozenset(initially_checked),
        )
        visible = [e for e in entries.values() if is_visible_in_tree(e, rules)]
        logger.debug(f"{len(visible)} of {len(entries)} entries visible in project tree.")

        if not visible:
            return ""

        internal_root = self.build_internal_tree(visible, project_root, project_root_name)
        if internal_root is None:
            return f"{project_root_name}/\n"

        return self.tree_formatter.format_tree(self.to_formatter_tree(internal_root))

    # -------------------------------------------------------------------------
    # TREE CONSTRUCTION
    # -------------------------------------------------------------------------

    def build_internal_tree(
            self,
            entries: List[FileSystemEntry],
            project_root: str,
            project_root_name: str,
    ) -> Optional[InternalTreeNode]:
        """
        Assemble flat entries into a hierarchy.

        Intermediate directories missing from the entries are synthesized.
        An entry for the project root itself replaces the synthesized root.
        Entries that resolve outside the root are ignored; if none can be
        placed, None is returned.

        Returns:
            Optional[InternalTreeNode]: Root node or None.
        """
        if not entries:
            return None

        root = _Branch(FileSystemEntry(
            uri=project_root,
            is_file=False,
            name=project_root_name,
            relative_path="",
        ))
        placed = 0

        for entry in sorted(entries, key=lambda e: e.relative_path):
            rel = entry.relative_path.strip("/")
            if not rel:
                if os.path.normpath(entry.uri) == os.path.normpath(project_root):
                    root.entry = entry
                    placed += 1
                continue
            if rel.startswith("..") or os.path.isabs(rel):
                logger.debug(f"Entry outside project root skipped from tree: {entry.uri}")
                continue

            parts = rel.split("/")
            parent = root
            for depth, part in enumerate(parts):
                is_leaf = depth == len(parts) - 1
                node = parent.children.get(part)
                if node is None:
                    key = "/".join(parts[:depth + 1])
                    node_entry = entry if is_leaf else FileSystemEntry(
                        uri=os.path.join(project_root, *parts[:depth + 1]),
                        is_file=False,
                        name=part,
                        relative_path=key,
                    )
                    node = _Branch(node_entry)
                    parent.children[part] = node
                elif is_leaf:
                    # Real metadata beats a synthesized placeholder
                    node.entry = entry
                parent = node
            placed += 1

        if placed == 0:
            return None
        return root.freeze()

    def to_formatter_tree(self, node: InternalTreeNode) -> FormatterTreeNode:
        """Project an internal node onto a display node."""
        entry = node.entry
        details = None
        if entry.is_file and entry.size is not None:
            details = f"[{format_file_size(entry.size)}]"

        return FormatterTreeNode(
            label=entry.name,
            is_directory=not entry.is_file,
            details=details,
            children=tuple(self.to_formatter_tree(c) for c in node.children),
        )
