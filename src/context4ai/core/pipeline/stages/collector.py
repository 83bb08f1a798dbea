from __future__ import annotations

"""
Context Data Collection Stage.

Resolves the pruned selection into (a) an ordered map of FileSystemEntry
metadata for the project tree and (b) the set of files eligible for content
inclusion. Ignore rules are applied on root-relative paths. Any stat or
listing failure aborts the collection: an inventory with holes would render
a misleading tree.
"""

import logging
import os
from typing import Collection, Iterable, Optional, Set, Tuple

from context4ai.core.pipeline.components.filters import is_match
from context4ai.domain.constants import TREE_MODE_ALL, TREE_MODE_NONE, TREE_MODES, TREE_MODE_SELECTED
from context4ai.domain.context_models import CollectionResult, EntryMap, FileSystemEntry
from context4ai.infra.fs import FileStat, FileSystem, LocalFileSystem, is_within_root, to_relative_posix

logger = logging.getLogger(__name__)


class ContextDataCollector:
    """
    Walks selected paths through the filesystem capability.

    Args:
        file_system: Filesystem capability. Defaults to the local disk.
    """

    def __init__(self, file_system: Optional[FileSystem] = None) -> None:
        self.fs = file_system or LocalFileSystem()

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def collect(
            self,
            checked_paths: Iterable[str],
            pruned_paths: Iterable[str],
            project_root: str,
            core_ignore_globs: Collection[str],
            explorer_ignore_globs: Collection[str],
            hide_children_globs: Collection[str],
            mode: str = TREE_MODE_SELECTED,
    ) -> CollectionResult:
        """
        Collect tree entries and content-eligible files.

        Args:
            checked_paths: Full user selection, before pruning.
            pruned_paths: Frontier set produced by the pruner.
            project_root: Absolute project root.
            core_ignore_globs: Always-excluded globs.
            explorer_ignore_globs: Explorer-level excluded globs.
            hide_children_globs: Directories listed without their contents.
            mode: Tree mode (all/selected/none).

        Returns:
            CollectionResult: Entry map (discovery order) and content file set.

        Raises:
            PathAccessError: A path could not be stat'ed or listed.
            ValueError: Unknown tree mode.
        """
        if mode not in TREE_MODES:
            raise ValueError(f"Unknown tree mode '{mode}'. Expected one of {', '.join(TREE_MODES)}.")

        walk = _Walk(
            fs=self.fs,
            root=os.path.abspath(project_root),
            ignores=tuple(core_ignore_globs) + tuple(explorer_ignore_globs),
            hide_children=tuple(hide_children_globs),
        )
        pruned = [os.path.abspath(p) for p in pruned_paths]

        logger.debug(f"Collecting {len(pruned)} selected paths under {walk.root} (mode: {mode}).")

        # Content set always follows the selection
        selection_entries: EntryMap = {}
        content_uris: Set[str] = set()
        for path in pruned:
            walk.visit(path, selection_entries, content_uris)

        if mode == TREE_MODE_NONE:
            tree_entries = {uri: selection_entries[uri] for uri in selection_entries if uri in content_uris}
        elif mode == TREE_MODE_ALL:
            tree_entries = {}
            walk.visit(walk.root, tree_entries, set())
            for uri, entry in selection_entries.items():
                tree_entries.setdefault(uri, entry)
        else:
            tree_entries = selection_entries
            pruned_set = set(pruned)
            for path in checked_paths:
                abs_path = os.path.abspath(path)
                if abs_path not in pruned_set:
                    walk.add_ancestor(abs_path, tree_entries)

        logger.info(f"Collected {len(tree_entries)} tree entries and {len(content_uris)} content files.")
        return CollectionResult(tree_entries=tree_entries, content_file_uris=content_uris)


class _Walk:
    """Depth-first traversal state shared by one collection call."""

    def __init__(
            self,
            fs: FileSystem,
            root: str,
            ignores: Tuple[str, ...],
            hide_children: Tuple[str, ...],
    ) -> None:
        self.fs = fs
        self.root = root
        self.ignores = ignores
        self.hide_children = hide_children

    def visit(self, path: str, entries: EntryMap, content_uris: Set[str]) -> None:
        if not is_within_root(path, self.root):
            logger.debug(f"Skipping path outside project root: {path}")
            return

        # Ignore rules run before stat: ignored entries are never touched
        relative = to_relative_posix(path, self.root)
        if is_match(relative, self.ignores):
            return

        stat = self.fs.stat(path)
        if not stat.is_file and not stat.is_directory:
            logger.debug(f"Skipping special file: {path}")
            return

        entries.setdefault(path, self._entry(path, relative, stat))

        if stat.is_file:
            content_uris.add(path)
            return

        if is_match(relative, self.hide_children):
            logger.debug(f"Listing '{relative}' without its contents.")
            return

        for child in self.fs.read_directory(path):
            self.visit(os.path.join(path, child.name), entries, content_uris)

    def add_ancestor(self, path: str, entries: EntryMap) -> None:
        """Register a pruned-away checked directory without recursing."""
        if path in entries or not is_within_root(path, self.root):
            return

        relative = to_relative_posix(path, self.root)
        if is_match(relative, self.ignores):
            return

        stat = self.fs.stat(path)
        if not stat.is_directory:
            return
        entries[path] = self._entry(path, relative, stat)

    def _entry(self, path: str, relative: str, stat: FileStat) -> FileSystemEntry:
        name = os.path.basename(path.rstrip("\\/")) or os.path.basename(self.root) or relative
        return FileSystemEntry(
            uri=path,
            is_file=stat.is_file,
            name=name,
            relative_path=relative,
            size=stat.size if stat.is_file else None,
        )
