from __future__ import annotations

"""
Redundant Path Pruning Stage.

Reduces a selection to its frontier set: no surviving path is an ancestor of
another selected path. Paths are compared as segment tuples produced by a
single splitter that accepts both '/' and '\\', so mixed spellings of the
same path collapse instead of slipping through.
"""

import logging
import re
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)

_SEPARATORS_RX = re.compile(r"[\\/]+")

Segments = Tuple[str, ...]


def split_segments(path: str) -> Segments:
    """
    Split a path on either separator, keeping a leading anchor.

    A leading separator becomes an empty first segment so '/p' and 'p'
    remain distinct; trailing separators are ignored.

    Args:
        path: Raw path string.

    Returns:
        Tuple[str, ...]: Path segments.
    """
    parts = _SEPARATORS_RX.split(path)
    if len(parts) > 1 and parts[-1] == "":
        parts = parts[:-1]
    return tuple(parts)


def _is_proper_ancestor(ancestor: Segments, descendant: Segments) -> bool:
    return len(ancestor) < len(descendant) and descendant[:len(ancestor)] == ancestor


def prune_redundant_paths(paths: Iterable[str]) -> List[str]:
    """
    Drop every path that is a proper ancestor of another selected path.

    Duplicates (including separator variants) collapse to the first spelling
    seen. The result is ordered deepest-first, then lexicographically by
    segments; callers must not rely on it matching the input order.

    Args:
        paths: Selected paths.

    Returns:
        List[str]: Frontier set.
    """
    spelled: Dict[Segments, str] = {}
    for p in paths:
        if not p:
            continue
        spelled.setdefault(split_segments(p), p)

    # Deepest first: descendants are settled before their ancestors are examined
    ordered = sorted(spelled, key=lambda s: (-len(s), s))

    survivors: List[Segments] = []
    for candidate in ordered:
        if any(_is_proper_ancestor(candidate, kept) for kept in survivors):
            continue
        survivors.append(candidate)

    pruned = [spelled[s] for s in survivors]
    logger.debug(f"Pruned selection from {len(spelled)} to {len(pruned)} paths.")
    return pruned
