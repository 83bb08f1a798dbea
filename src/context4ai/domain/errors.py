from __future__ import annotations

"""
Context Assembly Error Taxonomy.

Distinguishes fatal failures (inventory and rendering) from recoverable ones
(content reads and tokenization) so each pipeline stage can decide whether to
abort or degrade.
"""


class ContextError(Exception):
    """Base class for every failure raised by the assembly engine."""


class PathAccessError(ContextError):
    """
    Stat or directory listing failed during collection.

    Fatal: a missing path usually means the selection is stale and the
    caller should re-validate it before retrying.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error accessing path {path} during collection: {reason}")


# Name used by the collector contract
FileAccessError = PathAccessError


class FileReadError(ContextError):
    """A single file could not be read for content. Recoverable."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading file {path} for content: {reason}")


class TokenizationError(ContextError):
    """The token counting backend failed. Recoverable via the heuristic."""


class RenderError(ContextError):
    """The tree renderer received a malformed node. Indicates a defect."""
