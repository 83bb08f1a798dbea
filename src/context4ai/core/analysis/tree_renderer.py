from __future__ import annotations

"""
Tree Renderer.

Converts a FormatterTreeNode hierarchy into the box-drawn text used in the
<project_tree> block. Pure function of the tree shape.
"""

from typing import List

from context4ai.domain.context_models import FormatterTreeNode
from context4ai.domain.errors import RenderError

BRANCH = "├─ "
CORNER = "└─ "
PIPE = "│  "
BLANK = "   "


class TreeFormatterService:
    """Renders display trees. Children are expected to arrive sorted."""

    def format_tree(self, root: FormatterTreeNode) -> str:
        """
        Render a tree as text.

        The root line is the label, a slash for directories and the details
        after one space. Lines are joined by newlines without a trailing one.

        Args:
            root: Display tree root.

        Returns:
            str: Rendered tree.

        Raises:
            RenderError: A node is not a FormatterTreeNode.
        """
        lines: List[str] = [_node_line(root)]
        render_tree_structure(root, lines, prefix="")
        return "\n".join(lines)


def render_tree_structure(node: FormatterTreeNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append one line per descendant of a node.

    Args:
        node: Current node.
        lines: Accumulator for output lines.
        prefix: Continuation glyphs inherited from ancestors.
    """
    children = node.children or ()
    total = len(children)

    for i, child in enumerate(children):
        is_last = i == total - 1
        connector = CORNER if is_last else BRANCH
        lines.append(f"{prefix}{connector}{_node_line(child)}")
        render_tree_structure(child, lines, prefix + (BLANK if is_last else PIPE))


def _node_line(node: FormatterTreeNode) -> str:
    if not isinstance(node, FormatterTreeNode):
        raise RenderError(f"Cannot render tree node of type {type(node).__name__}")

    line = node.label + ("/" if node.is_directory else "")
    if node.details:
        line += f" {node.details}"
    return line
