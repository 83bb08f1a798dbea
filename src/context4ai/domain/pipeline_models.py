from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object returned by the context assembly orchestrator to
its interface layers, plus factories for the success and failure paths.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ContextPipelineResult:
    """
    Unified result of a complete context assembly run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Stage-prefixed message in case of failure.
        project_root: Normalized project root processed.
        tree_mode: Tree mode used (all/selected/none).
        selected_paths: Paths supplied by the caller.
        pruned_paths: Frontier set after redundant-ancestor pruning.
        tree_string: Rendered project tree ("" when omitted).
        content_string: Concatenated file blocks.
        context_document: Final wrapped document.
        token_count: Tokens consumed by file contents.
        max_tokens: Budget applied to the content stage.
        limit_reached: Whether the budget dropped at least one file.
        warnings: Non-fatal advisories (budget, unreadable files).
        summary: Execution statistics.
    """
    ok: bool
    error: str

    project_root: str
    tree_mode: str
    max_tokens: int

    selected_paths: List[str] = field(default_factory=list)
    pruned_paths: List[str] = field(default_factory=list)

    tree_string: str = ""
    content_string: str = ""
    context_document: str = ""

    token_count: int = 0
    limit_reached: bool = False
    warnings: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        selected_paths: Optional[List[str]] = None,
        pruned_paths: Optional[List[str]] = None,
) -> ContextPipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Stage-prefixed error description.
        cfg: Configuration used during the failed run.
        selected_paths: Caller selection.
        pruned_paths: Selection after pruning, if that stage completed.

    Returns:
        ContextPipelineResult: An immutable error result object.
    """
    return ContextPipelineResult(
        ok=False,
        error=error,
        project_root=cfg.get("project_root", ""),
        tree_mode=cfg.get("tree_mode", ""),
        max_tokens=int(cfg.get("max_tokens", 0) or 0),
        selected_paths=list(selected_paths or []),
        pruned_paths=list(pruned_paths or []),
    )


def create_success_result(
        cfg: Dict[str, Any],
        selected_paths: List[str],
        pruned_paths: List[str],
        tree_string: str,
        content_string: str,
        context_document: str,
        token_count: int,
        limit_reached: bool,
        warnings: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ContextPipelineResult:
    """
    Create a successful pipeline result instance.

    Returns:
        ContextPipelineResult: An immutable success result object.
    """
    return ContextPipelineResult(
        ok=True,
        error="",
        project_root=cfg.get("project_root", ""),
        tree_mode=cfg.get("tree_mode", ""),
        max_tokens=int(cfg.get("max_tokens", 0) or 0),
        selected_paths=list(selected_paths),
        pruned_paths=list(pruned_paths),
        tree_string=tree_string,
        content_string=content_string,
        context_document=context_document,
        token_count=token_count,
        limit_reached=limit_reached,
        warnings=list(warnings or []),
        summary=summary_extra or {},
    )
