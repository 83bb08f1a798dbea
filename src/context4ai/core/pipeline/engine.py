from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates one context assembly request:
1. Validates configuration and the project root.
2. Prunes the selection to its frontier set.
3. Collects tree entries and content-eligible files.
4. Renders the filtered project tree.
5. Aggregates file contents under the token budget.
6. Wraps everything into the final <context> document.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from context4ai.core.analysis.tree_builder import ContextFormattingService
from context4ai.core.pipeline.stages.collector import ContextDataCollector
from context4ai.core.pipeline.stages.content_provider import FileContentProvider
from context4ai.core.pipeline.stages.pruner import prune_redundant_paths
from context4ai.core.pipeline.stages.validator import validate_config
from context4ai.core.processing.tokenizer import TokenizerService
from context4ai.domain.config import get_hidden_group_globs
from context4ai.domain.constants import (
    CONTEXT_TAG,
    DEFAULT_ROOT_NAME,
    PROJECT_FILES_TAG,
    PROJECT_TREE_TAG,
    TREE_MODE_NONE,
)
from context4ai.domain.context_models import EntryMap
from context4ai.domain.errors import PathAccessError, RenderError
from context4ai.domain.pipeline_models import (
    ContextPipelineResult,
    create_error_result,
    create_success_result,
)
from context4ai.infra.fs import FileSystem, LocalFileSystem, is_within_root, normalize_path

logger = logging.getLogger(__name__)


def run_context_pipeline(
        config: Optional[Dict[str, Any]],
        selected_paths: Iterable[str],
        *,
        file_system: Optional[FileSystem] = None,
        tokenizer: Optional[TokenizerService] = None,
        raise_errors: bool = False,
) -> ContextPipelineResult:
    """
    Assemble the context document for a selection.

    Fatal stage failures (collection, rendering) are returned as a failed
    result with a stage-prefixed message, or re-raised when requested.

    Args:
        config: Raw or partial configuration dictionary.
        selected_paths: Paths the user checked.
        file_system: Filesystem capability. Defaults to the local disk.
        tokenizer: Token counter. Defaults to tiktoken for the configured model.
        raise_errors: Propagate fatal errors instead of wrapping them.

    Returns:
        ContextPipelineResult: Status, strings and metrics.
    """
    logger.info("Context assembly started.")

    # -------------------------------------------------------------------------
    # 1) Config & Root Normalization
    # -------------------------------------------------------------------------
    cfg, config_warnings = validate_config(config, strict=False)
    for warning in config_warnings:
        logger.warning(f"Configuration Warning: {warning}")

    fs = file_system or LocalFileSystem()
    project_root = normalize_path(cfg.get("project_root", ""), os.getcwd())
    cfg["project_root"] = project_root
    selected = [os.path.abspath(p) for p in selected_paths]

    if file_system is None and not os.path.isdir(project_root):
        msg = f"Invalid project root: {project_root}"
        logger.error(msg)
        if raise_errors:
            raise NotADirectoryError(msg)
        return create_error_result(msg, cfg, selected)

    root_name = os.path.basename(project_root.rstrip("\\/")) or DEFAULT_ROOT_NAME
    mode = cfg["tree_mode"]
    warnings: List[str] = []

    # -------------------------------------------------------------------------
    # 2) Pruning
    # -------------------------------------------------------------------------
    pruned = prune_redundant_paths(selected)
    logger.info(f"Total checked items: {len(selected)}, after pruning: {len(pruned)}")

    # -------------------------------------------------------------------------
    # 3) Collection (fail-fast)
    # -------------------------------------------------------------------------
    core_ignores = list(cfg["core_ignore_globs"]) + get_hidden_group_globs(cfg)
    try:
        collection = ContextDataCollector(fs).collect(
            selected,
            pruned,
            project_root,
            core_ignores,
            cfg["explorer_ignore_globs"],
            cfg["hide_children_globs"],
            mode=mode,
        )
    except PathAccessError as e:
        msg = f"Collection failed: {e}"
        logger.error(msg)
        if raise_errors:
            raise
        return create_error_result(msg, cfg, selected, pruned)

    # -------------------------------------------------------------------------
    # 4) Project Tree
    # -------------------------------------------------------------------------
    tree_string = ""
    if mode != TREE_MODE_NONE:
        try:
            tree_string = ContextFormattingService().generate_project_tree(
                collection.tree_entries,
                project_root,
                root_name,
                cfg["always_show_globs"],
                cfg["always_hide_globs"],
                cfg["show_if_selected_globs"],
                expand_checked(selected, collection.tree_entries),
            )
        except RenderError as e:
            msg = f"Tree rendering failed: {e}"
            logger.critical(msg)
            if raise_errors:
                raise
            return create_error_result(msg, cfg, selected, pruned)

    # -------------------------------------------------------------------------
    # 5) Budgeted Contents
    # -------------------------------------------------------------------------
    provider = FileContentProvider(
        file_system=fs,
        tokenizer=tokenizer or TokenizerService(model=cfg["target_model"]),
        notifier=warnings.append,
    )
    contents = provider.get_file_contents(
        collection.content_file_uris,
        collection.tree_entries,
        cfg["max_tokens"],
        0,
    )
    for skipped in contents.skipped_files:
        warnings.append(f"Skipped unreadable file: /{skipped}")

    # -------------------------------------------------------------------------
    # 6) Assembly
    # -------------------------------------------------------------------------
    document = build_context_document(
        tree_string,
        contents.content_string,
        include_tree=mode != TREE_MODE_NONE,
    )
    logger.info(f"Total tokens for final output (estimate): {contents.processed_tokens}")

    summary = {
        "tree_entries": len(collection.tree_entries),
        "content_candidates": len(collection.content_file_uris),
        "included_files": list(contents.included_files),
        "skipped_files": list(contents.skipped_files),
        "first_excluded": contents.first_excluded,
        "tree_lines": len(tree_string.splitlines()),
    }

    return create_success_result(
        cfg,
        selected,
        pruned,
        tree_string=tree_string,
        content_string=contents.content_string,
        context_document=document,
        token_count=contents.processed_tokens,
        limit_reached=contents.limit_reached,
        warnings=warnings,
        summary_extra=summary,
    )


def expand_checked(checked_paths: Iterable[str], entries: EntryMap) -> List[str]:
    """
    Propagate checks from directories to the collected entries below them.

    Checking a directory selects everything inside it, the way a checkbox
    tree does, so show-if-selected entries under it stay visible.

    Args:
        checked_paths: Paths the user checked.
        entries: Collected entries keyed by absolute path.

    Returns:
        List[str]: Checked paths plus every collected path beneath them.
    """
    checked = [os.path.abspath(p) for p in checked_paths]
    expanded = list(checked)
    seen = set(checked)
    for uri in entries:
        if uri not in seen and any(is_within_root(uri, c) for c in checked):
            expanded.append(uri)
            seen.add(uri)
    return expanded


def build_context_document(tree_string: str, content_string: str, include_tree: bool = True) -> str:
    """
    Wrap the tree and file blocks in the outer context tags.

    Args:
        tree_string: Rendered project tree.
        content_string: Concatenated <file> blocks.
        include_tree: Emit the <project_tree> block.

    Returns:
        str: Final context document.
    """
    parts = [f"<{CONTEXT_TAG}>\n"]

    if include_tree:
        parts.append(f"<{PROJECT_TREE_TAG}>")
        if tree_string.strip():
            parts.append(f"\n{tree_string.strip()}\n")
        parts.append(f"</{PROJECT_TREE_TAG}>\n")

    files_body = content_string or "\n"
    parts.append(f"<{PROJECT_FILES_TAG}>\n{files_body}</{PROJECT_FILES_TAG}>\n")
    parts.append(f"</{CONTEXT_TAG}>")
    return "".join(parts)
