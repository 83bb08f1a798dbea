from __future__ import annotations

"""
File Content Aggregation Stage.

Reads the content-eligible files one at a time in relative-path order,
wraps each in a <file> block and stops at the first file that would exceed
the token budget. Admission is a pure step over an immutable aggregation
state, so the cutoff depends only on the ordered files, their token costs
and the budget.
"""

import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from context4ai.core.processing.tokenizer import TokenizerService
from context4ai.domain.context_models import ContentAggregationResult, EntryMap, FileSystemEntry
from context4ai.domain.errors import FileReadError
from context4ai.infra.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


def format_file_block(entry: FileSystemEntry, content: str) -> str:
    """Wrap file content in the tagged block used by <project_files>."""
    return f'<file name="{entry.name}" path="/{entry.relative_path}">\n{content}\n</file>\n'


def admit_file(
        state: ContentAggregationResult,
        entry: FileSystemEntry,
        content: str,
        file_tokens: int,
        budget: int,
) -> ContentAggregationResult:
    """
    Fold one file into the aggregation state.

    Args:
        state: State before this file.
        entry: File being considered.
        content: File text.
        file_tokens: Token cost of the file.
        budget: Tokens still available for this pass.

    Returns:
        ContentAggregationResult: New state, with limit_reached set when the
        file does not fit.
    """
    if state.processed_tokens + file_tokens > budget:
        return replace(state, limit_reached=True, first_excluded=entry.relative_path)

    return replace(
        state,
        content_string=state.content_string + format_file_block(entry, content),
        processed_tokens=state.processed_tokens + file_tokens,
        included_files=state.included_files + (entry.relative_path,),
    )


class FileContentProvider:
    """
    Budgeted content aggregation.

    Args:
        file_system: Filesystem capability. Defaults to the local disk.
        tokenizer: Token counter. Defaults to a tiktoken-backed service.
        notifier: Optional callback receiving user-facing warnings.
    """

    def __init__(
            self,
            file_system: Optional[FileSystem] = None,
            tokenizer: Optional[TokenizerService] = None,
            notifier: Optional[Notifier] = None,
    ) -> None:
        self.fs = file_system or LocalFileSystem()
        self.tokenizer = tokenizer or TokenizerService()
        self.notifier = notifier

    def get_file_contents(
            self,
            eligible_uris: Iterable[str],
            entries: EntryMap,
            max_tokens: int,
            current_total_tokens: int = 0,
    ) -> ContentAggregationResult:
        """
        Aggregate file contents until the token budget is exhausted.

        Missing or non-file entries are skipped silently. Unreadable files are
        logged and skipped. The first file that does not fit stops the pass.

        Args:
            eligible_uris: Content-eligible file paths.
            entries: Collected entries keyed by path.
            max_tokens: Overall budget.
            current_total_tokens: Tokens already spent by the caller.

        Returns:
            ContentAggregationResult: Aggregated content and budget outcome.
        """
        files = self._resolve_files(eligible_uris, entries)
        budget = max_tokens - current_total_tokens
        state = ContentAggregationResult()

        for entry in files:
            try:
                content = self.fs.read_file(entry.uri)
            except FileReadError as e:
                logger.warning(str(e))
                state = replace(state, skipped_files=state.skipped_files + (entry.relative_path,))
                continue

            file_tokens = self.tokenizer.calculate_tokens(content)
            state = admit_file(state, entry, content, file_tokens, budget)
            if state.limit_reached:
                self._warn(
                    f"Token limit ({max_tokens}) reached. Content from '{entry.relative_path}' "
                    f"and subsequent files was not included."
                )
                break

        logger.info(
            f"Aggregated {len(state.included_files)} of {len(files)} files "
            f"({state.processed_tokens} tokens)."
        )
        return state

    def _resolve_files(self, eligible_uris: Iterable[str], entries: EntryMap) -> List[FileSystemEntry]:
        files: List[FileSystemEntry] = []
        for uri in eligible_uris:
            entry = entries.get(uri)
            if entry is None or not entry.is_file:
                continue
            files.append(entry)
        return sorted(files, key=lambda e: e.relative_path)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        if self.notifier is not None:
            self.notifier(message)
