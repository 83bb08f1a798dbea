from __future__ import annotations

"""
Unit tests for the File Content Provider.

Uses in-memory filesystem and tokenizer doubles to verify ordering, the
token budget cutoff, read-failure skipping and the <file> block format.
"""

from typing import Dict, List

import pytest

from context4ai.core.pipeline.stages.content_provider import FileContentProvider, admit_file, format_file_block
from context4ai.domain.context_models import ContentAggregationResult, FileSystemEntry
from context4ai.domain.errors import FileReadError, PathAccessError
from context4ai.infra.fs import DirectoryEntry, FileStat, FileSystem


class MemoryFileSystem(FileSystem):
    def __init__(self, files: Dict[str, str]) -> None:
        self.files = files
        self.reads: List[str] = []

    def stat(self, path: str) -> FileStat:
        raise PathAccessError(path, "not used")

    def read_directory(self, path: str) -> List[DirectoryEntry]:
        raise PathAccessError(path, "not used")

    def read_file(self, path: str) -> str:
        self.reads.append(path)
        if path not in self.files:
            raise FileReadError(path, "No such file")
        return self.files[path]


class TableTokenizer:
    """Returns a fixed token cost per content string."""

    def __init__(self, costs: Dict[str, int]) -> None:
        self.costs = costs

    def calculate_tokens(self, text):
        return self.costs.get(text, 0)


def file_entry(rel: str) -> FileSystemEntry:
    return FileSystemEntry(uri=f"/r/{rel}", is_file=True, name=rel.rsplit("/", 1)[-1], relative_path=rel)


@pytest.fixture
def entries() -> Dict[str, FileSystemEntry]:
    items = [file_entry("a.ts"), file_entry("b.ts"), file_entry("lib/c.ts")]
    return {e.uri: e for e in items}


def make_provider(files, costs, notifier=None) -> FileContentProvider:
    return FileContentProvider(
        file_system=MemoryFileSystem(files),
        tokenizer=TableTokenizer(costs),
        notifier=notifier,
    )


def test_file_block_format() -> None:
    block = format_file_block(file_entry("src/a.ts"), "X")

    assert block == '<file name="a.ts" path="/src/a.ts">\nX\n</file>\n'


def test_budget_stops_at_first_overflow(entries) -> None:
    messages: List[str] = []
    provider = make_provider({"/r/a.ts": "A", "/r/b.ts": "B"}, {"A": 30, "B": 25}, notifier=messages.append)

    result = provider.get_file_contents(["/r/b.ts", "/r/a.ts"], entries, max_tokens=50)

    assert result.processed_tokens == 30
    assert result.limit_reached is True
    assert result.content_string == '<file name="a.ts" path="/a.ts">\nA\n</file>\n'
    assert result.first_excluded == "b.ts"
    assert messages == [
        "Token limit (50) reached. Content from 'b.ts' and subsequent files was not included."
    ]


def test_files_are_processed_in_relative_path_order(entries) -> None:
    fs = MemoryFileSystem({"/r/a.ts": "A", "/r/b.ts": "B", "/r/lib/c.ts": "C"})
    provider = FileContentProvider(file_system=fs, tokenizer=TableTokenizer({}))

    result = provider.get_file_contents(["/r/lib/c.ts", "/r/b.ts", "/r/a.ts"], entries, max_tokens=100)

    assert fs.reads == ["/r/a.ts", "/r/b.ts", "/r/lib/c.ts"]
    assert result.included_files == ("a.ts", "b.ts", "lib/c.ts")
    assert result.limit_reached is False


def test_no_reads_after_limit(entries) -> None:
    fs = MemoryFileSystem({"/r/a.ts": "A", "/r/b.ts": "B", "/r/lib/c.ts": "C"})
    provider = FileContentProvider(file_system=fs, tokenizer=TableTokenizer({"A": 10, "B": 10, "C": 1}))

    result = provider.get_file_contents(list(entries), entries, max_tokens=15)

    assert fs.reads == ["/r/a.ts", "/r/b.ts"]
    assert result.included_files == ("a.ts",)


def test_exact_fit_is_admitted(entries) -> None:
    provider = make_provider({"/r/a.ts": "A", "/r/b.ts": "B"}, {"A": 30, "B": 20})

    result = provider.get_file_contents(["/r/a.ts", "/r/b.ts"], entries, max_tokens=50)

    assert result.processed_tokens == 50
    assert result.limit_reached is False


def test_unreadable_file_is_skipped(entries) -> None:
    provider = make_provider({"/r/b.ts": "B"}, {"B": 5})

    result = provider.get_file_contents(["/r/a.ts", "/r/b.ts"], entries, max_tokens=50)

    assert result.skipped_files == ("a.ts",)
    assert result.included_files == ("b.ts",)
    assert result.limit_reached is False


def test_missing_and_directory_entries_are_ignored() -> None:
    folder = FileSystemEntry(uri="/r/lib", is_file=False, name="lib", relative_path="lib")
    provider = make_provider({}, {})

    result = provider.get_file_contents(["/r/lib", "/r/nowhere.ts"], {folder.uri: folder}, max_tokens=50)

    assert result == ContentAggregationResult()


def test_current_total_reduces_budget(entries) -> None:
    provider = make_provider({"/r/a.ts": "A"}, {"A": 30})

    result = provider.get_file_contents(["/r/a.ts"], entries, max_tokens=50, current_total_tokens=25)

    assert result.processed_tokens == 0
    assert result.limit_reached is True
    assert result.content_string == ""


def test_admit_file_is_pure() -> None:
    state = ContentAggregationResult()
    entry = file_entry("a.ts")

    admitted = admit_file(state, entry, "A", 5, budget=10)
    rejected = admit_file(admitted, file_entry("b.ts"), "B", 6, budget=10)

    assert state == ContentAggregationResult()
    assert admitted.processed_tokens == 5
    assert rejected.processed_tokens == 5
    assert rejected.limit_reached is True
    assert rejected.content_string == admitted.content_string
