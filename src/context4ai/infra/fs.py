from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the filesystem capability consumed by the assembly engine (stat,
directory listing, text reads) together with cross-platform path helpers.
Typed errors let the collector fail fast while the content stage degrades.
"""

import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from context4ai.domain.errors import FileReadError, PathAccessError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Context4AI"
UNIX_APP_DIR_NAME = ".context4ai"

# -----------------------------------------------------------------------------
# CAPABILITY CONTRACT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileStat:
    """Result of a stat call. Special files report neither flag."""
    is_file: bool
    is_directory: bool
    size: Optional[int] = None


@dataclass(frozen=True)
class DirectoryEntry:
    """Single child returned by a directory listing."""
    name: str
    is_file: bool
    is_directory: bool


class FileSystem(ABC):
    """
    Abstract filesystem capability.

    Implementations must raise PathAccessError from stat/read_directory and
    FileReadError from read_file.
    """

    @abstractmethod
    def stat(self, path: str) -> FileStat:
        pass

    @abstractmethod
    def read_directory(self, path: str) -> List[DirectoryEntry]:
        pass

    @abstractmethod
    def read_file(self, path: str) -> str:
        pass


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk via the 'os' module."""

    def stat(self, path: str) -> FileStat:
        try:
            st = os.stat(path)
        except OSError as e:
            raise PathAccessError(path, e.strerror or str(e)) from e

        # FIFOs, sockets and devices are neither
        return FileStat(
            is_file=stat.S_ISREG(st.st_mode),
            is_directory=stat.S_ISDIR(st.st_mode),
            size=st.st_size,
        )

    def read_directory(self, path: str) -> List[DirectoryEntry]:
        try:
            with os.scandir(path) as it:
                entries = [
                    DirectoryEntry(
                        name=e.name,
                        is_file=e.is_file(),
                        is_directory=e.is_dir(),
                    )
                    for e in it
                ]
        except OSError as e:
            raise PathAccessError(path, e.strerror or str(e)) from e
        return sorted(entries, key=lambda e: e.name)

    def read_file(self, path: str) -> str:
        # 'strict' so binary artifacts surface as read failures and get skipped
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(path, str(e)) from e

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Context4AI
    - Linux/Mac: ~/.context4ai

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts.
    Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def is_within_root(path: str, root: str) -> bool:
    """Check whether an absolute path lies at or below the root."""
    try:
        return os.path.commonpath([os.path.abspath(path), os.path.abspath(root)]) == os.path.abspath(root)
    except ValueError:
        # Different drives on Windows
        return False


def to_relative_posix(path: str, root: str) -> str:
    """
    Express a path relative to the root using forward slashes.

    Returns "" for the root itself.
    """
    rel = os.path.relpath(path, root)
    if rel == ".":
        return ""
    return rel.replace("\\", "/")

# -----------------------------------------------------------------------------
# FORMATTING
# -----------------------------------------------------------------------------

def format_file_size(size_bytes: int) -> str:
    """
    Render a byte count as a short human-readable string.

    Examples: "512 B", "1.50 KB", "2.00 MB".
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    kb = size_bytes / 1024
    if kb < 1024:
        return f"{kb:.2f} KB"
    return f"{kb / 1024:.2f} MB"
