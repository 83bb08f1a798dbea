from __future__ import annotations

"""
Logging Settings.

A single frozen value object describes where context assembly diagnostics
go. Records are written to stderr so stdout stays reserved for the context
document, optionally mirrored into a size-capped log file.
"""

import logging
from dataclasses import dataclass
from typing import Optional

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Diagnostics settings for one CLI or library session.

    Attributes:
        level: Lowest level emitted, by name. Unknown names mean INFO.
        console: Mirror records to stderr.
        log_file: Rotating file receiving the same records, if any.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Terminal line layout.
        file_fmt: Log file line layout (adds timestamp and logger name).
        datefmt: Timestamp layout for file lines.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_number(self) -> int:
        """Numeric logging level resolved from the level name."""
        name = str(self.level or "").strip().upper()
        name = _LEVEL_ALIASES.get(name, name)
        if name not in _LEVEL_NAMES:
            return logging.INFO
        return getattr(logging, name)

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
        """Settings used by the context4ai command: console on, DEBUG when asked."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)
