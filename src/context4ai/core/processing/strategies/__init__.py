from __future__ import annotations

from .base import DEFAULT_MODEL, TokenizerStrategy
from .heuristic import CHARS_PER_TOKEN_AVG, HeuristicStrategy
from .openai import TiktokenStrategy

__all__ = [
    "TokenizerStrategy",
    "DEFAULT_MODEL",
    "HeuristicStrategy",
    "CHARS_PER_TOKEN_AVG",
    "TiktokenStrategy",
]
