from __future__ import annotations

"""
Heuristic Tokenization Strategy.

Character-density estimate used whenever the BPE backend is unavailable.
"""

import math

from context4ai.core.processing.strategies.base import TokenizerStrategy

CHARS_PER_TOKEN_AVG: int = 4


class HeuristicStrategy(TokenizerStrategy):
    """
    Fallback algorithm: ceil(characters / 4).
    """

    def count(self, text: str, model_id: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)
