from __future__ import annotations

"""
Base Definitions for Tokenization Strategies.

Provides the abstract interface shared by the BPE backend and the
character-based fallback.
"""

from abc import ABC, abstractmethod

from context4ai.domain.constants import DEFAULT_MODEL_KEY

DEFAULT_MODEL: str = DEFAULT_MODEL_KEY


class TokenizerStrategy(ABC):
    """
    Abstract base class for token counting algorithms.
    """

    @abstractmethod
    def count(self, text: str, model_id: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.
            model_id: Model identifier used to select an encoding.

        Returns:
            int: Total token count.
        """
        pass
