from __future__ import annotations

"""
Token Counting Service.

Routes token estimation through the tiktoken BPE backend and degrades to a
character-based heuristic whenever the backend fails. Token counts are
advisory: this module never lets a backend failure escape.
"""

import logging
from typing import Optional

from context4ai.core.processing.strategies import (
    DEFAULT_MODEL,
    HeuristicStrategy,
    TiktokenStrategy,
    TokenizerStrategy,
)
from context4ai.domain.errors import TokenizationError

logger = logging.getLogger(__name__)


class TokenizerService:
    """
    Model-aware token estimator with a deterministic fallback.

    Args:
        backend: Primary strategy. Defaults to tiktoken.
        model: Model identifier forwarded to the backend.
    """

    def __init__(
            self,
            backend: Optional[TokenizerStrategy] = None,
            model: str = DEFAULT_MODEL,
    ) -> None:
        self.heuristic = HeuristicStrategy()
        self._backend: Optional[TokenizerStrategy] = backend if backend is not None else TiktokenStrategy()
        self.model = model

    def calculate_tokens(self, text: Optional[str]) -> int:
        """
        Count tokens for a text segment.

        Empty or missing text returns 0 without invoking the backend.

        Args:
            text: Input text.

        Returns:
            int: Token count (exact or heuristic).
        """
        if not text:
            return 0

        if self._backend is None:
            return self.heuristic.count(text, self.model)

        try:
            return self._count_with_backend(text)
        except TokenizationError as e:
            logger.warning(f"{e}. Using heuristic fallback.")
            return self.heuristic.count(text, self.model)

    def _count_with_backend(self, text: str) -> int:
        try:
            return int(self._backend.count(text, self.model))  # type: ignore[union-attr]
        except Exception as e:
            backend_name = type(self._backend).__name__
            raise TokenizationError(f"Tokenizer backend {backend_name} failed: {e}") from e


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

_SERVICE_INSTANCE = TokenizerService()


def calculate_tokens(text: Optional[str]) -> int:
    """
    Estimate tokens using the shared TokenizerService.

    Args:
        text: Input string content.

    Returns:
        int: Token count.
    """
    return _SERVICE_INSTANCE.calculate_tokens(text)
