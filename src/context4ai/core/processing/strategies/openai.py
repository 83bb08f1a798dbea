from __future__ import annotations

"""
OpenAI Tokenization Strategy.

Local BPE counting with tiktoken. Modern models use 'o200k_base'; legacy
GPT-4/GPT-3.5 identifiers use 'cl100k_base'.
"""

import logging
from typing import Dict

import tiktoken

from context4ai.core.processing.strategies.base import TokenizerStrategy

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"
_LEGACY_MARKERS = ("gpt-4-", "gpt-3.5", "legacy")


class TiktokenStrategy(TokenizerStrategy):
    """
    BPE encoder backed by tiktoken.

    Encodings are loaded lazily and cached per instance; tiktoken encodings
    are immutable so sharing them across requests is safe.
    """

    def __init__(self) -> None:
        self._encodings: Dict[str, "tiktoken.Encoding"] = {}

    def encoding_for(self, model_id: str) -> "tiktoken.Encoding":
        """
        Resolve (and cache) the encoding used for a model identifier.

        Args:
            model_id: Model identifier.

        Returns:
            tiktoken.Encoding: Encoder exposing ``encode(text) -> list[int]``.
        """
        encoding_name = DEFAULT_ENCODING
        if any(marker in (model_id or "").lower() for marker in _LEGACY_MARKERS):
            encoding_name = LEGACY_ENCODING

        if encoding_name not in self._encodings:
            try:
                self._encodings[encoding_name] = tiktoken.get_encoding(encoding_name)
            except ValueError:
                logger.debug(f"Encoding '{encoding_name}' not found, falling back to {LEGACY_ENCODING}.")
                self._encodings[encoding_name] = tiktoken.get_encoding(LEGACY_ENCODING)
        return self._encodings[encoding_name]

    def count(self, text: str, model_id: str) -> int:
        encoding = self.encoding_for(model_id)
        return len(encoding.encode(text, disallowed_special=()))
