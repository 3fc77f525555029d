"""
OpenAI embedding provider.
Sends the user's strings to the embeddings endpoint in as few requests as the limits allow.
"""

import logging
import os
import time
from typing import Any, Iterator, Optional

import numpy as np
from openai import OpenAI
from dotenv import load_dotenv

from .base import BaseEmbedder, EmbeddingError, register_embedder
import config

logger = logging.getLogger(__name__)

load_dotenv()

# Request limits; the token count is estimated from characters
MAX_TOKENS_PER_REQUEST = 290000
CHARS_PER_TOKEN = 3.5
MAX_CHARS_PER_TEXT = 20000

RETRY_MARKERS = ("rate", "limit", "429")


def _prepare(text: str) -> str:
    """Strip and truncate; the endpoint rejects empty strings."""
    text = str(text).strip()[:MAX_CHARS_PER_TEXT]
    return text or " "


def _is_retryable(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in RETRY_MARKERS)


@register_embedder("openai")
class OpenAIEmbedder(BaseEmbedder):
    """
    Embeddings from OpenAI's text-embedding models.

    Requests are split by count and by estimated tokens, rate-limited
    requests are retried with exponential backoff, and results are put
    back in input order by their index field.
    """

    def __init__(
        self,
        model: str = config.OPENAI_MODEL,
        batch_size: int = config.OPENAI_BATCH_SIZE,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
        max_retries: int = 5,
        base_delay: float = 2.0,
    ):
        """
        Args:
            model: Embedding model name
            batch_size: Maximum number of strings per request
            api_key: API key; falls back to OPENAI_API_KEY
            client: Object exposing embeddings.create(), used instead of a new OpenAI client
            max_retries: Attempts per request before giving up
            base_delay: Seconds before the first retry, doubled each time

        Raises:
            ValueError: If no client is given and no API key can be found
        """
        self.model = model
        self.batch_size = batch_size
        self.max_retries = max_retries
        self.base_delay = base_delay

        if client is None:
            api_key = api_key or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError(
                    "OpenAI API key not found. Enter it in the sidebar or set OPENAI_API_KEY in .env."
                )
            client = OpenAI(api_key=api_key)
        self.client = client

    @property
    def name(self) -> str:
        return f"openai_{self.model}"

    @property
    def dimension(self) -> int:
        return config.OPENAI_EMBEDDING_DIM

    def embed(self, texts: list[str]) -> np.ndarray:
        if not texts:
            return np.zeros((0, self.dimension), dtype=np.float32)

        requests = list(self._requests([_prepare(t) for t in texts]))
        rows: list[list[float]] = []
        for number, chunk in enumerate(requests, 1):
            if len(requests) > 1:
                logger.info(f"Embedding request {number}/{len(requests)} ({len(chunk)} strings)")
                if number > 1:
                    time.sleep(0.1)
            rows.extend(self._create(chunk))

        return self.normalize(np.array(rows, dtype=np.float32))

    def _requests(self, texts: list[str]) -> Iterator[list[str]]:
        """Group texts so no request exceeds the count or token limit."""
        chunk: list[str] = []
        tokens = 0.0
        for text in texts:
            estimate = len(text) / CHARS_PER_TOKEN
            if chunk and (len(chunk) >= self.batch_size or tokens + estimate > MAX_TOKENS_PER_REQUEST):
                yield chunk
                chunk, tokens = [], 0.0
            chunk.append(text)
            tokens += estimate
        if chunk:
            yield chunk

    def _create(self, texts: list[str]) -> list[list[float]]:
        """One embeddings request, retried while rate limited."""
        for attempt in range(self.max_retries):
            try:
                response = self.client.embeddings.create(model=self.model, input=texts)
            except Exception as e:
                if not _is_retryable(e) or attempt == self.max_retries - 1:
                    raise
                delay = self.base_delay * 2 ** attempt
                logger.warning(f"Rate limited, retrying in {delay:.1f}s")
                time.sleep(delay)
                continue
            return [item.embedding for item in sorted(response.data, key=lambda item: item.index)]

        raise EmbeddingError(f"No embeddings after {self.max_retries} attempts")
