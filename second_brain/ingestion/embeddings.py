"""Embedding helpers: OpenAI text-embedding-3-small with a hashing fallback."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from openai import AsyncOpenAI

from second_brain.config import settings

logger = logging.getLogger(__name__)

EMBEDDING_DIMENSIONS = 1536


@dataclass(frozen=True)
class EmbeddingResult:
    """Outcome of a provider call: either a vector or the reason it failed."""

    vector: list[float] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.vector is not None

    @classmethod
    def success(cls, vector: list[float]) -> EmbeddingResult:
        return cls(vector=vector)

    @classmethod
    def failure(cls, error: str) -> EmbeddingResult:
        return cls(error=error)


class EmbeddingProvider(Protocol):
    """Anything that can turn one text into one embedding result."""

    async def embed(self, text: str) -> EmbeddingResult: ...


class OpenAIEmbeddingProvider:
    """Embedding provider backed by the OpenAI embeddings API."""

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
    ) -> None:
        self._client = client
        self.model = model or settings.embedding_model

    def _get_client(self) -> AsyncOpenAI:
        # Built on first use: a missing API key then surfaces as a failed result.
        if self._client is None:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key or None)
        return self._client

    async def embed(self, text: str) -> EmbeddingResult:
        """Embed *text*; any client error is returned as a failed result."""
        try:
            client = self._get_client()
            response = await client.embeddings.create(input=text, model=self.model)
        except Exception as exc:
            return EmbeddingResult.failure(str(exc) or type(exc).__name__)
        if not response.data:
            return EmbeddingResult.failure("Embedding response contained no data")
        return EmbeddingResult.success(list(response.data[0].embedding))


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _token_bucket(token: str, dimensions: int) -> int:
    """Hash a token with ``h = h * 31 + c`` over UTF-16 code units, 32-bit truncated."""
    h = 0
    raw = token.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        code_unit = raw[i] | (raw[i + 1] << 8)
        h = _to_int32(_to_int32(h) << 5) - h + code_unit
    return abs(h) % dimensions


def fallback_embedding(text: str, dimensions: int = EMBEDDING_DIMENSIONS) -> list[float]:
    """Deterministic bag-of-hashed-words embedding, L2-normalised.

    Used when the embedding provider is unavailable. Returns an all-zero
    vector when *text* has no tokens.
    """
    vector = [0.0] * dimensions
    for token in text.lower().split():
        vector[_token_bucket(token, dimensions)] += 1.0

    magnitude = math.sqrt(sum(v * v for v in vector))
    if magnitude == 0:
        return vector
    return [v / magnitude for v in vector]


async def embed_with_fallback(
    provider: EmbeddingProvider,
    text: str,
    label: str = "text",
) -> tuple[list[float], bool]:
    """Embed *text* via *provider*, falling back to :func:`fallback_embedding`.

    Returns:
        ``(vector, used_fallback)``.
    """
    result = await provider.embed(text)
    if result.vector is not None:
        return result.vector, False
    logger.warning("Embedding provider failed for %s, using fallback: %s", label, result.error)
    return fallback_embedding(text), True
