"""Tests for the OpenAI embedding provider and the hashing fallback."""

from __future__ import annotations

import asyncio
import math
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from second_brain.ingestion.embeddings import (
    EMBEDDING_DIMENSIONS,
    EmbeddingResult,
    OpenAIEmbeddingProvider,
    embed_with_fallback,
    fallback_embedding,
)


def _mock_openai(embedding: list[float] | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.embeddings.create = AsyncMock(side_effect=error)
    else:
        response = SimpleNamespace(data=[SimpleNamespace(embedding=embedding)])
        client.embeddings.create = AsyncMock(return_value=response)
    return client


class TestFallbackEmbedding:
    def test_dimension(self) -> None:
        assert len(fallback_embedding("hello world")) == EMBEDDING_DIMENSIONS

    def test_deterministic(self) -> None:
        text = "The quick brown fox jumps over the lazy dog"
        assert fallback_embedding(text) == fallback_embedding(text)

    def test_unit_length(self) -> None:
        vector = fallback_embedding("some words and some more words")
        assert math.isclose(math.sqrt(sum(v * v for v in vector)), 1.0)

    def test_single_character_bucket(self) -> None:
        # "a" hashes to its char code, 97
        vector = fallback_embedding("a")
        assert vector[97] == 1.0
        assert sum(vector) == 1.0

    def test_polynomial_hash(self) -> None:
        # ("a" * 31 + "b") = 97 * 31 + 98 = 3105; 3105 % 1536 = 33
        assert fallback_embedding("ab")[33] == 1.0

    def test_case_insensitive(self) -> None:
        assert fallback_embedding("Hello WORLD") == fallback_embedding("hello world")

    def test_repeated_tokens_accumulate(self) -> None:
        vector = fallback_embedding("a a a b")
        # a -> 3, b -> 1 before normalisation
        assert math.isclose(vector[97], 3 / math.sqrt(10))
        assert math.isclose(vector[98], 1 / math.sqrt(10))

    def test_long_token_stays_in_range(self) -> None:
        vector = fallback_embedding("supercalifragilisticexpialidocious" * 20)
        assert len(vector) == EMBEDDING_DIMENSIONS
        assert math.isclose(max(vector), 1.0)

    def test_non_ascii_token(self) -> None:
        vector = fallback_embedding("café 🚀")
        assert math.isclose(math.sqrt(sum(v * v for v in vector)), 1.0)

    def test_empty_text_is_all_zero(self) -> None:
        assert fallback_embedding("") == [0.0] * EMBEDDING_DIMENSIONS
        assert fallback_embedding("   \n ") == [0.0] * EMBEDDING_DIMENSIONS


class TestEmbeddingResult:
    def test_success(self) -> None:
        result = EmbeddingResult.success([1.0, 2.0])
        assert result.ok
        assert result.error is None

    def test_failure(self) -> None:
        result = EmbeddingResult.failure("nope")
        assert not result.ok
        assert result.vector is None


class TestOpenAIEmbeddingProvider:
    def test_returns_vector(self) -> None:
        client = _mock_openai(embedding=[0.1, 0.2, 0.3])
        provider = OpenAIEmbeddingProvider(client=client, model="text-embedding-3-small")

        result = asyncio.run(provider.embed("hello"))

        assert result.vector == [0.1, 0.2, 0.3]
        client.embeddings.create.assert_awaited_once_with(
            input="hello", model="text-embedding-3-small"
        )

    def test_client_error_becomes_failure(self) -> None:
        client = _mock_openai(error=RuntimeError("rate limited"))
        provider = OpenAIEmbeddingProvider(client=client)

        result = asyncio.run(provider.embed("hello"))

        assert not result.ok
        assert result.error == "rate limited"

    def test_empty_response_becomes_failure(self) -> None:
        client = MagicMock()
        client.embeddings.create = AsyncMock(return_value=SimpleNamespace(data=[]))
        result = asyncio.run(OpenAIEmbeddingProvider(client=client).embed("hello"))
        assert not result.ok


class TestEmbedWithFallback:
    def test_uses_provider_vector(self) -> None:
        provider = OpenAIEmbeddingProvider(client=_mock_openai(embedding=[0.4] * 1536))
        vector, used_fallback = asyncio.run(embed_with_fallback(provider, "hello"))
        assert vector == [0.4] * 1536
        assert used_fallback is False

    def test_falls_back_on_failure(self) -> None:
        provider = OpenAIEmbeddingProvider(client=_mock_openai(error=ConnectionError("down")))
        vector, used_fallback = asyncio.run(embed_with_fallback(provider, "hello world"))
        assert used_fallback is True
        assert vector == fallback_embedding("hello world")
