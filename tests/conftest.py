"""Shared fixtures: in-memory stand-ins for the embedding provider and vector store."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from second_brain.api.dependencies import get_embedding_provider, get_vector_store
from second_brain.api.main import app
from second_brain.config import settings
from second_brain.ingestion.embeddings import EmbeddingResult
from second_brain.ingestion.models import VectorRecord
from second_brain.ingestion.storage import Match


class FakeEmbeddingProvider:
    """Returns a constant vector, or a failure when ``fail`` is set.

    Texts listed in ``explode_on`` raise instead of returning a result.
    """

    def __init__(
        self,
        fail: bool = False,
        explode_on: set[str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.fail = fail
        self.explode_on = explode_on or set()
        self.delay = delay
        self.calls: list[str] = []
        self.active = 0
        self.max_active = 0

    async def embed(self, text: str) -> EmbeddingResult:
        self.calls.append(text)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay)
            if text in self.explode_on:
                raise RuntimeError(f"boom: {text}")
            if self.fail:
                return EmbeddingResult.failure("quota exceeded")
            return EmbeddingResult.success([0.5] * 1536)
        finally:
            self.active -= 1


class FakeVectorStore:
    """Records upserts; upsert calls whose 1-based number is in ``fail_calls`` raise."""

    def __init__(
        self,
        fail_calls: set[int] | None = None,
        matches: list[Match] | None = None,
        stats: dict[str, Any] | None = None,
    ) -> None:
        self.fail_calls = fail_calls or set()
        self.matches = matches or []
        self.stats = stats or {"totalRecordCount": 0, "namespaces": {}}
        self.upsert_calls: list[list[VectorRecord]] = []
        self.queries: list[tuple[list[float], int]] = []

    def upsert(self, records: list[VectorRecord]) -> int:
        self.upsert_calls.append(list(records))
        if len(self.upsert_calls) in self.fail_calls:
            raise ConnectionError("vector store unavailable")
        return len(records)

    def query(self, vector: list[float], top_k: int) -> list[Match]:
        self.queries.append((vector, top_k))
        return self.matches[:top_k]

    def describe_stats(self) -> dict[str, Any]:
        return self.stats

    @property
    def stored(self) -> list[VectorRecord]:
        return [r for i, call in enumerate(self.upsert_calls, 1) if i not in self.fail_calls for r in call]


@pytest.fixture(autouse=True)
def no_batch_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "ingest_batch_delay_seconds", 0.0)


@pytest.fixture
def provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture
def client(provider: FakeEmbeddingProvider, store: FakeVectorStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_embedding_provider] = lambda: provider
    app.dependency_overrides[get_vector_store] = lambda: store
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
