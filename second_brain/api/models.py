"""Pydantic request/response schemas for the Second Brain API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EpisodePayload(ApiModel):
    """One episode inside an ingest request."""

    title: str = ""
    transcript: Any = None
    speaker: str | None = None
    timestamp: str | None = None


class IngestResponse(ApiModel):
    """Response body for the /api/ingest endpoint."""

    success: bool = True
    message: str
    successful_vectors: int
    total_chunks: int


class SearchResult(ApiModel):
    """A single retrieved transcript chunk."""

    score: float
    content: str
    episode_title: str
    speaker: str | None = None
    timestamp: str | None = None


class SearchResponse(ApiModel):
    """Response body for the /api/search endpoint."""

    query: str
    results: list[SearchResult]
    total_results: int


class StatusResponse(ApiModel):
    """Response body for the /api/status endpoint."""

    total_vectors: int
    index_stats: dict[str, Any]


class ErrorResponse(ApiModel):
    """Error body returned by every endpoint."""

    error: str
    details: str | None = None
