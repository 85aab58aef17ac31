"""Ingest endpoint: chunk, embed and store uploaded episode transcripts."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from second_brain.api.dependencies import get_embedding_provider, get_vector_store
from second_brain.api.errors import error_response
from second_brain.api.models import EpisodePayload, ErrorResponse, IngestResponse
from second_brain.ingestion.embeddings import EmbeddingProvider
from second_brain.ingestion.models import Episode
from second_brain.ingestion.pipeline import IngestionValidationError, ingest_episodes
from second_brain.ingestion.storage import VectorStore

logger = logging.getLogger(__name__)

router = APIRouter()

_episode_list = TypeAdapter(list[EpisodePayload])


def _parse_episodes(payload: Any) -> list[Episode] | None:
    """Convert the raw ``episodes`` value into :class:`Episode` objects.

    Non-list payloads are returned as ``None`` so the orchestrator reports
    them as a validation error.
    """
    if not isinstance(payload, list):
        return None
    try:
        items = _episode_list.validate_python(payload)
    except ValidationError as exc:
        raise IngestionValidationError(f"Invalid episode payload: {exc.error_count()} error(s)") from exc
    return [
        Episode(
            title=item.title,
            transcript=item.transcript,
            speaker=item.speaker,
            timestamp=item.timestamp,
        )
        for item in items
    ]


@router.post(
    "/api/ingest",
    response_model=IngestResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ingest(
    request: Request,
    provider: Annotated[EmbeddingProvider, Depends(get_embedding_provider)],
    store: Annotated[VectorStore, Depends(get_vector_store)],
) -> IngestResponse | JSONResponse:
    """Ingest ``{"episodes": [{"title", "transcript"}, ...]}``.

    Partial success is still a 200: the message reports how many vectors were
    actually stored, which may be fewer than the number of chunks.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    payload = body.get("episodes") if isinstance(body, dict) else None

    try:
        episodes = _parse_episodes(payload)
        result = await ingest_episodes(episodes, provider, store)
    except IngestionValidationError as exc:
        return error_response(400, str(exc))
    except Exception as exc:
        logger.exception("Ingestion error")
        return error_response(500, "Failed to ingest transcripts", str(exc) or "Unknown error")

    return IngestResponse(
        message=f"Successfully ingested {result.successful_vectors} transcript chunks",
        successful_vectors=result.successful_vectors,
        total_chunks=result.total_chunks,
    )
