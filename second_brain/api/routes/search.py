"""Search endpoint: embed a query and return the nearest transcript chunks."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from second_brain.api.dependencies import get_embedding_provider, get_vector_store
from second_brain.api.errors import error_response
from second_brain.api.models import ErrorResponse, SearchResponse, SearchResult
from second_brain.ingestion.embeddings import EmbeddingProvider
from second_brain.ingestion.storage import VectorStore
from second_brain.retrieval.search import SearchValidationError, search_transcripts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(
    request: Request,
    provider: Annotated[EmbeddingProvider, Depends(get_embedding_provider)],
    store: Annotated[VectorStore, Depends(get_vector_store)],
) -> SearchResponse | JSONResponse:
    """Return the top matches for ``{"query": "..."}``.

    A missing body, invalid JSON or a non-string query is a 400.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    query = body.get("query") if isinstance(body, dict) else None

    try:
        results = await search_transcripts(query, provider, store)
    except SearchValidationError as exc:
        return error_response(400, str(exc))
    except Exception as exc:
        logger.exception("Search error")
        return error_response(500, "Search failed", str(exc) or "Unknown error")

    return SearchResponse(
        query=query,
        results=[SearchResult.model_validate(r) for r in results],
        total_results=len(results),
    )
