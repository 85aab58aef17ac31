"""Status endpoint: aggregate statistics from the vector store."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from second_brain.api.dependencies import get_vector_store
from second_brain.api.errors import error_response
from second_brain.api.models import ErrorResponse, StatusResponse
from second_brain.ingestion.storage import VectorStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/api/status",
    response_model=StatusResponse,
    responses={500: {"model": ErrorResponse}},
)
async def status(
    store: Annotated[VectorStore, Depends(get_vector_store)],
) -> StatusResponse | JSONResponse:
    """Return the store's statistics verbatim alongside the total vector count."""
    try:
        stats = await asyncio.to_thread(store.describe_stats)
    except Exception as exc:
        logger.exception("Status error")
        return error_response(500, "Failed to get status", str(exc) or "Unknown error")

    logger.info("Vector store stats: %s", stats)
    return StatusResponse(
        total_vectors=stats.get("totalRecordCount", 0),
        index_stats=stats,
    )
