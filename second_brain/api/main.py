import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from second_brain.api.errors import unhandled_exception_handler
from second_brain.api.routes.ingest import router as ingest_router
from second_brain.api.routes.search import router as search_router
from second_brain.api.routes.status import router as status_router
from second_brain.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Second Brain API",
    description="Semantic search over personal transcripts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(ingest_router)
app.include_router(search_router)
app.include_router(status_router)


@app.get("/")
async def root() -> dict[str, object]:
    return {
        "message": "Second Brain API is running!",
        "endpoints": {
            "ingest": "POST /api/ingest",
            "search": "POST /api/search",
            "status": "GET /api/status",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("second_brain.api.main:app", host=settings.api_host, port=settings.api_port)
