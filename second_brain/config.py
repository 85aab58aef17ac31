from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    openai_api_key: str = ""

    # Supabase (pgvector-backed vector store)
    supabase_url: str = ""
    supabase_key: str = ""
    vector_table: str = "transcript_vectors"
    match_function: str = "match_transcript_vectors"
    stats_function: str = "transcript_vector_stats"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 5001
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8501"]
    log_level: str = "INFO"

    # Embeddings
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536

    # Ingestion
    chunk_max_chars: int = 500
    ingest_batch_size: int = 10
    ingest_batch_delay_seconds: float = 1.0
    metadata_content_max_chars: int = 1000

    # Retrieval
    search_top_k: int = 8

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
