"""HTTP client wrapper for the Second Brain FastAPI backend."""

from __future__ import annotations

import os

import httpx
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:5001")

BACKEND_HINT = "Make sure the backend server is running."


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.HTTPError:
        return False


def ingest_episodes(episodes: list[dict[str, str]]) -> dict:  # type: ignore[type-arg]
    """Send episodes to the ingestion endpoint."""
    try:
        r = httpx.post(f"{API_URL}/api/ingest", json={"episodes": episodes}, timeout=300.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Failed to ingest transcripts. {BACKEND_HINT} ({e})")
        return {}


def search_transcripts(query: str) -> dict:  # type: ignore[type-arg]
    """Send a query to the search endpoint."""
    try:
        r = httpx.post(f"{API_URL}/api/search", json={"query": query}, timeout=60.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Failed to search. {BACKEND_HINT} ({e})")
        return {}


def get_status() -> dict:  # type: ignore[type-arg]
    """Fetch vector store statistics."""
    try:
        r = httpx.get(f"{API_URL}/api/status", timeout=10.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError:
        return {}
