"""Turn uploaded transcript files into episode payloads."""

from __future__ import annotations

import re

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

_TITLE_SUFFIX = re.compile(r"\.(txt|md)$", re.IGNORECASE)


class UploadError(ValueError):
    """Raised when an uploaded file cannot become an episode."""


def episode_from_file(filename: str, raw: bytes) -> dict[str, str]:
    """Build ``{"title", "transcript"}`` from an uploaded text file.

    The title is the file name without a ``.txt``/``.md`` suffix.

    Raises:
        UploadError: If the file is too large, not text, or not UTF-8.
    """
    if not filename.lower().endswith((".txt", ".md")):
        raise UploadError("Please upload a text file (.txt)")
    if len(raw) > MAX_UPLOAD_BYTES:
        raise UploadError("File size must be less than 5MB")
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise UploadError("Failed to read file") from exc

    title = _TITLE_SUFFIX.sub("", filename).strip()
    return {"title": title or "Untitled Episode", "transcript": content.strip()}


def format_score(score: float) -> str:
    """Render a similarity score as a percentage, e.g. ``0.8734 -> "87.3%"``."""
    return f"{score * 100:.1f}%"


def queue_episode(queued: list[dict[str, str]], episode: dict[str, str]) -> bool:
    """Append *episode* unless one with the same title is already queued."""
    if any(e["title"] == episode["title"] for e in queued):
        return False
    queued.append(episode)
    return True
