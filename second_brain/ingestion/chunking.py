"""Sentence-accumulating chunker for episode transcripts."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from second_brain.ingestion.models import Chunk, Episode

logger = logging.getLogger(__name__)

SENTENCE_TERMINATORS = re.compile(r"[.!?]+")

DEFAULT_MAX_CHARS = 500

WarningCallback = Callable[[str], None]


def _warn(message: str, on_warning: WarningCallback | None) -> None:
    logger.warning(message)
    if on_warning is not None:
        on_warning(message)


def split_transcript_into_chunks(
    transcript: Any,
    episode_title: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    on_warning: WarningCallback | None = None,
    speaker: str | None = None,
    timestamp: str | None = None,
) -> list[Chunk]:
    """Split a transcript into chunks of whole sentences.

    Sentences are accumulated greedily until adding the next one would push
    the chunk past *max_chars*. The check only runs when the accumulator
    already holds text, so a single sentence longer than *max_chars* becomes
    its own oversized chunk. Every sentence is re-terminated with ``". "``.

    Args:
        transcript: Raw transcript text. Anything that is not a non-blank
            string yields no chunks.
        episode_title: Used verbatim to build ``"<title>-chunk-<n>"`` ids.
        max_chars: Soft character budget per chunk.
        on_warning: Optional diagnostic callback for invalid input.
        speaker: Copied onto every chunk when set.
        timestamp: Copied onto every chunk when set.

    Returns:
        Chunks in transcript order, numbered from 0.
    """
    if not transcript or not isinstance(transcript, str):
        _warn("Invalid transcript provided", on_warning)
        return []

    sentences = [s for s in SENTENCE_TERMINATORS.split(transcript) if s.strip()]

    chunks: list[Chunk] = []
    chunk_content = ""
    chunk_count = 0

    def make_chunk(index: int, content: str) -> Chunk:
        return Chunk(
            chunk_id=f"{episode_title}-chunk-{index}",
            episode_title=episode_title,
            content=content,
            speaker=speaker,
            timestamp=timestamp,
        )

    for sentence in sentences:
        trimmed = sentence.strip()
        if chunk_content and len(chunk_content) + len(trimmed) > max_chars:
            chunks.append(make_chunk(chunk_count, chunk_content.strip()))
            chunk_count += 1
            chunk_content = ""
        chunk_content += trimmed + ". "

    if chunk_content.strip():
        chunks.append(make_chunk(chunk_count, chunk_content.strip()))

    return chunks


def chunk_episodes(
    episodes: Iterable[Episode],
    max_chars: int = DEFAULT_MAX_CHARS,
    on_warning: WarningCallback | None = None,
) -> list[Chunk]:
    """Chunk every episode and concatenate the results in episode order.

    Episodes without a transcript are skipped with a diagnostic.
    """
    chunks: list[Chunk] = []
    for episode_index, episode in enumerate(episodes):
        if not episode.transcript:
            _warn(f"Episode {episode_index} has no transcript", on_warning)
            continue
        chunks.extend(
            split_transcript_into_chunks(
                episode.transcript,
                episode.title,
                max_chars=max_chars,
                on_warning=on_warning,
                speaker=episode.speaker,
                timestamp=episode.timestamp,
            )
        )
    return chunks
