"""Second Brain -- Streamlit UI.

Upload transcript files, ingest them, and run semantic search over
everything ingested so far.
"""

from __future__ import annotations

import streamlit as st

from second_brain.ui.api_client import check_health, get_status, ingest_episodes, search_transcripts
from second_brain.ui.episodes import UploadError, episode_from_file, format_score, queue_episode

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Second Brain", layout="wide")

if "episodes" not in st.session_state:
    st.session_state.episodes = []

# ---------------------------------------------------------------------------
# Sidebar -- API status + store statistics
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Second Brain")
    st.markdown("---")

    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
        status = get_status()
        if status:
            st.metric("Stored vectors", status.get("totalVectors", 0))
    else:
        st.markdown(":red_circle: API unreachable")

st.header("Second Brain")
st.write(
    "Instantly search your transcripts and conversations with semantic search. "
    "Your knowledge, always accessible."
)

# ---------------------------------------------------------------------------
# Add content
# ---------------------------------------------------------------------------
with st.expander("Add Content", expanded=not st.session_state.episodes):
    uploaded_files = st.file_uploader(
        "Upload transcript files (.txt, up to 5MB)",
        type=["txt", "md"],
        accept_multiple_files=True,
    )

    if uploaded_files and st.button("Process files"):
        for uploaded in uploaded_files:
            try:
                episode = episode_from_file(uploaded.name, uploaded.getvalue())
            except UploadError as e:
                st.error(f"{uploaded.name}: {e}")
                continue
            if queue_episode(st.session_state.episodes, episode):
                st.success(f'Successfully processed "{uploaded.name}"')
            else:
                st.info(f'"{episode["title"]}" is already queued')

    episodes = st.session_state.episodes
    if episodes:
        plural = "s" if len(episodes) != 1 else ""
        st.info(f"Ready to ingest: {len(episodes)} episode{plural} processed")

        if st.button(f"Ingest {len(episodes)} Episode{plural}", disabled=not api_healthy):
            with st.spinner(f"Ingesting {len(episodes)} episode{plural}..."):
                result = ingest_episodes(episodes)
            if result:
                st.success(result.get("message", "Ingestion complete."))
                st.session_state.episodes = []
            # Error case is already handled inside ingest_episodes via st.error

# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
query = st.text_input("Search your transcripts", placeholder="What did we say about...")

if st.button("Search", disabled=not query.strip()):
    if not api_healthy:
        st.error("Failed to search. Make sure the backend server is running.")
    else:
        with st.spinner("Searching..."):
            response = search_transcripts(query.strip())
        if response:
            results = response.get("results", [])
            if not results:
                st.info("No matching transcript chunks found.")
            for i, result in enumerate(results, 1):
                with st.expander(
                    f"{i}. {result.get('episodeTitle', 'Unknown episode')} "
                    f"-- {format_score(result.get('score', 0.0))}"
                ):
                    if "speaker" in result:
                        st.write(f"**Speaker:** {result['speaker']}")
                    if "timestamp" in result:
                        st.write(f"**Timestamp:** {result['timestamp']}")
                    st.markdown("---")
                    st.write(result.get("content", ""))
