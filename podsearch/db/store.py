"""
Session-per-call facade over the repositories.

The search engine only needs two remote operations: a nearest-neighbour
match and a batch title lookup. Each call opens its own session so the
retriever's worker threads never share one.
"""

from podsearch.db.connection import get_session
from podsearch.db.models import TranscriptChunk
from podsearch.db.repository import EpisodeRepository, TranscriptRepository


class TranscriptStore:
    def match(
        self, embedding: list[float], match_threshold: float, match_count: int
    ) -> list[TranscriptChunk]:
        with get_session() as session:
            return TranscriptRepository(session).match(
                embedding, threshold=match_threshold, limit=match_count
            )

    def lookup_titles(self, episode_ids: set[str]) -> dict[str, str]:
        with get_session() as session:
            return EpisodeRepository(session).lookup_titles(episode_ids)
