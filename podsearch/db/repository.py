"""Repository layer: all SQL operations isolated here"""

from sqlalchemy import text
from sqlalchemy.orm import Session

from podsearch.db.models import EpisodeCreate, TranscriptChunk, TranscriptCreate
from podsearch.logger import get_logger

logger = get_logger(__name__)


class TranscriptRepository:
    """
    Repository for transcript chunks and the similarity search over them.
    """

    def __init__(self, session: Session):
        self.session = session

    def insert(self, chunk: TranscriptCreate) -> int:
        result = self.session.execute(
            text(
                "INSERT INTO transcripts (episode_id, content, start_timestamp, url, embedding) "
                "VALUES (:episode_id, :content, :start_timestamp, :url, :embedding) RETURNING id"
            ),
            {
                "episode_id": chunk.episode_id,
                "content": chunk.content,
                "start_timestamp": chunk.start_timestamp,
                "url": chunk.url,
                "embedding": str(chunk.embedding),
            },
        )
        return result.scalar_one()

    def insert_batch(self, chunks: list[TranscriptCreate]) -> list[int]:
        ids = [self.insert(c) for c in chunks]
        self.session.flush()
        logger.info("batch_inserted", count=len(ids))
        return ids

    def count(self) -> int:
        return self.session.execute(text("SELECT COUNT(*) FROM transcripts")).scalar_one()

    def match(
        self, embedding: list[float], threshold: float, limit: int
    ) -> list[TranscriptChunk]:
        """Cosine similarity via the match_transcripts function."""
        result = self.session.execute(
            text(
                "SELECT id, episode_id, content, start_timestamp, url, similarity "
                "FROM match_transcripts(CAST(:embedding AS vector), :threshold, :limit)"
            ),
            {"embedding": str(embedding), "threshold": threshold, "limit": limit},
        )
        return [
            TranscriptChunk(
                id=r.id,
                episode_id=r.episode_id,
                content=r.content,
                start_timestamp=r.start_timestamp,
                url=r.url,
                similarity=r.similarity,
            )
            for r in result.fetchall()
        ]


class EpisodeRepository:
    def __init__(self, session: Session):
        self.session = session

    def upsert(self, episode: EpisodeCreate) -> None:
        self.session.execute(
            text(
                "INSERT INTO episodes (id, title) VALUES (:id, :title) "
                "ON CONFLICT (id) DO UPDATE SET title = EXCLUDED.title"
            ),
            episode.model_dump(),
        )

    def lookup_titles(self, episode_ids: set[str]) -> dict[str, str]:
        """Titles for the given episode ids. Unknown ids are absent from the mapping."""
        if not episode_ids:
            return {}
        result = self.session.execute(
            text("SELECT id, title FROM episodes WHERE id = ANY(:ids)"),
            {"ids": list(episode_ids)},
        )
        return {r.id: r.title for r in result.fetchall()}
