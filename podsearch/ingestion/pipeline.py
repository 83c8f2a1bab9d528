"""Ingestion pipeline: transcript CSV -> embeddings -> Postgres."""

import re
from pathlib import Path

import pandas as pd

from podsearch.db.connection import get_session
from podsearch.db.repository import EpisodeRepository, TranscriptRepository
from podsearch.db.models import EpisodeCreate, TranscriptCreate
from podsearch.services.embedding import BaseEmbeddingService, create_embedding_service
from podsearch.logger import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("episode_id", "content")


class IngestionPipeline:
    """
    Loads transcript chunks from CSV, embeds their content and stores
    episodes and chunks in Postgres.

    Expected columns: episode_id, content, and optionally episode_title,
    start_timestamp (seconds) and url.
    """

    def __init__(self, embedding_service: BaseEmbeddingService | None = None):
        self.embedding_service = embedding_service or create_embedding_service()

    def ingest_csv(self, csv_path: str | Path) -> int:
        """Load CSV, embed, store. Skips if already ingested."""
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV not found: {csv_path}")

        df = self.load_frame(csv_path)
        logger.info("csv_loaded", chunks=len(df), episodes=df["episode_id"].nunique())

        with get_session() as session:
            existing = TranscriptRepository(session).count()
            if existing > 0:
                logger.info("already_ingested", count=existing)
                return existing

        embeddings = self.embedding_service.embed_batch(df["content"].tolist())

        episodes = [
            EpisodeCreate(id=episode_id, title=title)
            for episode_id, title in (
                df.groupby("episode_id", sort=False)["episode_title"].first().items()
            )
        ]
        chunks = [
            TranscriptCreate(
                episode_id=row.episode_id,
                content=row.content,
                start_timestamp=row.start_timestamp,
                url=row.url,
                embedding=embedding,
            )
            for row, embedding in zip(df.itertuples(index=False), embeddings)
        ]

        with get_session() as session:
            episode_repo = EpisodeRepository(session)
            for episode in episodes:
                episode_repo.upsert(episode)
            TranscriptRepository(session).insert_batch(chunks)

        logger.info("ingestion_complete", episodes=len(episodes), chunks=len(chunks))
        return len(chunks)

    @classmethod
    def load_frame(cls, csv_path: Path) -> pd.DataFrame:
        df = pd.read_csv(csv_path, dtype={"episode_id": str})
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"CSV is missing columns: {', '.join(missing)}")

        df = df.dropna(subset=list(REQUIRED_COLUMNS)).copy()
        df["content"] = df["content"].map(cls._clean_text)
        df = df[df["content"] != ""].copy()

        if "episode_title" not in df.columns:
            df["episode_title"] = df["episode_id"]
        df["episode_title"] = df["episode_title"].fillna(df["episode_id"]).astype(str)
        if "start_timestamp" not in df.columns:
            df["start_timestamp"] = 0.0
        df["start_timestamp"] = df["start_timestamp"].fillna(0.0).astype(float)
        if "url" not in df.columns:
            df["url"] = ""
        df["url"] = df["url"].fillna("").astype(str)

        return df[["episode_id", "episode_title", "content", "start_timestamp", "url"]]

    @staticmethod
    def _clean_text(text: str) -> str:
        text = str(text).strip().strip('"').strip()
        text = re.sub(r"\[\d{1,2}:\d{2}(?::\d{2})?\]", "", text)  # [12:34] inline timestamps
        text = " ".join(text.split())
        return text
