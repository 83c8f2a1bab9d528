"""Database session management and schema initialization."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session

from podsearch.config.settings import settings
from podsearch.logger import get_logger


logger = get_logger(__name__)

# Sized so a full phrase fan-out can hold one connection per worker.
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=settings.retrieval_max_workers,
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    :return: Database session generator
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_schema() -> None:
    """
    Create the pgvector extension, the episode/transcript tables and the
    match_transcripts similarity function.

    Vector dimension is read from settings. It must match the embedding provider's output.
    """
    dim = settings.embedding_dimension

    with get_session() as session:
        session.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        session.execute(
            text(
                """
            CREATE TABLE IF NOT EXISTS episodes (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL
            )
        """
            )
        )
        session.execute(
            text(
                f"""
            CREATE TABLE IF NOT EXISTS transcripts (
                id SERIAL PRIMARY KEY,
                episode_id TEXT NOT NULL REFERENCES episodes(id),
                content TEXT NOT NULL,
                start_timestamp FLOAT NOT NULL DEFAULT 0,
                url TEXT NOT NULL DEFAULT '',
                embedding vector({dim})
            )
        """
            )
        )
        session.execute(
            text(
                f"""
            CREATE OR REPLACE FUNCTION match_transcripts(
                query_embedding vector({dim}),
                match_threshold FLOAT,
                match_count INT
            )
            RETURNS TABLE (
                id INT,
                episode_id TEXT,
                content TEXT,
                start_timestamp FLOAT,
                url TEXT,
                similarity FLOAT
            )
            LANGUAGE sql STABLE
            AS $$
                SELECT
                    t.id,
                    t.episode_id,
                    t.content,
                    t.start_timestamp,
                    t.url,
                    1 - (t.embedding <=> query_embedding) AS similarity
                FROM transcripts t
                WHERE 1 - (t.embedding <=> query_embedding) > match_threshold
                ORDER BY t.embedding <=> query_embedding
                LIMIT match_count
            $$
        """
            )
        )

    logger.info("schema_initialized", embedding_dimension=dim)


def check_connection() -> bool:
    try:
        with get_session() as session:
            session.execute(text("SELECT 1"))
            session.execute(text("SELECT vector '[1,2,3]'"))
        logger.info("database_ok")
        return True
    except Exception as e:
        logger.error("database_failed", error=str(e))
        return False
