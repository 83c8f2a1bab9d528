"""Database domain models."""

from pydantic import BaseModel, Field


class EpisodeCreate(BaseModel):
    """Payload for inserting or renaming an episode."""

    id: str = Field(..., min_length=1)
    title: str


class TranscriptCreate(BaseModel):
    """Payload for inserting a new transcript chunk."""

    episode_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    start_timestamp: float = Field(default=0.0, ge=0.0)
    url: str = ""
    embedding: list[float] = Field(..., min_length=1)


class TranscriptChunk(BaseModel):
    """
    A transcript chunk returned by match_transcripts.

    similarity is specific to the phrase that retrieved the chunk, which is
    recorded in matched_phrase once the retriever tags it.
    """

    id: int
    episode_id: str
    content: str
    start_timestamp: float = 0.0
    url: str = ""
    similarity: float = 0.0
    matched_phrase: str | None = None

    model_config = {"frozen": True}
