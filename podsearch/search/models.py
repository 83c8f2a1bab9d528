"""Search domain models."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from podsearch.db.models import TranscriptChunk


class Intent(str, Enum):
    CURATION = "CURATION"
    FACT_CHECK = "FACT_CHECK"
    CONTRARIAN = "CONTRARIAN"
    ADVICE = "ADVICE"
    GENERAL = "GENERAL"


class SearchStage(str, Enum):
    RECEIVED = "RECEIVED"
    CLASSIFYING = "CLASSIFYING"
    EXPANDING = "EXPANDING"
    RETRIEVING = "RETRIEVING"
    AGGREGATING = "AGGREGATING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


@dataclass
class AggregatedMatch:
    """
    Running state for one chunk id while phrase results are folded in.

    count and total_similarity are canonical; avg_similarity is derived.
    chunk is the occurrence with the highest similarity seen so far.
    """

    chunk: TranscriptChunk
    count: int = 1
    max_similarity: float = 0.0
    total_similarity: float = 0.0
    phrases: list[str] = field(default_factory=list)

    @classmethod
    def first(cls, chunk: TranscriptChunk) -> "AggregatedMatch":
        return cls(
            chunk=chunk,
            count=1,
            max_similarity=chunk.similarity,
            total_similarity=chunk.similarity,
            phrases=[chunk.matched_phrase or ""],
        )

    @property
    def avg_similarity(self) -> float:
        return self.total_similarity / self.count

    def add(self, chunk: TranscriptChunk) -> None:
        self.count += 1
        self.total_similarity += chunk.similarity
        self.phrases.append(chunk.matched_phrase or "")

        # Strictly greater: ties keep the earlier snapshot.
        if chunk.similarity > self.max_similarity:
            self.max_similarity = chunk.similarity
            self.chunk = chunk


class ScoredResult(BaseModel):
    """Final ranked row. similarity holds the boosted score."""

    id: int
    episode_id: str
    content: str
    start_timestamp: float
    url: str
    similarity: float
    match_count: int = Field(ge=1)
    matched_phrase: str
    episode_title: str

    model_config = {"frozen": True}


class SearchResponse(BaseModel):
    generated_phrases: list[str]
    results: list[ScoredResult]
    total_found: int = Field(ge=0)
