"""
Parallel retriever.

Every phrase gets its own embedding + match_transcripts call on a thread
pool. Results come back in phrase order; a phrase that fails contributes an
empty list and never takes the others down with it.
"""

from concurrent.futures import ThreadPoolExecutor

from podsearch.config.settings import settings
from podsearch.db.models import TranscriptChunk
from podsearch.db.store import TranscriptStore
from podsearch.services.embedding import BaseEmbeddingService, create_embedding_service
from podsearch.logger import get_logger

logger = get_logger(__name__)


class ParallelRetriever:
    def __init__(
        self,
        embedding_service: BaseEmbeddingService | None = None,
        store: TranscriptStore | None = None,
    ):
        self.embedding_service = embedding_service or create_embedding_service()
        self.store = store or TranscriptStore()
        self.match_threshold = settings.match_threshold
        self.results_per_phrase = settings.results_per_phrase
        self.max_workers = settings.retrieval_max_workers

    def retrieve_all(self, phrases: list[str]) -> list[list[TranscriptChunk]]:
        """Fan out over phrases, wait for every one, return per-phrase results."""
        if not phrases:
            return []

        workers = max(1, min(self.max_workers, len(phrases)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.retrieve, phrase) for phrase in phrases]
            results = [future.result() for future in futures]

        logger.info(
            "parallel_retrieval",
            phrases=len(phrases),
            hits=sum(len(r) for r in results),
            empty_phrases=sum(1 for r in results if not r),
        )
        return results

    def retrieve(self, phrase: str) -> list[TranscriptChunk]:
        """Embed one phrase and match it. Failures are logged and yield []."""
        try:
            embedding = self.embedding_service.embed(phrase)
            chunks = self.store.match(
                embedding,
                match_threshold=self.match_threshold,
                match_count=self.results_per_phrase,
            )
        except Exception as e:
            logger.warning("phrase_retrieval_failed", phrase=phrase, error=str(e))
            return []

        return [chunk.model_copy(update={"matched_phrase": phrase}) for chunk in chunks]
