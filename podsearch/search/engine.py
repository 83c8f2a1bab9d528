"""
Search engine.

Pipeline:
    1. Classify the query intent (LLM)
    2. Pick the expansion strategy for that intent
    3. Generate search phrases (LLM) and sanitize them
    4. Embed + match every phrase in parallel
    5. Fold, boost, sort and title the matches

Classification and expansion failures fail the request. Retrieval and
title lookup failures degrade the result instead.
"""

from podsearch.db.store import TranscriptStore
from podsearch.search.expansion import PhraseGenerator, sanitize_phrases
from podsearch.search.intent import IntentClassifier
from podsearch.search.models import SearchResponse, SearchStage
from podsearch.search.prompts import select_prompt
from podsearch.search.ranking import ResultAggregator
from podsearch.search.retriever import ParallelRetriever
from podsearch.services.embedding import BaseEmbeddingService
from podsearch.services.llm import LLMClient
from podsearch.logger import get_logger

logger = get_logger(__name__)


class SearchEngine:
    def __init__(
        self,
        classifier: IntentClassifier | None = None,
        generator: PhraseGenerator | None = None,
        retriever: ParallelRetriever | None = None,
        aggregator: ResultAggregator | None = None,
    ):
        self.classifier = classifier or IntentClassifier()
        self.generator = generator or PhraseGenerator()
        self.retriever = retriever or ParallelRetriever()
        self.aggregator = aggregator or ResultAggregator()

    @classmethod
    def build(
        cls,
        llm_client: LLMClient | None = None,
        embedding_service: BaseEmbeddingService | None = None,
        store: TranscriptStore | None = None,
    ) -> "SearchEngine":
        """Wire every stage to one shared LLM client and store."""
        llm = llm_client or LLMClient()
        store = store or TranscriptStore()
        return cls(
            classifier=IntentClassifier(llm),
            generator=PhraseGenerator(llm),
            retriever=ParallelRetriever(embedding_service, store),
            aggregator=ResultAggregator(store),
        )

    def search(self, query: str) -> SearchResponse:
        self._stage(SearchStage.RECEIVED, query=query[:100])
        stage = SearchStage.CLASSIFYING
        try:
            self._stage(stage)
            intent = self.classifier.classify(query)
            template = select_prompt(intent)

            stage = SearchStage.EXPANDING
            self._stage(stage, intent=intent.value)
            raw = self.generator.expand(query, template)
            phrases = sanitize_phrases(raw)
            logger.info("phrases_generated", intent=intent.value, count=len(phrases))
        except Exception as e:
            logger.error(
                "search_stage",
                stage=SearchStage.ERROR.value,
                failed_stage=stage.value,
                error=str(e),
            )
            raise

        self._stage(SearchStage.RETRIEVING, phrases=len(phrases))
        phrase_results = self.retriever.retrieve_all(phrases)

        self._stage(SearchStage.AGGREGATING)
        results, total_found = self.aggregator.aggregate(phrase_results)

        self._stage(SearchStage.COMPLETE, returned=len(results), total_found=total_found)
        return SearchResponse(
            generated_phrases=phrases,
            results=results,
            total_found=total_found,
        )

    @staticmethod
    def _stage(stage: SearchStage, **context) -> None:
        logger.debug("search_stage", stage=stage.value, **context)
