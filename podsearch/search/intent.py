"""
Intent classifier.

One low-temperature LLM call decides which expansion strategy a query gets.
Only an exact category name is trusted; anything else falls back to GENERAL.
"""

from podsearch.config.settings import settings
from podsearch.search.models import Intent
from podsearch.search.prompts import INTENT_CLASSIFICATION_PROMPT
from podsearch.services.llm import LLMClient
from podsearch.logger import get_logger

logger = get_logger(__name__)


def parse_intent(reply: str | None) -> Intent:
    """Map a raw model reply onto Intent using its first line only."""
    lines = (reply or "").strip().splitlines()
    label = lines[0].strip().upper() if lines else ""
    try:
        return Intent(label)
    except ValueError:
        return Intent.GENERAL


class IntentClassifier:
    def __init__(self, llm_client: LLMClient | None = None):
        self.llm = llm_client or LLMClient()
        self.temperature = settings.classifier_temperature
        self.max_tokens = settings.classifier_max_tokens

    def classify(self, query: str) -> Intent:
        """Model errors are not caught here; they fail the request."""
        reply = self.llm.call(
            query,
            system=INTENT_CLASSIFICATION_PROMPT,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        intent = parse_intent(reply)

        logger.info("intent_classified", query=query[:100], reply=reply[:50], intent=intent.value)
        return intent
