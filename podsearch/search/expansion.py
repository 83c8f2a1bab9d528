"""
Query expansion: one LLM call turns the query into candidate phrase lines,
then the sanitizer keeps the usable ones.
"""

import re

from podsearch.config.settings import settings
from podsearch.search.exceptions import PhraseGenerationError
from podsearch.search.prompts import (
    EXPANSION_SYSTEM_PREFIX,
    EXPANSION_USER_PROMPT,
    PromptTemplate,
)
from podsearch.services.llm import LLMClient
from podsearch.logger import get_logger

logger = get_logger(__name__)

ENUMERATION_MARKER = re.compile(r"^\d+[.)]\s*")
BULLET_MARKER = re.compile(r"^-\s*")


def clean_phrase_line(line: str) -> str:
    """Strip list markers until none is left, so cleaning a clean line is a no-op."""
    line = line.strip()
    while True:
        cleaned = BULLET_MARKER.sub("", ENUMERATION_MARKER.sub("", line)).strip()
        if cleaned == line:
            return cleaned
        line = cleaned


def sanitize_phrases(
    raw_text: str,
    max_phrases: int | None = None,
    max_length: int | None = None,
    banned_terms: list[str] | None = None,
) -> list[str]:
    """
    Strip numbering/bullets, drop empty, overlong and meta-commentary lines,
    keep the first max_phrases in order.

    Raises PhraseGenerationError if nothing survives.
    """
    max_phrases = max_phrases or settings.max_phrases
    max_length = max_length or settings.max_phrase_length
    if banned_terms is None:
        banned_terms = settings.banned_phrase_terms
    banned = [t.lower() for t in banned_terms]

    phrases: list[str] = []
    for line in raw_text.splitlines():
        phrase = clean_phrase_line(line)
        lowered = phrase.lower()
        if not phrase or len(phrase) > max_length:
            continue
        if any(term in lowered for term in banned):
            continue
        phrases.append(phrase)

    phrases = phrases[:max_phrases]
    if not phrases:
        raise PhraseGenerationError()
    return phrases


class PhraseGenerator:
    def __init__(self, llm_client: LLMClient | None = None):
        self.llm = llm_client or LLMClient()
        self.temperature = settings.expansion_temperature
        self.max_tokens = settings.expansion_max_tokens

    def expand(self, query: str, template: PromptTemplate) -> str:
        """Raw newline-separated phrase candidates from the model."""
        raw = self.llm.call(
            EXPANSION_USER_PROMPT.format(query=query),
            system=EXPANSION_SYSTEM_PREFIX + template.render(),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.debug("expansion_raw", intent=template.intent.value, lines=len(raw.splitlines()))
        return raw
