"""Social caption for a transcript clip. Single LLM call, no post-processing."""

from podsearch.captions.prompts import CAPTION_PROMPT
from podsearch.config.settings import settings
from podsearch.services.llm import LLMClient
from podsearch.logger import get_logger

logger = get_logger(__name__)


class CaptionGenerator:
    def __init__(self, llm_client: LLMClient | None = None):
        self.llm = llm_client or LLMClient()
        self.temperature = settings.caption_temperature
        self.max_tokens = settings.caption_max_tokens

    def generate(self, content: str) -> str:
        caption = self.llm.call(
            CAPTION_PROMPT.format(content=content),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.info("caption_generated", content_chars=len(content), caption_chars=len(caption))
        return caption
