"""
LLM client (OpenAI chat completions).
"""

from openai import OpenAI

from podsearch.config.settings import settings
from podsearch.logger import get_logger

logger = get_logger(__name__)


class LLMClient:
    def __init__(self, model: str | None = None):
        self.client = OpenAI(
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
        )
        self.model = model or settings.llm_model

    def call(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Raw text of the first choice, stripped. Empty string if the model
        returned no content. API errors propagate to the caller.
        """
        messages = self._build_messages(prompt, system)
        kwargs = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            **kwargs,
        )
        if not response.choices:
            logger.warning("llm_empty_choices", model=self.model)
            return ""
        return (response.choices[0].message.content or "").strip()

    @staticmethod
    def _build_messages(prompt: str, system: str | None) -> list[dict]:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages
