"""
Embedding service with two providers:

- "openai": OpenAI embeddings API with reduced output dimensions
- "local": sentence-transformers, truncated to the same dimension

Configured via EMBEDDING_PROVIDER in settings (.env overrides).
The transcript store must be built with the same provider and dimension
that the search path uses.
"""

import abc

from openai import OpenAI

from podsearch.config.settings import settings
from podsearch.logger import get_logger

logger = get_logger(__name__)


class BaseEmbeddingService(abc.ABC):
    """Interface that any provider implements."""

    dimension: int

    @abc.abstractmethod
    def embed(self, text: str) -> list[float]: ...

    @abc.abstractmethod
    def embed_batch(self, texts: list[str]) -> list[list[float]]: ...


class OpenAIEmbeddingService(BaseEmbeddingService):
    """Embeddings via the OpenAI API."""

    def __init__(self, model: str | None = None, dimension: int | None = None):
        self.client = OpenAI(
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
        )
        self.model = model or settings.embedding_model
        self.dimension = dimension or settings.embedding_dimension

    def embed(self, text: str) -> list[float]:
        response = self.client.embeddings.create(
            model=self.model, input=text, dimensions=self.dimension
        )
        return response.data[0].embedding

    def embed_batch(self, texts: list[str], batch_size: int = 100) -> list[list[float]]:
        logger.info("embedding_batch_openai", count=len(texts))
        all_embeddings = []
        for i in range(0, len(texts), batch_size):
            batch = texts[i : i + batch_size]
            response = self.client.embeddings.create(
                model=self.model, input=batch, dimensions=self.dimension
            )
            all_embeddings.extend([item.embedding for item in response.data])
        return all_embeddings


class LocalEmbeddingService(BaseEmbeddingService):
    """Embeddings via sentence-transformers."""

    def __init__(self, model_name: str | None = None, dimension: int | None = None):
        # torch is only loaded when the local provider is selected
        from sentence_transformers import SentenceTransformer

        self.model_name = model_name or settings.embedding_model_local
        self.dimension = dimension or settings.embedding_dimension
        logger.info(
            "loading_local_embedding_model",
            model=self.model_name,
            dimension=self.dimension,
        )
        self.model = SentenceTransformer(self.model_name, truncate_dim=self.dimension)

    def embed(self, text: str) -> list[float]:
        return self.model.encode(text, normalize_embeddings=True).tolist()

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        logger.info("embedding_batch_local", count=len(texts))
        return self.model.encode(
            texts,
            normalize_embeddings=True,
            batch_size=32,
            show_progress_bar=True,
        ).tolist()


def create_embedding_service() -> BaseEmbeddingService:
    """Return the configured provider."""
    provider = settings.embedding_provider.lower()

    if provider == "openai":
        return OpenAIEmbeddingService()
    elif provider == "local":
        return LocalEmbeddingService()
    else:
        raise ValueError(
            f"Unknown embedding provider: {provider}. Use 'openai' or 'local'."
        )
