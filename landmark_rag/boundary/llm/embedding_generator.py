"""
Embedding capability.

Gemini embeddings are requested at the store dimension on every call
(gemini-embedding-001 is reducible from 3072 down to 512 and below).

Dependencies: langchain_google_genai, python-dotenv, fastapi (threadpool),
    landmark_rag.core.exceptions
System role: Text-to-vector conversion for indexing and querying
"""

import logging
from typing import Protocol, Sequence

from dotenv import load_dotenv
from fastapi.concurrency import run_in_threadpool
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from landmark_rag.core.exceptions import (
    ConfigurationError,
    LandmarkRagException,
    UpstreamGenerationError,
)

load_dotenv()
logger = logging.getLogger(__name__)


class EmbeddingGenerator(Protocol):
    """Batch text embedding with a requested output dimension."""

    async def generate_embeddings(
        self,
        texts: Sequence[str],
        dimensions: int,
    ) -> list[list[float]]: ...


def create_embeddings(model: str = "models/gemini-embedding-001") -> GoogleGenerativeAIEmbeddings:
    """
    Build the Gemini embeddings client.

    Args:
        model: Google embedding model ID

    Returns:
        GoogleGenerativeAIEmbeddings: Client reading GOOGLE_API_KEY from the environment
    """
    return GoogleGenerativeAIEmbeddings(model=model)


class GeminiEmbeddingGenerator:
    """EmbeddingGenerator backed by Gemini embeddings."""

    def __init__(self, embeddings: GoogleGenerativeAIEmbeddings) -> None:
        self._embeddings = embeddings

    async def generate_embeddings(
        self,
        texts: Sequence[str],
        dimensions: int,
    ) -> list[list[float]]:
        """
        Embed texts in one provider batch.

        Args:
            texts: Texts to embed
            dimensions: Required vector length

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            ConfigurationError: If the provider returns vectors of another length
            UpstreamGenerationError: If the provider call fails
        """
        if not texts:
            return []

        try:
            vectors = await run_in_threadpool(
                self._embeddings.embed_documents,
                list(texts),
                output_dimensionality=dimensions,
            )
        except LandmarkRagException:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:generate_embeddings - {type(e).__name__}: {e}",
                extra={"batch_size": len(texts)},
            )
            raise UpstreamGenerationError(
                "Embedding provider call failed",
                capability="embedding",
                details={"batch_size": len(texts), "error": str(e)},
            ) from e

        if len(vectors) != len(texts):
            raise UpstreamGenerationError(
                "Embedding provider returned a different number of vectors",
                capability="embedding",
                details={"expected": len(texts), "received": len(vectors)},
            )

        for vector in vectors:
            if len(vector) != dimensions:
                raise ConfigurationError(
                    f"Embedding has {len(vector)} dimensions, expected {dimensions}",
                    setting="VECTOR_STORE_DIMENSIONS",
                )

        logger.info(
            f"{__name__}:generate_embeddings - Embedded {len(texts)} texts",
            extra={"dimensions": dimensions},
        )
        return [list(vector) for vector in vectors]

    async def embed_query(self, text: str, dimensions: int) -> list[float]:
        """Embed a single query text."""
        return (await self.generate_embeddings([text], dimensions))[0]
