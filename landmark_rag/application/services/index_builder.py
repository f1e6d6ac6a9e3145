"""
Index builder.

Fetches each source article, splits it into sections and chunks, embeds
the chunks in one batch per article and upserts them into the vector store.
Works with any VectorStore implementation.

Dependencies: landmark_rag.core.chunking, landmark_rag.boundary
System role: Indexing pipeline orchestration
"""

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from landmark_rag.boundary.llm.embedding_generator import EmbeddingGenerator
from landmark_rag.boundary.vdb.vector_store import VectorStore
from landmark_rag.core.chunking import (
    DEFAULT_SECTION,
    ArticleSplitter,
    split_into_sections,
    to_url_safe_id,
)
from landmark_rag.models.chunk import Document, DocumentChunk

logger = logging.getLogger(__name__)


class DocumentSource(Protocol):
    async def get_page(self, title: str, full: bool = True) -> Document: ...


def unique_section_key(heading: str, used: set[str]) -> str:
    """
    Section part of chunk ids, suffixed with an occurrence number when the
    heading slug was already used in the same document ("History 2").

    Args:
        heading: Section heading
        used: Slugs already taken in this document; updated in place

    Returns:
        str: The heading itself, or the heading with an occurrence suffix
    """
    key = heading.strip() or DEFAULT_SECTION
    candidate = key
    occurrence = 1
    while to_url_safe_id(candidate) in used:
        occurrence += 1
        candidate = f"{key} {occurrence}"
    used.add(to_url_safe_id(candidate))
    return candidate


@dataclass(frozen=True)
class IndexBuildResult:
    """Counts reported after a build."""

    documents: int
    chunks: int


class IndexBuilder:
    """Builds the vector index from a document source."""

    def __init__(
        self,
        source: DocumentSource,
        splitter: ArticleSplitter,
        embedding_generator: EmbeddingGenerator,
        vector_store: VectorStore,
        max_chunks_per_document: int = 25,
    ) -> None:
        """
        Initialize index builder.

        Args:
            source: Document source (Wikipedia)
            splitter: Chunker
            embedding_generator: Embedding capability
            vector_store: Target store; its dimensions are requested from the embedder
            max_chunks_per_document: Chunks kept per article, in document order
        """
        self._source = source
        self._splitter = splitter
        self._embedding_generator = embedding_generator
        self._vector_store = vector_store
        self._max_chunks_per_document = max_chunks_per_document

    def chunk_document(self, document: Document) -> list[DocumentChunk]:
        """
        Split a fetched document into chunks across all its sections.

        Args:
            document: Source article

        Returns:
            list[DocumentChunk]: At most max_chunks_per_document chunks
        """
        chunks: list[DocumentChunk] = []
        used_keys: set[str] = set()
        for section in split_into_sections(document.content):
            chunks.extend(
                self._splitter.chunk(
                    document.title,
                    section.content,
                    source_url=document.page_url,
                    section=section.title,
                    section_key=unique_section_key(section.title, used_keys),
                )
            )
        return chunks[: self._max_chunks_per_document]

    async def index_document(self, document: Document) -> int:
        """
        Chunk, embed and store one document.

        Args:
            document: Source article

        Returns:
            int: Number of chunks stored

        Raises:
            UpstreamGenerationError: If embedding fails
            ConfigurationError: On vector dimension mismatch
            StoreError: If a write fails
        """
        chunks = self.chunk_document(document)
        if not chunks:
            logger.warning(f"{__name__}:index_document - No chunks for '{document.title}'")
            return 0

        vectors = await self._embedding_generator.generate_embeddings(
            [chunk.embedding_text() for chunk in chunks],
            self._vector_store.dimensions,
        )
        for chunk, vector in zip(chunks, vectors):
            await self._vector_store.upsert(chunk, vector)

        logger.info(
            f"{__name__}:index_document - Indexed {len(chunks)} chunks for '{document.title}'",
            extra={"document_id": document.id},
        )
        return len(chunks)

    async def build_index(self, titles: Sequence[str]) -> IndexBuildResult:
        """
        Index every title in order.

        The first failure aborts the build; chunks already stored stay in
        place and a re-run overwrites them by id.

        Args:
            titles: Source document titles

        Returns:
            IndexBuildResult: Documents and chunks indexed

        Raises:
            DocumentSourceError: If an article cannot be fetched
            UpstreamGenerationError, ConfigurationError, StoreError: From indexing
        """
        logger.info(f"{__name__}:build_index - START titles={len(titles)}")

        documents = 0
        chunks = 0
        for title in titles:
            document = await self._source.get_page(title, full=True)
            chunks += await self.index_document(document)
            documents += 1

        logger.info(
            f"{__name__}:build_index - END",
            extra={"documents": documents, "chunks": chunks},
        )
        return IndexBuildResult(documents=documents, chunks=chunks)
