"""
Retrieval service.

Query-time orchestration: embed the query, search the vector store and
optionally widen recall with HYDE (fused with RRF) or diversify the result
with MMR.

Dependencies: landmark_rag.core.retrieval, landmark_rag.boundary
System role: Chunk retrieval for search, RAG answers and the agent tool
"""

import logging

from landmark_rag.boundary.llm.embedding_generator import EmbeddingGenerator
from landmark_rag.boundary.vdb.vector_store import VectorStore
from landmark_rag.core.agent.prompts import HYDE_PROMPT
from landmark_rag.core.retrieval import (
    HydeExpander,
    cosine_similarity,
    maximal_marginal_relevance,
    reciprocal_rank_fusion,
)
from landmark_rag.models.search import VectorSearchResult

logger = logging.getLogger(__name__)

DATABASE_SEARCH_K = 5


class RetrievalService:
    """Finds the chunks most relevant to a query."""

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_generator: EmbeddingGenerator,
        hyde_expander: HydeExpander | None = None,
        use_hyde: bool = False,
        rrf_k: int = 60,
        mmr_lambda: float = 0.7,
        fetch_k: int = 20,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            vector_store: Store to search
            embedding_generator: Embedding capability
            hyde_expander: HYDE generator; fused search falls back to the raw
                query list when None
            use_hyde: Whether the agent tool uses fused HYDE search
            rrf_k: RRF rank damping constant
            mmr_lambda: MMR relevance/diversity balance
            fetch_k: Candidate pool size for fusion and MMR
        """
        self._vector_store = vector_store
        self._embedding_generator = embedding_generator
        self._hyde_expander = hyde_expander
        self._use_hyde = use_hyde
        self._rrf_k = rrf_k
        self._mmr_lambda = mmr_lambda
        self._fetch_k = fetch_k

    async def _search_text(self, text: str, k: int) -> list[VectorSearchResult]:
        vectors = await self._embedding_generator.generate_embeddings(
            [text], self._vector_store.dimensions
        )
        return await self._vector_store.search(vectors[0], k)

    async def find_top_k_chunks(self, query: str, k: int) -> list[VectorSearchResult]:
        """
        Plain vector search.

        Args:
            query: Query text
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Best-first results; empty for a blank query
        """
        if not query.strip() or k <= 0:
            return []
        return await self._search_text(query, k)

    async def find_fused_chunks(
        self,
        query: str,
        k: int,
        hyde_prompt: str | None = None,
    ) -> list[VectorSearchResult]:
        """
        Search with the raw query and a HYDE passage, fused with RRF.

        When HYDE yields nothing the raw-query ranking is used alone.

        Args:
            query: Query text
            k: Maximum number of results
            hyde_prompt: HYDE template (default prompt when None)

        Returns:
            list[VectorSearchResult]: Results carrying fused RRF scores
        """
        if not query.strip() or k <= 0:
            return []

        pool = max(k, self._fetch_k)
        ranked_lists = [await self._search_text(query, pool)]

        if self._hyde_expander is not None:
            hypothesis = await self._hyde_expander.expand(query, hyde_prompt or HYDE_PROMPT)
            if hypothesis:
                ranked_lists.append(await self._search_text(hypothesis, pool))

        chunks = {result.chunk.id: result.chunk for results in ranked_lists for result in results}
        fused = reciprocal_rank_fusion(
            [[result.hit for result in results] for results in ranked_lists],
            top_k=k,
            k=self._rrf_k,
        )

        logger.info(
            f"{__name__}:find_fused_chunks - Fused {len(ranked_lists)} rankings",
            extra={"candidates": len(chunks), "returned": len(fused)},
        )
        return [VectorSearchResult(chunk=chunks[hit.id], score=hit.score) for hit in fused]

    async def find_diverse_chunks(self, query: str, k: int) -> list[VectorSearchResult]:
        """
        Search a wider pool and re-rank it with MMR.

        Pairwise similarity is the cosine of the stored chunk vectors.

        Args:
            query: Query text
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Selected results with their original scores
        """
        if not query.strip() or k <= 0:
            return []

        candidates = await self._search_text(query, max(k, self._fetch_k))
        if not candidates:
            return []

        vectors = await self._vector_store.get_vectors([c.chunk.id for c in candidates])

        def similarity(first: str, second: str) -> float:
            if first not in vectors or second not in vectors:
                return 0.0
            return cosine_similarity(vectors[first], vectors[second])

        selected = maximal_marginal_relevance(
            [candidate.hit for candidate in candidates],
            similarity,
            lambda_mult=self._mmr_lambda,
            top_k=k,
        )
        by_id = {candidate.chunk.id: candidate for candidate in candidates}
        return [by_id[hit.id] for hit in selected]

    async def find_in_database(
        self,
        query: str,
        hyde_prompt: str | None = None,
    ) -> list[VectorSearchResult]:
        """Top-5 search used by the agent tool (fused with HYDE when enabled)."""
        if self._use_hyde:
            return await self.find_fused_chunks(query, DATABASE_SEARCH_K, hyde_prompt)
        return await self.find_top_k_chunks(query, DATABASE_SEARCH_K)

