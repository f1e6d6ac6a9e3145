"""
Test suite for RetrievalService.

Vector store and HYDE expander are mocked; fusion and MMR run for real.

System role: Verification of query-time retrieval orchestration
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from landmark_rag.application.services import RetrievalService
from landmark_rag.core.agent.prompts import HYDE_PROMPT
from landmark_rag.models.search import VectorSearchResult
from tests.conftest import FakeEmbeddingGenerator, make_chunk


def result(sequence: int, score: float) -> VectorSearchResult:
    return VectorSearchResult(chunk=make_chunk(sequence=sequence), score=score)


A, B, C = result(1, 0.9), result(2, 0.85), result(3, 0.5)


@pytest.fixture
def mock_store() -> MagicMock:
    """Provide mock vector store with 4 dimensions."""
    store = MagicMock()
    store.dimensions = 4
    store.search = AsyncMock(return_value=[A, B])
    store.get_vectors = AsyncMock(return_value={})
    return store


@pytest.fixture
def mock_hyde() -> MagicMock:
    """Provide mock HYDE expander."""
    expander = MagicMock()
    expander.expand = AsyncMock(return_value="Hypothetical passage about the tower.")
    return expander


@pytest.fixture
def embedder() -> FakeEmbeddingGenerator:
    return FakeEmbeddingGenerator(dimensions=4)


class TestFindTopKChunks:
    """Test suite for RetrievalService.find_top_k_chunks()."""

    @pytest.mark.asyncio
    async def test_should_embed_query_and_search(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator
    ) -> None:
        """Test the query is embedded at store dimensions and searched with k."""
        # Arrange
        service = RetrievalService(mock_store, embedder)

        # Act
        results = await service.find_top_k_chunks("Eiffel Tower height", 3)

        # Assert
        assert results == [A, B]
        assert embedder.calls == [["Eiffel Tower height"]]
        mock_store.search.assert_awaited_once_with([1.0, 0.0, 0.0, 0.0], 3)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("query", "k"), [("   ", 3), ("Petra", 0)])
    async def test_should_return_empty_for_blank_query_or_k(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator, query: str, k: int
    ) -> None:
        """Test blank queries and non-positive k skip the store."""
        service = RetrievalService(mock_store, embedder)
        assert await service.find_top_k_chunks(query, k) == []
        mock_store.search.assert_not_awaited()


class TestFindFusedChunks:
    """Test suite for RetrievalService.find_fused_chunks()."""

    @pytest.mark.asyncio
    async def test_should_fuse_raw_and_hyde_rankings(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator, mock_hyde: MagicMock
    ) -> None:
        """Test both rankings are searched over the candidate pool and fused with RRF."""
        # Arrange
        mock_store.search.side_effect = [[A, B], [B, C]]
        service = RetrievalService(mock_store, embedder, hyde_expander=mock_hyde, rrf_k=60, fetch_k=20)

        # Act
        results = await service.find_fused_chunks("How tall is it?", 3)

        # Assert
        assert [item.chunk.sequence for item in results] == [2, 1, 3]
        assert results[0].score == pytest.approx(1 / 62 + 1 / 61)
        mock_hyde.expand.assert_awaited_once_with("How tall is it?", HYDE_PROMPT)
        assert embedder.calls == [["How tall is it?"], ["Hypothetical passage about the tower."]]
        assert [call.args[1] for call in mock_store.search.await_args_list] == [20, 20]

    @pytest.mark.asyncio
    async def test_should_use_custom_hyde_prompt(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator, mock_hyde: MagicMock
    ) -> None:
        """Test a stored HYDE prompt overrides the default template."""
        service = RetrievalService(mock_store, embedder, hyde_expander=mock_hyde)
        await service.find_fused_chunks("q", 2, hyde_prompt="Custom {{question}}")
        mock_hyde.expand.assert_awaited_once_with("q", "Custom {{question}}")

    @pytest.mark.asyncio
    async def test_should_fall_back_to_raw_ranking_when_hyde_is_empty(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator, mock_hyde: MagicMock
    ) -> None:
        """Test an empty hypothesis leaves only the raw-query ranking."""
        # Arrange
        mock_hyde.expand.return_value = ""
        service = RetrievalService(mock_store, embedder, hyde_expander=mock_hyde)

        # Act
        results = await service.find_fused_chunks("q", 5)

        # Assert
        assert [item.chunk.sequence for item in results] == [1, 2]
        assert mock_store.search.await_count == 1


class TestFindDiverseChunks:
    """Test suite for RetrievalService.find_diverse_chunks()."""

    @pytest.mark.asyncio
    async def test_should_skip_near_duplicates(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator
    ) -> None:
        """Test MMR prefers a dissimilar chunk over a near duplicate of the top hit."""
        # Arrange
        mock_store.search.return_value = [A, B, C]
        mock_store.get_vectors.return_value = {
            A.chunk.id: [1.0, 0.0, 0.0, 0.0],
            B.chunk.id: [1.0, 0.0, 0.0, 0.0],
            C.chunk.id: [0.0, 1.0, 0.0, 0.0],
        }
        service = RetrievalService(mock_store, embedder, mmr_lambda=0.5)

        # Act
        results = await service.find_diverse_chunks("q", 2)

        # Assert
        assert results == [A, C]


class TestFindInDatabase:
    """Test suite for RetrievalService.find_in_database()."""

    @pytest.mark.asyncio
    async def test_should_use_plain_search_without_hyde(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator, mock_hyde: MagicMock
    ) -> None:
        """Test the agent search is plain top-5 when HYDE is disabled."""
        service = RetrievalService(mock_store, embedder, hyde_expander=mock_hyde, use_hyde=False)
        await service.find_in_database("Petra")
        mock_store.search.assert_awaited_once_with([1.0, 0.0, 0.0, 0.0], 5)
        mock_hyde.expand.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_fuse_with_hyde_when_enabled(
        self, mock_store: MagicMock, embedder: FakeEmbeddingGenerator, mock_hyde: MagicMock
    ) -> None:
        """Test the agent search is fused when HYDE is enabled."""
        service = RetrievalService(mock_store, embedder, hyde_expander=mock_hyde, use_hyde=True)
        results = await service.find_in_database("Petra", hyde_prompt="H {{question}}")
        assert len(results) <= 5
        mock_hyde.expand.assert_awaited_once_with("Petra", "H {{question}}")
