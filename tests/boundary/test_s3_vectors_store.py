"""
Test suite for S3VectorsStore.

Uses a MagicMock s3vectors client and a real content store on in-memory
SQLite. Covers request shapes, distance conversion, desync handling,
error mapping and retries.

System role: Verification of the remote vector backend
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from landmark_rag.boundary.vdb import ChunkContentStore, S3VectorsStore, VectorStore
from landmark_rag.core.exceptions import (
    ConfigurationError,
    QueryError,
    StoreError,
    UnsupportedOperationError,
)
from tests.conftest import make_chunk


def client_error(code: str, status: int = 400, operation: str = "QueryVectors") -> ClientError:
    """Build a botocore ClientError."""
    return ClientError(
        {"Error": {"Code": code, "Message": code}, "ResponseMetadata": {"HTTPStatusCode": status}},
        operation,
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Provide mock s3vectors client."""
    return MagicMock()


@pytest.fixture
def content_store(session_factory) -> ChunkContentStore:
    """Provide content store on the test database."""
    return ChunkContentStore(session_factory)


@pytest.fixture
def store(mock_client: MagicMock, content_store: ChunkContentStore) -> S3VectorsStore:
    """Provide S3VectorsStore with mocked client."""
    return S3VectorsStore(
        client=mock_client,
        content_store=content_store,
        vectors_bucket="test-bucket",
        index_name="test-index",
        dimensions=4,
    )


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip retry back-off waits."""
    monkeypatch.setattr("time.sleep", lambda _: None)


class TestS3VectorsStoreUpsert:
    """Test suite for S3VectorsStore.upsert()."""

    @pytest.mark.asyncio
    async def test_upsert_should_save_content_and_put_vector(
        self, store: S3VectorsStore, mock_client: MagicMock, content_store: ChunkContentStore
    ) -> None:
        """Test content lands locally and the vector is put with metadata."""
        # Arrange
        chunk = make_chunk()

        # Act
        await store.upsert(chunk, [0.1, 0.2, 0.3, 0.4])

        # Assert
        mock_client.put_vectors.assert_called_once()
        kwargs = mock_client.put_vectors.call_args.kwargs
        assert kwargs["vectorBucketName"] == "test-bucket"
        assert kwargs["indexName"] == "test-index"
        entry = kwargs["vectors"][0]
        assert entry["key"] == chunk.id
        assert entry["data"]["float32"] == pytest.approx([0.1, 0.2, 0.3, 0.4])
        assert entry["metadata"] == {
            "title": chunk.title,
            "section": chunk.section,
            "source_ref": chunk.source_ref,
        }
        assert await content_store.get_many([chunk.id]) == {chunk.id: chunk}

    @pytest.mark.asyncio
    async def test_upsert_should_map_client_error_to_store_error(
        self, store: S3VectorsStore, mock_client: MagicMock
    ) -> None:
        """Test a rejected write raises StoreError."""
        # Arrange
        mock_client.put_vectors.side_effect = client_error("ValidationException", operation="PutVectors")

        # Act & Assert
        with pytest.raises(StoreError):
            await store.upsert(make_chunk(), [0.1, 0.2, 0.3, 0.4])

    @pytest.mark.asyncio
    async def test_upsert_should_reject_wrong_dimensions(
        self, store: S3VectorsStore, mock_client: MagicMock
    ) -> None:
        """Test the dimension guard runs before any write."""
        with pytest.raises(ConfigurationError):
            await store.upsert(make_chunk(), [0.1, 0.2])
        mock_client.put_vectors.assert_not_called()


class TestS3VectorsStoreSearch:
    """Test suite for S3VectorsStore.search()."""

    @pytest.mark.asyncio
    async def test_search_should_convert_distance_and_drop_missing_content(
        self, store: S3VectorsStore, mock_client: MagicMock, content_store: ChunkContentStore
    ) -> None:
        """Test similarity is 1 - distance and hits without local content are dropped."""
        # Arrange
        first = make_chunk(sequence=1)
        second = make_chunk(sequence=2)
        await content_store.save(first)
        await content_store.save(second)
        mock_client.query_vectors.return_value = {
            "vectors": [
                {"key": first.id, "distance": 0.1},
                {"key": "Ghost_Chunk_01", "distance": 0.05},
                {"key": second.id, "distance": 0.3},
            ]
        }

        # Act
        results = await store.search([1.0, 0.0, 0.0, 0.0], k=3)

        # Assert
        assert [result.chunk.id for result in results] == [first.id, second.id]
        assert results[0].score == pytest.approx(0.9)
        assert results[1].score == pytest.approx(0.7)
        kwargs = mock_client.query_vectors.call_args.kwargs
        assert kwargs["topK"] == 3
        assert kwargs["returnDistance"] is True
        assert kwargs["queryVector"]["float32"] == pytest.approx([1.0, 0.0, 0.0, 0.0])

    @pytest.mark.asyncio
    async def test_search_should_not_retry_access_denied(
        self, store: S3VectorsStore, mock_client: MagicMock
    ) -> None:
        """Test a non-retryable error raises QueryError after one attempt."""
        # Arrange
        mock_client.query_vectors.side_effect = client_error("AccessDeniedException", status=403)

        # Act & Assert
        with pytest.raises(QueryError):
            await store.search([1.0, 0.0, 0.0, 0.0], k=3)
        assert mock_client.query_vectors.call_count == 1

    @pytest.mark.asyncio
    async def test_search_should_retry_throttling(
        self, store: S3VectorsStore, mock_client: MagicMock, no_sleep: None
    ) -> None:
        """Test throttled calls are retried until they succeed."""
        # Arrange
        mock_client.query_vectors.side_effect = [
            client_error("ThrottlingException", status=429),
            client_error("ServiceUnavailableException", status=503),
            {"vectors": []},
        ]

        # Act
        results = await store.search([1.0, 0.0, 0.0, 0.0], k=3)

        # Assert
        assert results == []
        assert mock_client.query_vectors.call_count == 3

    @pytest.mark.asyncio
    async def test_search_should_give_up_after_max_attempts(
        self, store: S3VectorsStore, mock_client: MagicMock, no_sleep: None
    ) -> None:
        """Test persistent throttling surfaces as QueryError."""
        # Arrange
        mock_client.query_vectors.side_effect = client_error("ThrottlingException", status=429)

        # Act & Assert
        with pytest.raises(QueryError):
            await store.search([1.0, 0.0, 0.0, 0.0], k=3)
        assert mock_client.query_vectors.call_count == 5

    @pytest.mark.asyncio
    async def test_search_should_return_empty_for_non_positive_k(
        self, store: S3VectorsStore, mock_client: MagicMock
    ) -> None:
        """Test k <= 0 makes no remote call."""
        assert await store.search([1.0, 0.0, 0.0, 0.0], k=0) == []
        mock_client.query_vectors.assert_not_called()


class TestS3VectorsStoreMaintenance:
    """Test suite for count(), clear() and get_vectors()."""

    @pytest.mark.asyncio
    async def test_count_should_follow_pagination(
        self, store: S3VectorsStore, mock_client: MagicMock
    ) -> None:
        """Test every page of the listing is counted."""
        # Arrange
        mock_client.list_vectors.side_effect = [
            {"vectors": [{"key": "a"}, {"key": "b"}], "nextToken": "page-2"},
            {"vectors": [{"key": "c"}]},
        ]

        # Act
        total = await store.count()

        # Assert
        assert total == 3
        assert mock_client.list_vectors.call_args_list[1].kwargs["nextToken"] == "page-2"

    @pytest.mark.asyncio
    async def test_clear_should_be_unsupported(self, store: S3VectorsStore) -> None:
        """Test the remote backend refuses clear."""
        with pytest.raises(UnsupportedOperationError) as exc_info:
            await store.clear()
        assert exc_info.value.details == {"operation": "clear", "backend": "s3vectors"}

    @pytest.mark.asyncio
    async def test_get_vectors_should_map_keys_to_data(
        self, store: S3VectorsStore, mock_client: MagicMock
    ) -> None:
        """Test returned vectors are keyed by id."""
        # Arrange
        mock_client.get_vectors.return_value = {
            "vectors": [{"key": "a", "data": {"float32": [0.1, 0.2, 0.3, 0.4]}}]
        }

        # Act
        vectors = await store.get_vectors(["a", "missing"])

        # Assert
        assert vectors == {"a": [0.1, 0.2, 0.3, 0.4]}
        kwargs = mock_client.get_vectors.call_args.kwargs
        assert kwargs["keys"] == ["a", "missing"]
        assert kwargs["returnData"] is True

    def test_store_should_satisfy_vector_store_protocol(self, store: S3VectorsStore) -> None:
        """Test the remote store is a VectorStore."""
        assert isinstance(store, VectorStore)
