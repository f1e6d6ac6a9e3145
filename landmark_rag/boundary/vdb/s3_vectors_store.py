"""
S3 Vectors store for production retrieval.

Vectors live in an Amazon S3 Vectors index; chunk text lives in the local
content store under the same id. Search asks the remote index for the top-k
keys, batch-loads their content and keeps the remote ordering.

Remote keys without local content (store desync) are dropped and logged.

Index metadata keys (non-filterable): title, section, source_ref

Dependencies: boto3, botocore, tenacity, landmark_rag.boundary.vdb.content_store
System role: Production vector store (S3 Vectors)
"""

import logging
from typing import Any, Sequence

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from landmark_rag.boundary.vdb.content_store import ChunkContentStore
from landmark_rag.boundary.vdb.vector_math import as_float32
from landmark_rag.core.exceptions import QueryError, StoreError, UnsupportedOperationError
from landmark_rag.models.chunk import DocumentChunk
from landmark_rag.models.search import VectorSearchResult

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
RETRYABLE_ERROR_CODES = frozenset(
    {
        "ThrottlingException",
        "TooManyRequestsException",
        "ServiceUnavailableException",
        "InternalServerException",
        "RequestTimeout",
    }
)


def _is_retryable(error: BaseException) -> bool:
    """Throttling, 5xx responses and connection-level botocore failures are retried."""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
        return code in RETRYABLE_ERROR_CODES or status >= 500
    return isinstance(error, BotoCoreError)


class S3VectorsStore:
    """
    S3 Vectors store with a local content store.

    Satisfies the VectorStore protocol. The boto3 client is synchronous, so
    every remote call runs in the threadpool.
    """

    backend_name = "s3vectors"

    def __init__(
        self,
        client: Any,
        content_store: ChunkContentStore,
        vectors_bucket: str = "landmark-rag-vectors",
        index_name: str = "landmark-chunks",
        dimensions: int = 512,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            client: boto3 "s3vectors" client
            content_store: Local chunk text store
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            dimensions: Vector length of the index
        """
        self._client = client
        self._content_store = content_store
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_call - Retry {retry_state.attempt_number}/{MAX_ATTEMPTS} after "
            f"{type(retry_state.outcome.exception()).__name__}"
        ),
        reraise=True,
    )
    def _call(self, operation: str, **kwargs: Any) -> dict:
        """Invoke a client operation against the configured bucket and index."""
        method = getattr(self._client, operation)
        return method(
            vectorBucketName=self._vectors_bucket,
            indexName=self._index_name,
            **kwargs,
        )

    async def upsert(self, chunk: DocumentChunk, vector: Sequence[float]) -> None:
        """
        Store chunk content locally, then the vector remotely.

        Args:
            chunk: Chunk to store
            vector: Embedding of the chunk

        Raises:
            ConfigurationError: If the vector length is wrong
            StoreError: If either write fails
        """
        array = as_float32(vector, self._dimensions, "upsert")
        await self._content_store.save(chunk)

        entry = {
            "key": chunk.id,
            "data": {"float32": array.tolist()},
            "metadata": {
                "title": chunk.title,
                "section": chunk.section,
                "source_ref": chunk.source_ref,
            },
        }
        try:
            await run_in_threadpool(self._call, "put_vectors", vectors=[entry])
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:upsert - {type(e).__name__}: {e}", extra={"chunk_id": chunk.id})
            raise StoreError(
                "Failed to put vector to S3 Vectors",
                operation="upsert",
                details={"chunk_id": chunk.id, "error": str(e)},
            ) from e

    async def search(self, query_vector: Sequence[float], k: int) -> list[VectorSearchResult]:
        """
        Remote top-k search joined with local content.

        Cosine distance from the index is converted to similarity (1 - distance).

        Args:
            query_vector: Query embedding
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Results by descending similarity

        Raises:
            ConfigurationError: If the vector length is wrong
            QueryError: If the remote query or content lookup fails
        """
        if k <= 0:
            return []

        array = as_float32(query_vector, self._dimensions, "search")
        try:
            response = await run_in_threadpool(
                self._call,
                "query_vectors",
                queryVector={"float32": array.tolist()},
                topK=k,
                returnDistance=True,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:search - {type(e).__name__}: {e}")
            raise QueryError(
                "Failed to query S3 Vectors",
                operation="search",
                details={"k": k, "error": str(e)},
            ) from e

        scored = [
            (match["key"], 1.0 - float(match.get("distance", 1.0)))
            for match in response.get("vectors", [])
        ]
        chunks = await self._content_store.get_many([key for key, _ in scored])

        missing = [key for key, _ in scored if key not in chunks]
        if missing:
            logger.warning(
                f"{__name__}:search - Dropping {len(missing)} hits without local content",
                extra={"missing_ids": missing},
            )

        results = [
            VectorSearchResult(chunk=chunks[key], score=score)
            for key, score in scored
            if key in chunks
        ]
        results.sort(key=lambda result: result.score, reverse=True)

        logger.info(
            f"{__name__}:search - Found {len(results)} results",
            extra={"k": k, "remote_hits": len(scored)},
        )
        return results[:k]

    async def count(self) -> int:
        """Number of vectors in the remote index (paginated listing)."""
        total = 0
        next_token = None
        try:
            while True:
                kwargs: dict[str, Any] = {"maxResults": 1000}
                if next_token:
                    kwargs["nextToken"] = next_token
                response = await run_in_threadpool(self._call, "list_vectors", **kwargs)
                total += len(response.get("vectors", []))
                next_token = response.get("nextToken")
                if not next_token:
                    return total
        except (ClientError, BotoCoreError) as e:
            raise QueryError(
                "Failed to list S3 Vectors",
                operation="count",
                details={"error": str(e)},
            ) from e

    async def clear(self) -> None:
        raise UnsupportedOperationError("clear", self.backend_name)

    async def get_vectors(self, ids: Sequence[str]) -> dict[str, list[float]]:
        """
        Fetch stored vectors by key.

        Args:
            ids: Chunk ids

        Returns:
            dict[str, list[float]]: Vectors keyed by id; unknown ids omitted

        Raises:
            QueryError: If the remote call fails
        """
        if not ids:
            return {}
        try:
            response = await run_in_threadpool(
                self._call, "get_vectors", keys=list(ids), returnData=True
            )
        except (ClientError, BotoCoreError) as e:
            raise QueryError(
                "Failed to get vectors from S3 Vectors",
                operation="get_vectors",
                details={"error": str(e)},
            ) from e

        return {
            entry["key"]: list(entry.get("data", {}).get("float32", []))
            for entry in response.get("vectors", [])
        }
