"""
Search result models.

SearchHit is the id/score pair the fusion algorithms operate on;
VectorSearchResult carries the chunk alongside its score so callers do not
need a second lookup.

Dependencies: pydantic, landmark_rag.models.chunk
System role: Type definitions for vector search results
"""

from pydantic import BaseModel, ConfigDict, Field

from landmark_rag.models.chunk import DocumentChunk


class SearchHit(BaseModel):
    """
    Ranked reference to a chunk.

    Scores are backend-native (cosine similarity) or fused (RRF). They are
    only comparable within one list.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Chunk identifier")
    score: float = Field(description="Relevance score, higher is better")


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    chunk: DocumentChunk = Field(description="Matched chunk")
    score: float = Field(description="Similarity score, higher is better")

    @property
    def hit(self) -> SearchHit:
        """Project to an id/score pair."""
        return SearchHit(id=self.chunk.id, score=self.score)
