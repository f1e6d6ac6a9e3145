"""
Index management API schemas.

Dependencies: pydantic
System role: Response models for index endpoints
"""

from pydantic import BaseModel, Field


class IndexStatsResponse(BaseModel):
    """Index readiness summary."""

    total_vector_count: int = Field(description="Number of indexed chunks")
    has_vectors: bool = Field(description="Whether the index can serve queries")


class IndexBuildResponse(BaseModel):
    """Outcome of an index build."""

    message: str
    documents_indexed: int
    chunks_indexed: int
