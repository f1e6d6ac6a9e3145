"""
Shared router helpers.

Dependencies: fastapi, landmark_rag.core.exceptions
System role: Domain error to HTTP status mapping
"""

from fastapi import HTTPException

from landmark_rag.core.exceptions import (
    ConfigurationError,
    DocumentSourceError,
    LandmarkRagException,
    UnsupportedOperationError,
    UpstreamGenerationError,
    VectorStoreError,
)


def status_code_for(error: LandmarkRagException) -> int:
    """HTTP status for a domain error."""
    if isinstance(error, ConfigurationError):
        return 500
    if isinstance(error, UnsupportedOperationError):
        return 501
    if isinstance(error, (VectorStoreError, UpstreamGenerationError, DocumentSourceError)):
        return 502
    return 500


def to_http_exception(error: LandmarkRagException, action: str) -> HTTPException:
    """
    Convert a domain error into an HTTPException.

    Args:
        error: Domain error
        action: What failed, e.g. "build index"

    Returns:
        HTTPException: Status from status_code_for, detail "Failed to {action}: {message}"
    """
    return HTTPException(
        status_code=status_code_for(error),
        detail=f"Failed to {action}: {error.message}",
    )
