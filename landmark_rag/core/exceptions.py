"""
Exception hierarchy for Landmark RAG application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LandmarkRagException(Exception):
    """Base exception for all Landmark RAG application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(LandmarkRagException):
    """
    Raised for fatal configuration problems.

    Vector dimensionality mismatch, unknown vector store provider, or a
    missing capability. Never retried.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            setting: Name of the offending setting
            details: Additional context
        """
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class VectorStoreError(LandmarkRagException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, search, count, get_vectors)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class StoreError(VectorStoreError):
    """Raised when a write to the vector or content store fails."""

    pass


class QueryError(VectorStoreError):
    """Raised when a read from the vector or content store fails."""

    pass


class UnsupportedOperationError(LandmarkRagException):
    """Raised when a backend does not implement an optional operation."""

    def __init__(
        self,
        operation: str,
        backend: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize unsupported operation error.

        Args:
            operation: Operation name (e.g. clear)
            backend: Backend that rejected it
            details: Additional context
        """
        details = details or {}
        details["operation"] = operation
        details["backend"] = backend
        super().__init__(f"{backend} does not support '{operation}'", details)


class UpstreamGenerationError(LandmarkRagException):
    """Raised when the embedding or chat provider fails."""

    def __init__(
        self,
        message: str,
        capability: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream generation error.

        Args:
            message: Error message
            capability: Capability that failed (embedding, chat)
            details: Additional context
        """
        details = details or {}
        if capability:
            details["capability"] = capability
        super().__init__(message, details)


class DocumentSourceError(LandmarkRagException):
    """Raised when a source document cannot be fetched."""

    def __init__(
        self,
        message: str,
        title: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document source error.

        Args:
            message: Error message
            title: Title of the requested document
            details: Additional context
        """
        details = details or {}
        if title:
            details["title"] = title
        super().__init__(message, details)
