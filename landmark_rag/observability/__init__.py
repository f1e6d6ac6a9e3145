"""
Observability module.

Provides logging configuration and safe structured logging helpers.
"""

from landmark_rag.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
