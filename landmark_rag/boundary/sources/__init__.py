"""Document sources for indexing."""

from landmark_rag.boundary.sources.wikipedia_client import WikipediaClient, page_url_for

__all__ = ["WikipediaClient", "page_url_for"]
