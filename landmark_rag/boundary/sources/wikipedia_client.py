"""
Wikipedia document source.

Fetches plain-text article extracts through the MediaWiki query API,
keeping wiki-style section headings ("== History ==") so the article can
be split into sections before chunking.

Dependencies: httpx, landmark_rag.core.chunking.slugs
System role: Document source for the indexing pipeline
"""

import logging
from urllib.parse import quote

import httpx

from landmark_rag.core.chunking.slugs import to_url_safe_id
from landmark_rag.core.exceptions import DocumentSourceError
from landmark_rag.models.chunk import Document

logger = logging.getLogger(__name__)

API_URL = "https://en.wikipedia.org/w/api.php"
PAGE_URL_PREFIX = "https://en.wikipedia.org/wiki/"
USER_AGENT = "LandmarkRagBot/1.0 (contact:you@example.com)"


def page_url_for(title: str) -> str:
    """Canonical article URL for a page title."""
    return PAGE_URL_PREFIX + quote(title.replace(" ", "_"), safe="")


class WikipediaClient:
    """Async client for Wikipedia article extracts."""

    def __init__(self, http_client: httpx.AsyncClient | None = None, timeout: float = 30.0) -> None:
        """
        Initialize client.

        Args:
            http_client: Preconfigured client (one is created when omitted)
            timeout: Request timeout in seconds for the created client
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def get_page(self, title: str, full: bool = True) -> Document:
        """
        Fetch one article.

        Args:
            title: Page title (redirects are followed)
            full: Whole article when True, introduction only when False

        Returns:
            Document: Article with trimmed plain-text content

        Raises:
            DocumentSourceError: If the request fails or the page is missing or empty
        """
        params = {
            "action": "query",
            "prop": "extracts",
            "format": "json",
            "formatversion": "2",
            "redirects": "1",
            "explaintext": "1",
            "exsectionformat": "wiki",
            "titles": title,
        }
        if not full:
            params["exintro"] = "1"

        try:
            response = await self._http.get(API_URL, params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{__name__}:get_page - {type(e).__name__}: {e}", extra={"title": title})
            raise DocumentSourceError(
                "Wikipedia request failed",
                title=title,
                details={"error": str(e)},
            ) from e

        pages = (payload.get("query") or {}).get("pages") or []
        page = pages[0] if pages else None
        if page is None or page.get("missing"):
            raise DocumentSourceError("Could not find a Wikipedia page", title=title)

        page_title = (page.get("title") or "").strip()
        extract = (page.get("extract") or "").strip()
        if not page_title or not extract:
            raise DocumentSourceError("Empty Wikipedia page returned", title=title)

        logger.info(
            f"{__name__}:get_page - Fetched '{page_title}'",
            extra={"requested_title": title, "content_len": len(extract)},
        )
        return Document(
            id=to_url_safe_id(page_title),
            title=page_title,
            content=extract,
            page_url=page_url_for(page_title),
        )
