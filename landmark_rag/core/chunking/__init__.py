"""
Article chunking.

Exports:
  - ArticleSplitter: overlapping, token-bounded chunker
  - split_into_sections: wiki-style heading splitter
  - estimate_tokens, split_lines, to_url_safe_id: helpers
"""

from landmark_rag.core.chunking.article_splitter import (
    DEFAULT_SECTION,
    ArticleSplitter,
    estimate_tokens,
    split_lines,
)
from landmark_rag.core.chunking.sections import Section, split_into_sections
from landmark_rag.core.chunking.slugs import to_url_safe_id

__all__ = [
    "DEFAULT_SECTION",
    "ArticleSplitter",
    "Section",
    "estimate_tokens",
    "split_into_sections",
    "split_lines",
    "to_url_safe_id",
]
