"""
Article splitter producing overlapping, token-bounded chunks.

Lines are greedily packed into windows bounded by an estimated token
budget; the tail of each window is repeated at the head of the next so
facts straddling a boundary stay retrievable.

Dependencies: landmark_rag.models.chunk, landmark_rag.core.chunking.slugs
System role: Chunking stage of the indexing pipeline
"""

import logging
import math

from landmark_rag.core.chunking.slugs import to_url_safe_id
from landmark_rag.models.chunk import DocumentChunk

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "Introduction"
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """
    Rough token estimate (~4 characters per token).

    Deterministic and language-agnostic; only used for window sizing.

    Args:
        text: Text to measure

    Returns:
        int: ceil(len(text) / 4)
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def _soft_wrap(line: str, width: int) -> list[str]:
    """Wrap a long line near `width` chars, breaking on the last space past the midpoint."""
    pieces = []
    index = 0
    while index < len(line):
        end = min(index + width, len(line))
        if end < len(line):
            last_space = line.rfind(" ", index, end)
            if last_space > index + width // 2:
                end = last_space

        piece = line[index:end].strip()
        if piece:
            pieces.append(piece)

        index = end
        while index < len(line) and line[index] == " ":
            index += 1
    return pieces


def split_lines(text: str, soft_wrap_chars: int = 400) -> list[str]:
    """
    Normalize text into non-empty, reasonably short lines.

    Args:
        text: Raw text
        soft_wrap_chars: Lines longer than this are soft-wrapped on word boundaries

    Returns:
        list[str]: Trimmed, non-empty lines in order
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = []
    for raw_line in normalized.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if len(line) <= soft_wrap_chars:
            lines.append(line)
        else:
            lines.extend(_soft_wrap(line, soft_wrap_chars))
    return lines


class ArticleSplitter:
    """Split article sections into overlapping chunks."""

    def __init__(
        self,
        max_tokens_per_chunk: int = 300,
        overlap_tokens: int = 60,
        soft_wrap_chars: int = 400,
    ) -> None:
        """
        Initialize splitter with window configuration.

        Args:
            max_tokens_per_chunk: Estimated token budget per chunk
            overlap_tokens: Estimated tokens repeated between adjacent chunks
            soft_wrap_chars: Line length above which lines are soft-wrapped
        """
        self.max_tokens_per_chunk = max_tokens_per_chunk
        self.overlap_tokens = min(overlap_tokens, max_tokens_per_chunk // 2)
        self.soft_wrap_chars = soft_wrap_chars

    def chunk(
        self,
        title: str,
        content: str,
        source_url: str = "",
        section: str = "",
        section_key: str | None = None,
    ) -> list[DocumentChunk]:
        """
        Split one section of an article into chunks.

        Args:
            title: Document title
            content: Section body text
            source_url: Page URL used to build each chunk's source_ref
            section: Section heading ("Introduction" when empty)
            section_key: Section part of chunk ids when the heading repeats
                within a document (defaults to the heading)

        Returns:
            list[DocumentChunk]: Chunks in document order, empty for empty content
        """
        section = section.strip() or DEFAULT_SECTION
        bodies = self.split_plain_text(content)
        anchor = to_url_safe_id(section)

        chunks = [
            DocumentChunk(
                id=to_url_safe_id(f"{title}_{section_key or section}_{index:02d}"),
                title=title,
                section=section,
                sequence=index,
                content=body.strip(),
                source_ref=f"{source_url}#{anchor}",
            )
            for index, body in enumerate(bodies, start=1)
        ]

        logger.debug(
            f"{__name__}:chunk - {len(chunks)} chunks",
            extra={"title": title, "section": section, "content_len": len(content)},
        )
        return chunks

    def split_plain_text(self, content: str) -> list[str]:
        """
        Pack content lines into overlapping windows.

        Args:
            content: Raw text

        Returns:
            list[str]: Window texts (lines joined by newlines)
        """
        lines = self._fit_lines(split_lines(content, self.soft_wrap_chars))

        windows: list[list[str]] = []
        current: list[str] = []
        for line in lines:
            candidate = current + [line]
            if current and estimate_tokens("\n".join(candidate)) > self.max_tokens_per_chunk:
                windows.append(current)
                overlap = self._overlap_tail(current)
                if overlap and estimate_tokens(f"{overlap}\n{line}") <= self.max_tokens_per_chunk:
                    current = [overlap, line]
                else:
                    current = [line]
            else:
                current = candidate

        if current:
            windows.append(current)

        return ["\n".join(window) for window in windows]

    def _fit_lines(self, lines: list[str]) -> list[str]:
        """Split any line that alone exceeds the token budget into word groups."""
        max_chars = self.max_tokens_per_chunk * CHARS_PER_TOKEN
        fitted = []
        for line in lines:
            if estimate_tokens(line) <= self.max_tokens_per_chunk:
                fitted.append(line)
                continue

            group: list[str] = []
            group_len = 0
            for word in line.split():
                while len(word) > max_chars:
                    if group:
                        fitted.append(" ".join(group))
                        group, group_len = [], 0
                    fitted.append(word[:max_chars])
                    word = word[max_chars:]
                added = len(word) + (1 if group else 0)
                if group and group_len + added > max_chars:
                    fitted.append(" ".join(group))
                    group, group_len = [], 0
                    added = len(word)
                if word:
                    group.append(word)
                    group_len += added
            if group:
                fitted.append(" ".join(group))
        return fitted

    def _overlap_tail(self, window: list[str]) -> str:
        """Trailing words of a window worth at most overlap_tokens."""
        if self.overlap_tokens <= 0:
            return ""

        max_chars = self.overlap_tokens * CHARS_PER_TOKEN
        words = " ".join(window).split()
        tail: list[str] = []
        tail_len = 0
        for word in reversed(words):
            added = len(word) + (1 if tail else 0)
            if tail_len + added > max_chars:
                break
            tail.append(word)
            tail_len += added
        return " ".join(reversed(tail))
