"""
Section splitting for plain-text article extracts.

Splits text on wiki-style headings ("== History ==", "=== Design ===").
Reference-only sections are skipped.

Dependencies: re
System role: First stage of article chunking
"""

import re
from typing import NamedTuple

HEADING_PATTERN = re.compile(r"^\s*=+\s*(.+?)\s*=+\s*", re.MULTILINE)
SKIPPED_SECTIONS = frozenset({"See also", "References", "External links", "Notes"})
INTRODUCTION = "Introduction"


class Section(NamedTuple):
    """Heading and body of one article section."""

    title: str
    content: str


def split_into_sections(article_text: str) -> list[Section]:
    """
    Split an article into (heading, body) sections.

    Text before the first heading becomes the "Introduction" section; an
    article without headings is a single "Introduction" section.

    Args:
        article_text: Plain-text article with wiki-style headings

    Returns:
        list[Section]: Sections in document order
    """
    matches = list(HEADING_PATTERN.finditer(article_text))
    if not matches:
        return [Section(INTRODUCTION, article_text)]

    sections = []
    if matches[0].start() > 0:
        sections.append(Section(INTRODUCTION, article_text[: matches[0].start()]))

    for i, match in enumerate(matches):
        name = match.group(1).strip()
        if name in SKIPPED_SECTIONS:
            continue
        body_end = matches[i + 1].start() if i < len(matches) - 1 else len(article_text)
        sections.append(Section(name, article_text[match.end():body_end]))

    return sections
