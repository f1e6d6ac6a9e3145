"""
Url-safe identifier generation.

Dependencies: re, urllib.parse
System role: Deterministic chunk IDs and section anchors
"""

import re
from urllib.parse import quote

_UNSAFE_RUN = re.compile(r"[^\w\-]+", re.ASCII)
_REPEATED_UNDERSCORE = re.compile(r"_{2,}")


def to_url_safe_id(value: str | None) -> str:
    """
    Build a url-safe slug.

    Non-ASCII characters are dropped, runs of anything other than word
    characters and hyphens become a single underscore, and leading or
    trailing underscores are trimmed. If nothing survives, the raw value is
    percent-encoded instead.

    Args:
        value: Arbitrary text (title, section, "title_section_01")

    Returns:
        str: Slug, or "" for empty input

    Example:
        >>> to_url_safe_id("Eiffel Tower_History_01")
        'Eiffel_Tower_History_01'
    """
    if value is None or not value.strip():
        return ""

    slug = "".join(ch for ch in value.strip() if ord(ch) <= 127)
    slug = _UNSAFE_RUN.sub("_", slug)
    slug = _REPEATED_UNDERSCORE.sub("_", slug)
    slug = slug.strip("_")

    if not slug:
        return quote(value, safe="")
    return slug
