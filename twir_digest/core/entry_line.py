"""
Codec for the `* [title](link)` cache and document line format.

Both the filter/sorter and the document linter go through this module so
the shape they read is always the shape that was written.
"""

from __future__ import annotations

from .types import Entry

ENTRY_PREFIX = "* ["
LINK_DELIMITER = "]("
ENTRY_SUFFIX = ")"


def split_entry_line(line: str) -> tuple[str, str]:
    """Split a line into raw title and link parts on the LAST ``](``.

    Titles may contain brackets and parentheses, so the rightmost
    delimiter is the only reliable one. The title part keeps any ``* [``
    prefix and the link part keeps its closing parenthesis. A line
    without the delimiter is returned whole as the title with an empty
    link.
    """
    title, sep, link = line.rpartition(LINK_DELIMITER)
    if not sep:
        return line, ""
    return title, link


def parse_entry_line(line: str) -> Entry:
    """Leniently parse a cache line into an Entry.

    Malformed lines are never rejected: they become title-only entries.
    """
    title, link = split_entry_line(line)
    if title.startswith(ENTRY_PREFIX):
        title = title[len(ENTRY_PREFIX):]
    if link.endswith(ENTRY_SUFFIX):
        link = link[: -len(ENTRY_SUFFIX)]
    return Entry(title=title, link=link)


def parse_entry_line_strict(line: str) -> Entry | None:
    """Parse a line that must have the exact ``* [title](link)`` shape.

    Returns:
        The Entry, or None when any part of the shape is missing
    """
    if not line.startswith(ENTRY_PREFIX) or not line.endswith(ENTRY_SUFFIX):
        return None
    inner = line[len(ENTRY_PREFIX): -len(ENTRY_SUFFIX)]
    title, sep, link = inner.rpartition(LINK_DELIMITER)
    if not sep:
        return None
    return Entry(title=title, link=link)


def render_entry_line(title: str, link: str) -> str:
    return f"{ENTRY_PREFIX}{title}{LINK_DELIMITER}{link}{ENTRY_SUFFIX}"


def link_key(text: str) -> str:
    """Identity of an entry's link for deduplication.

    Accepts a full cache line, a ``title](link)`` fragment or a bare link
    and reduces all of them to the link without its closing parenthesis.
    Text without the delimiter is its own key.
    """
    _, sep, link = text.rpartition(LINK_DELIMITER)
    if not sep:
        return text
    if link.endswith(ENTRY_SUFFIX):
        link = link[: -len(ENTRY_SUFFIX)]
    return link
