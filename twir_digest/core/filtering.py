"""
Filtering and ordering of cached pull request entries.

Entries are read from the raw cache, dropped when they were already
announced in the previous run or match an ignore keyword, re-titled
through the formatter, and sorted by configured repository priority.
"""

from __future__ import annotations

import logging
import sys
from typing import AbstractSet, Iterable, Sequence
from urllib.parse import urlsplit

from .entry_line import link_key, parse_entry_line, render_entry_line, split_entry_line
from .title import format_title

logger = logging.getLogger("twir_digest.filter")

UNRANKED = sys.maxsize


def load_previous_links(lines: Iterable[str]) -> set[str]:
    """Build the dedup set from the previous run's accepted lines."""
    return {link_key(line) for line in lines if line.strip()}


def repo_name(link: str) -> str:
    """Return the repository segment of a GitHub style link, or ``""``.

    ``https://github.com/rust-lang/miri/pull/42`` yields ``miri``.
    """
    if not link:
        return ""
    segments = urlsplit(link).path.strip("/").split("/")
    if len(segments) < 2:
        return ""
    return segments[1]


def repo_sort_key(line: str, order: Sequence[str]) -> tuple[int, str, str]:
    """Sort key of a rendered entry line: (repo rank, repo name, title).

    Lines without a link, or from repositories missing from `order`,
    get the maximum rank and sort last.
    """
    title, link = split_entry_line(line)
    if not link:
        return UNRANKED, "", line
    repo = repo_name(link.removesuffix(")"))
    try:
        rank = order.index(repo)
    except ValueError:
        rank = UNRANKED
    return rank, repo, title


def is_ignored(line: str, ignore_words: Iterable[str]) -> bool:
    lower = line.lower()
    return any(word.lower() in lower for word in ignore_words if word)


def filter_and_sort(
    raw_entries: Iterable[str],
    previous_links: AbstractSet[str],
    ignore_words: Iterable[str],
    code_words: AbstractSet[str],
    repo_order: Sequence[str],
) -> list[str]:
    """Filter, format and order raw cache lines.

    Args:
        raw_entries: Lines in ``* [title](link)`` format
        previous_links: Links announced in the previous run; full lines or
            ``title](link)`` fragments are accepted as well
        ignore_words: Case-insensitive substrings that drop an entry
        code_words: Exact words the formatter treats as code
        repo_order: Repository short-names by descending priority

    Returns:
        Formatted entry lines in display order
    """
    previous = {link_key(link) for link in previous_links}
    ignore_words = list(ignore_words)
    order = list(repo_order)
    kept: list[str] = []
    skipped_previous = 0
    skipped_ignored = 0

    for line in raw_entries:
        line = line.rstrip("\n")
        if not line.strip():
            continue
        if link_key(line) in previous:
            skipped_previous += 1
            continue
        if is_ignored(line, ignore_words):
            skipped_ignored += 1
            continue
        entry = parse_entry_line(line)
        kept.append(render_entry_line(format_title(entry.title, code_words), entry.link))

    kept.sort(key=lambda item: repo_sort_key(item, order))
    logger.debug(
        "Filtered entries: kept=%d previous=%d ignored=%d",
        len(kept),
        skipped_previous,
        skipped_ignored,
    )
    return kept
