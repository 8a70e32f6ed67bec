"""
Weekly search window handling.

The window is stored as ``YYYY-MM-DD..YYYY-MM-DD`` and matches GitHub's
``merged:`` search qualifier.
"""

from __future__ import annotations

from datetime import date, timedelta

from .core.lint import DEFAULT_ORG, merged_search_url
from .errors import CacheFormatError

DATE_FORMAT = "%Y-%m-%d"
WEEK = timedelta(days=7)


def parse_week_spec(week_spec: str) -> tuple[date, date]:
    since, sep, until = week_spec.strip().partition("..")
    if not sep:
        raise CacheFormatError("week_spec", f"expected `YYYY-MM-DD..YYYY-MM-DD`, got {week_spec!r}")
    try:
        start = date.fromisoformat(since)
        end = date.fromisoformat(until)
    except ValueError as exc:
        raise CacheFormatError("week_spec", str(exc)) from exc
    return start, end


def next_week_spec(week_spec: str) -> str:
    """Return the window starting where `week_spec` ends and lasting one week."""
    _, end = parse_week_spec(week_spec)
    return f"{end.strftime(DATE_FORMAT)}..{(end + WEEK).strftime(DATE_FORMAT)}"


def search_query(org: str, week_spec: str) -> str:
    return f"is:pr org:{org} is:merged merged:{week_spec.strip()}"


def search_url(org: str = DEFAULT_ORG, week_spec: str = "") -> str:
    """Browser URL listing the merged pull requests of the window."""
    return merged_search_url(org, week_spec.strip())
