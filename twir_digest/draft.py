"""
Draft document discovery and splicing.

The newsletter draft carries three placeholders that are replaced with
the Crate of the Week and Quote of the Week templates and the generated
updates block.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .core.lint import MERGED_PHRASE
from .errors import CacheFormatError

COTW_MARKER = "<!-- COTW goes here -->"
QOTW_MARKER = "<!-- QOTW goes here -->"
UPDATES_MARKER = "<!-- Rust updates go here -->"
MARKERS = (COTW_MARKER, QOTW_MARKER, UPDATES_MARKER)

COTW_TEMPLATE = "This week's crate is [](), a \n\nThanks to []() for the suggestion!"
QOTW_TEMPLATE = "> \n\n– []()\n\nThanks to []() for the suggestion!"

NUMBER_HEADER = "Number: "


def find_draft(draft_dir: Path) -> Path:
    """Return the first markdown file in the draft directory."""
    if draft_dir.is_dir():
        for path in sorted(draft_dir.iterdir()):
            if path.suffix.lower() == ".md":
                return path
    raise CacheFormatError(str(draft_dir), "Draft not found")


def get_number(contents: str) -> str:
    """Return the issue number from the ``Number: `` front matter line."""
    _, sep, rest = contents.partition(NUMBER_HEADER)
    if not sep:
        raise CacheFormatError("draft", "Number not found in draft")
    return rest.split("\n", 1)[0].strip()


def missing_markers(contents: str) -> list[str]:
    return [marker for marker in MARKERS if marker not in contents]


def merged_count_line(total_count: int) -> str:
    return f"{total_count}{MERGED_PHRASE}"


def render_updates(total_count: int, search_link: str, entries: Sequence[str]) -> str:
    """Render the updates block: count sentence, link definition, entries."""
    return "\n\n".join(
        [
            merged_count_line(total_count),
            f"[merged]: {search_link}",
            "\n".join(entries),
        ]
    )


def splice_draft(contents: str, updates: str) -> str:
    """Replace the three placeholders.

    Raises:
        CacheFormatError: If any placeholder is missing
    """
    missing = missing_markers(contents)
    if missing:
        raise CacheFormatError("draft", f"setup not done yet, missing {', '.join(missing)}")
    return (
        contents.replace(COTW_MARKER, COTW_TEMPLATE)
        .replace(QOTW_MARKER, QOTW_TEMPLATE)
        .replace(UPDATES_MARKER, updates)
    )
