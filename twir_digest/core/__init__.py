"""
Core digest engine.

Pure functions with no I/O: word classification, title formatting,
entry filtering/sorting and document linting.
"""

from .entry_line import link_key, parse_entry_line, parse_entry_line_strict, render_entry_line
from .filtering import filter_and_sort, load_previous_links, repo_sort_key
from .lint import check_document, check_link, check_title, lint, lint_document
from .title import format_title
from .types import Entry, LintIssue, Word
from .words import classify, has_unescaped

__all__ = [
    "Entry",
    "LintIssue",
    "Word",
    "classify",
    "has_unescaped",
    "format_title",
    "filter_and_sort",
    "load_previous_links",
    "repo_sort_key",
    "link_key",
    "parse_entry_line",
    "parse_entry_line_strict",
    "render_entry_line",
    "check_document",
    "check_link",
    "check_title",
    "lint",
    "lint_document",
]
