"""
Structural linting of the rendered draft document.

The draft is split into chapters on level-2 headings. Only the Crate of
the Week, Quote of the Week and Updates chapters are checked:
- every line ends in zero or exactly two whitespace characters
- the Updates chapter opens with the merged count and the search link
- every update line is a well-formed entry with a clean title and link

All issues of a chapter are collected before the walk stops, so a
failure always reports the complete list for that chapter.
"""

from __future__ import annotations

import logging
import re

from ..errors import LintViolation
from .entry_line import parse_entry_line_strict
from .types import LintIssue

logger = logging.getLogger("twir_digest.lint")

CHAPTER_MARKER = "\n##"
CRATE_CHAPTER = "Crate of the Week"
QUOTE_CHAPTER = "Quote of the Week"
UPDATES_CHAPTER = "Updates from the Rust Project"
TRACKED_CHAPTERS = (CRATE_CHAPTER, QUOTE_CHAPTER, UPDATES_CHAPTER)

DEFAULT_ORG = "rust-lang"
MERGED_PHRASE = " pull requests were [merged in the last week][merged]"
MERGED_SEARCH_URL = (
    "https://github.com/search?q=is%3Apr+org%3A{org}+is%3Amerged+merged%3A{week}"
)

UNESCAPED_IN_TITLE = frozenset("<>[]_")
REPO_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


def merged_search_url(org: str = DEFAULT_ORG, week_spec: str = "") -> str:
    return MERGED_SEARCH_URL.format(org=org, week=week_spec)


def split_chapters(document: str) -> list[tuple[str, str, str]]:
    """Split a document into (heading, body, full chapter text) triples.

    The text before the first level-2 heading is returned as a chapter
    with its first line as heading, so it passes through unchecked.
    """
    chapters = []
    for chapter in document.split(CHAPTER_MARKER):
        heading, _, body = chapter.partition("\n")
        chapters.append((heading.strip(), body, chapter))
    return chapters


def _trailing_whitespace(line: str) -> int:
    return len(line) - len(line.rstrip())


def check_whitespace(chapter: str, heading: str = "") -> list[LintIssue]:
    """Flag lines ending in one, or three or more, whitespace characters.

    Two trailing spaces are a Markdown hard line break and are allowed.
    """
    issues = []
    for line in chapter.split("\n"):
        if _trailing_whitespace(line) not in (0, 2):
            issues.append(LintIssue(heading, line, "line ends with irregular whitespace"))
    return issues


def check_title(title: str, chapter: str = UPDATES_CHAPTER) -> LintIssue | None:
    """Validate escaping and code spans of an entry title."""
    in_code = False
    escape = False
    for ch in title:
        if ch == "`":
            in_code = not in_code
        elif not in_code:
            if not escape and ch in UNESCAPED_IN_TITLE:
                return LintIssue(chapter, title, f"unescaped `{ch}` in non-code title")
            escape = ch == "\\"
    if escape:
        return LintIssue(chapter, title, "wonky backslash at the end")
    if in_code:
        return LintIssue(chapter, title, "unmatched backticks")
    return None


def check_link(link: str, org: str = DEFAULT_ORG, chapter: str = UPDATES_CHAPTER) -> LintIssue | None:
    """Validate that an organization link points at a pull request.

    Links outside ``https://github.com/<org>/`` are not checked.
    """
    prefix = f"https://github.com/{org}/"
    if not link.startswith(prefix):
        return None
    parts = link[len(prefix):].split("/", 2)
    parts += ["?"] * (3 - len(parts))
    repo, pull, number = parts
    if not REPO_RE.match(repo) or pull != "pull" or not (number.isascii() and number.isdigit()):
        return LintIssue(chapter, link, "wrong link")
    return None


def check_entry(line: str, org: str = DEFAULT_ORG) -> list[LintIssue]:
    entry = parse_entry_line_strict(line)
    if entry is None:
        return [LintIssue(UPDATES_CHAPTER, line, "wrong PR link")]
    found = [check_title(entry.title), check_link(entry.link, org)]
    return [LintIssue(UPDATES_CHAPTER, line, issue.message) for issue in found if issue is not None]


def check_updates(body: str, org: str = DEFAULT_ORG) -> list[LintIssue]:
    """Check the Updates chapter body: count, search link, then entries."""
    parts = body.split("\n\n", 2)
    issues = []

    count = parts[0]
    if not count.rstrip().endswith(MERGED_PHRASE):
        issues.append(LintIssue(UPDATES_CHAPTER, count, "missing merged pull request count"))

    if len(parts) < 2:
        issues.append(LintIssue(UPDATES_CHAPTER, body, "missing Updates link"))
        return issues
    link = parts[1]
    expected = f"[merged]: {merged_search_url(org)}"
    if not link.startswith(expected):
        issues.append(LintIssue(UPDATES_CHAPTER, link, "wrong Updates link"))

    if len(parts) < 3:
        issues.append(LintIssue(UPDATES_CHAPTER, body, "missing PRs"))
        return issues
    for line in parts[2].rstrip("\n").split("\n"):
        issues.extend(check_entry(line, org))
    return issues


def merge_by_line(issues: list[LintIssue]) -> list[LintIssue]:
    """Fold issues sharing a line into one, so each offending line counts once."""
    merged: dict[str, LintIssue] = {}
    for issue in issues:
        seen = merged.get(issue.line)
        if seen is None:
            merged[issue.line] = issue
        else:
            merged[issue.line] = LintIssue(seen.chapter, seen.line, f"{seen.message}; {issue.message}")
    return list(merged.values())


def lint_chapter(heading: str, body: str, chapter: str, org: str = DEFAULT_ORG) -> list[LintIssue]:
    if heading not in TRACKED_CHAPTERS:
        return []
    issues = check_whitespace(chapter, heading)
    if heading == UPDATES_CHAPTER:
        issues.extend(check_updates(body, org))
    return merge_by_line(issues)


def lint_document(document: str, org: str = DEFAULT_ORG) -> list[LintIssue]:
    """Lint chapter by chapter, stopping after the first failing chapter."""
    for heading, body, chapter in split_chapters(document):
        issues = lint_chapter(heading, body, chapter, org)
        if issues:
            return issues
    return []


def lint(document: str, org: str = DEFAULT_ORG) -> int:
    """Lint a document, log every issue and return the error count."""
    issues = lint_document(document, org)
    for issue in issues:
        logger.error("%s", issue)
    return len(issues)


def check_document(document: str, org: str = DEFAULT_ORG) -> None:
    """Lint a document and raise LintViolation if any chapter fails."""
    issues = lint_document(document, org)
    if issues:
        raise LintViolation(issues)
