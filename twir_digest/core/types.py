"""
Core data types for the digest engine.

- Entry: one merged-change announcement as stored in the cache files
- Word: a single title token during formatting
- LintIssue: one violation reported by the document linter
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Entry:
    """One merged pull request announcement.

    Attributes:
        title: Entry title, possibly already formatted
        link: Target URL, empty for malformed cache lines
        repo_prefix: Repository alias prepended to the title at fetch time
    """
    title: str
    link: str
    repo_prefix: str | None = None


@dataclass(frozen=True)
class Word:
    """A title token as seen by the formatter.

    Attributes:
        text: Token text with backticks and trailing colon stripped
        is_code: Whether the token belongs to a code span
        has_trailing_colon: Whether a trailing colon was stripped
    """
    text: str
    is_code: bool
    has_trailing_colon: bool = False


@dataclass(frozen=True)
class LintIssue:
    """A single linting violation.

    Attributes:
        chapter: Heading of the chapter the issue was found in
        line: The offending line (or title/link fragment)
        message: Human readable description
    """
    chapter: str
    line: str
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.line}"
