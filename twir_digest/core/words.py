"""
Word classification for title formatting.

Decides, one whitespace-delimited token at a time, whether a token is
source code that belongs inside a backtick span. The running "inside a
code span" state is passed in and the span transitions are returned, so
the caller threads the state explicitly as a fold.
"""

from __future__ import annotations

from typing import AbstractSet

from .types import Word

BACKTICK = "`"
COLON = ":"
STRAY_BACKTICK = "'"


def has_unescaped(haystack: str, needle: str) -> bool:
    """Return True if `needle` occurs in `haystack` without a preceding backslash.

    Each occurrence is judged on its own: an escaped occurrence does not
    suppress a later unescaped one.

    Examples:
        >>> has_unescaped("a\\\\_b", "_")
        False
        >>> has_unescaped("a\\\\_b_c", "_")
        True
    """
    start = 0
    while True:
        pos = haystack.find(needle, start)
        if pos == -1:
            return False
        if pos == 0 or haystack[pos - 1] != "\\":
            return True
        start = pos + len(needle)


def _strip_suffix(text: str, suffix: str) -> tuple[str, bool]:
    if text.endswith(suffix):
        return text[: -len(suffix)], True
    return text, False


def _looks_like_call(text: str) -> bool:
    # function calls, but not parenthesized text
    return "(" in text and text.endswith(")") and not text.startswith("(")


def is_code_text(text: str, code_words: AbstractSet[str]) -> bool:
    """Return True if the bare token text looks like source code."""
    return (
        # snake case
        has_unescaped(text, "_")
        # generics
        or has_unescaped(text, "<")
        # paths
        or "::" in text
        # attributes
        or "#[" in text
        or _looks_like_call(text)
        or text in code_words
    )


def classify(
    token: str,
    currently_in_code: bool,
    code_words: AbstractSet[str],
) -> tuple[Word, bool, bool]:
    """Classify a single title token.

    Args:
        token: One whitespace-delimited token of a title
        currently_in_code: Whether a backtick span is open before this token
        code_words: Exact words that are always treated as code

    Returns:
        A tuple of (word, enters_code, exits_code). A token wrapped in
        backticks on both sides enters and exits in the same step. Backticks
        left inside the text become apostrophes.
    """
    text, colon = _strip_suffix(token, COLON)
    text, exits_code = _strip_suffix(text, BACKTICK)
    if exits_code and not colon:
        # a colon may sit inside the closing backtick
        text, colon = _strip_suffix(text, COLON)
    enters_code = text.startswith(BACKTICK)
    if enters_code:
        text = text[len(BACKTICK):]
    # stray backticks would unbalance the spans
    text = text.replace(BACKTICK, STRAY_BACKTICK)

    is_code = enters_code or currently_in_code or is_code_text(text, code_words)
    return Word(text=text, is_code=is_code, has_trailing_colon=colon), enters_code, exits_code


def next_in_code(currently_in_code: bool, enters_code: bool, exits_code: bool) -> bool:
    """Span state after a token: opened by a leading backtick, closed by a trailing one."""
    return (currently_in_code or enters_code) and not exits_code
