"""
Title formatting into the house style.

Runs of code-like words are collapsed into one backtick span, a leading
Title-Case word is decapitalized once, and words are re-joined with
single spaces. Formatting already formatted output is a no-op.
"""

from __future__ import annotations

from typing import AbstractSet

from .types import Word
from .words import BACKTICK, COLON, classify, next_in_code


def classify_title(raw_title: str, code_words: AbstractSet[str]) -> list[Word]:
    """Split a title on whitespace and classify every token in order.

    Tokens that are nothing but backticks or a colon still move the span
    state but produce no word.
    """
    in_code = False
    words: list[Word] = []
    for token in raw_title.split():
        word, enters_code, exits_code = classify(token, in_code, code_words)
        in_code = next_in_code(in_code, enters_code, exits_code)
        if word.text:
            words.append(word)
    return words


def _is_title_case(text: str) -> bool:
    # uppercase initial plus at least one lowercase letter, so acronyms stay
    return bool(text) and text[0].isupper() and any(ch.islower() for ch in text)


def format_title(raw_title: str, code_words: AbstractSet[str] = frozenset()) -> str:
    """Format a raw pull request title.

    Args:
        raw_title: Title as fetched or as stored in the cache
        code_words: Exact words that are always treated as code

    Returns:
        The formatted title

    Examples:
        >>> format_title("Fix bug in cargo")
        'fix bug in cargo'
        >>> format_title("Use Vec<T> in foo_bar")
        'use `Vec<T>` in `foo_bar`'
    """
    words = classify_title(raw_title, code_words)
    first = True
    parts: list[str] = []
    for index, word in enumerate(words):
        previous_is_code = index > 0 and words[index - 1].is_code
        next_is_code = index + 1 < len(words) and words[index + 1].is_code

        if word.is_code and not previous_is_code:
            part = BACKTICK + word.text
            first = False
        elif first and _is_title_case(word.text):
            part = word.text[0].lower() + word.text[1:]
            # a lowercased code word would turn into code on the next pass
            if part in code_words:
                part = word.text
            first = word.has_trailing_colon
        else:
            part = word.text
            first = first and word.has_trailing_colon

        # close the span at the end of a run of code words
        if word.is_code and not next_is_code:
            part += BACKTICK
        if word.has_trailing_colon:
            part += COLON
        parts.append(part)
    return " ".join(parts)
