"""Tests for title formatting."""

import itertools

import pytest

from twir_digest.core.title import format_title


def test_leading_title_case_word_is_decapitalized():
    assert format_title("Fix bug in cargo", set()) == "fix bug in cargo"


def test_acronym_is_not_decapitalized():
    assert format_title("CARGO: fix it", set()) == "CARGO: fix it"
    assert format_title("HIR lowering", set()) == "HIR lowering"


def test_decapitalization_skips_past_colon_label():
    assert format_title("Update: Fix bug", set()) == "update: fix bug"


def test_decapitalization_happens_once():
    assert format_title("Fix Bug In Cargo", set()) == "fix Bug In Cargo"


def test_code_words_get_backticks():
    assert format_title("Use Vec<T> in foo_bar", set()) == "use `Vec<T>` in `foo_bar`"


def test_adjacent_code_words_share_one_span():
    result = format_title("Make std::mem::swap const fn", {"const"})
    assert result == "make `std::mem::swap const` fn"


def test_existing_span_across_words_is_kept():
    assert format_title("Add `impl Trait` support", set()) == "add `impl Trait` support"


def test_colon_is_placed_after_closing_backtick():
    assert format_title("Fix foo_bar: handle x", set()) == "fix `foo_bar`: handle x"


def test_leading_code_word_blocks_decapitalization():
    assert format_title("foo_bar Does Thing", set()) == "`foo_bar` Does Thing"


def test_escaped_underscore_is_not_code():
    assert format_title("Rename a\\_b", set()) == "rename a\\_b"


def test_whitespace_is_normalized():
    assert format_title("  fix   the\tthing ", set()) == "fix the thing"
    assert format_title("", set()) == ""


TITLES = [
    "Fix bug in cargo",
    "CARGO: fix it",
    "Update: Fix bug",
    "Use Vec<T> in foo_bar",
    "Make std::mem::swap const fn",
    "Add `impl Trait` support",
    "Fix foo_bar: handle x",
    "Implement #[track_caller] for closures",
    "miri: Support Box::new_uninit() in shims",
    "Don't ICE on (parenthesized) args",
    "Foo bar",
    "Fix: Foo the build",
]


@pytest.mark.parametrize("title", TITLES)
def test_formatting_is_idempotent(title):
    code_words = {"const", "foo"}
    once = format_title(title, code_words)
    assert format_title(once, code_words) == once


@pytest.mark.parametrize("title", TITLES)
def test_backticks_are_balanced(title):
    assert format_title(title, {"const"}).count("`") % 2 == 0


def test_leading_word_matching_code_word_keeps_its_case():
    assert format_title("Foo bar", {"foo"}) == "Foo bar"
    assert format_title("Fix the build", {"fix"}) == "Fix the build"


def test_lone_backticks_are_dropped():
    assert format_title("a ` b", set()) == "a b"
    assert format_title("a `` b", set()) == "a b"
    assert format_title("`foo ` bar", set()) == "`foo` bar"


def test_interior_backtick_becomes_apostrophe():
    assert format_title("fix a`b thing", set()) == "fix a'b thing"
    assert format_title("Don`t panic", set()) == "don't panic"


def test_colon_inside_closing_backtick_moves_outside():
    assert format_title("use `foo:` here", set()) == "use `foo`: here"


TOKENS = [
    "Foo", "fix", "Bar:", "a`b", "`", "``", "`x", "y`",
    "foo_bar", "Vec<T>", "CARGO:", ":", "a::", "`z`:", "x:`", "(p)",
]


@pytest.mark.parametrize("first", TOKENS)
def test_generated_titles_are_idempotent_and_balanced(first):
    code_words = {"foo", "fix"}
    for second, third in itertools.product(TOKENS, repeat=2):
        title = f"{first} {second} {third}"
        once = format_title(title, code_words)
        assert format_title(once, code_words) == once, title
        assert once.count("`") % 2 == 0, title
        assert "  " not in once, title
