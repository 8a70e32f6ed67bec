"""Tests for entry filtering and ordering."""

from twir_digest.core.filtering import filter_and_sort, load_previous_links, repo_sort_key

MIRI = "* [Update miri to 1.2.3](https://github.com/rust-lang/miri/pull/42)"


def test_previous_links_are_dropped():
    raw = ["* [T](u1)", "* [U](u2)"]
    assert filter_and_sort(raw, {"x](u1)"}, [], set(), []) == ["* [U](u2)"]


def test_previous_links_loaded_from_last_run():
    previous = load_previous_links(["* [Old title](https://github.com/rust-lang/cargo/pull/9)", ""])
    assert previous == {"https://github.com/rust-lang/cargo/pull/9"}
    raw = ["* [New title](https://github.com/rust-lang/cargo/pull/9)"]
    assert filter_and_sort(raw, previous, [], set(), []) == []


def test_ignore_words_drop_entries():
    assert filter_and_sort([MIRI], set(), ["update"], set(), []) == []


def test_without_ignore_words_entry_is_formatted():
    result = filter_and_sort([MIRI], set(), [], set(), [])
    assert result == ["* [update miri to 1.2.3](https://github.com/rust-lang/miri/pull/42)"]


def test_ignore_is_case_insensitive_and_skips_empty_words():
    raw = ["* [Rollup of 5 pull requests](https://github.com/rust-lang/rust/pull/1)", MIRI]
    result = filter_and_sort(raw, set(), ["ROLLUP", ""], set(), [])
    assert result == ["* [update miri to 1.2.3](https://github.com/rust-lang/miri/pull/42)"]


def test_sort_by_repo_order_then_name_then_title():
    raw = [
        "* [zeta](https://github.com/rust-lang/zebra/pull/1)",
        "* [alpha](https://github.com/rust-lang/miri/pull/2)",
        "* [beta](https://github.com/rust-lang/rustfmt/pull/3)",
        "* [same](https://github.com/rust-lang/cargo/pull/4)",
        "* [same](https://github.com/rust-lang/cargo/pull/5)",
    ]
    result = filter_and_sort(raw, set(), [], set(), ["cargo", "rustfmt"])
    assert result == [
        "* [same](https://github.com/rust-lang/cargo/pull/4)",
        "* [same](https://github.com/rust-lang/cargo/pull/5)",
        "* [beta](https://github.com/rust-lang/rustfmt/pull/3)",
        "* [alpha](https://github.com/rust-lang/miri/pull/2)",
        "* [zeta](https://github.com/rust-lang/zebra/pull/1)",
    ]


def test_unlisted_repos_in_same_repo_sort_by_title():
    raw = [
        "* [b](https://github.com/rust-lang/miri/pull/1)",
        "* [a](https://github.com/rust-lang/miri/pull/2)",
    ]
    result = filter_and_sort(raw, set(), [], set(), [])
    assert result == [
        "* [a](https://github.com/rust-lang/miri/pull/2)",
        "* [b](https://github.com/rust-lang/miri/pull/1)",
    ]


def test_malformed_line_is_kept_as_title_only():
    raw = ["just a title", "* [fix](https://github.com/rust-lang/cargo/pull/1)"]
    result = filter_and_sort(raw, set(), [], set(), ["cargo"])
    assert result == [
        "* [fix](https://github.com/rust-lang/cargo/pull/1)",
        "* [just a title]()",
    ]


def test_title_with_brackets_splits_on_last_delimiter():
    raw = ["* [Fix [x](y) docs](https://github.com/rust-lang/rust/pull/7)"]
    result = filter_and_sort(raw, set(), [], set(), [])
    assert result == ["* [fix `[x](y)` docs](https://github.com/rust-lang/rust/pull/7)"]


def test_repo_sort_key():
    line = "* [x](https://github.com/rust-lang/miri/pull/1)"
    assert repo_sort_key(line, ["cargo", "miri"]) == (1, "miri", "* [x")
    rank, repo, title = repo_sort_key("no link", ["cargo"])
    assert rank > 1
    assert repo == ""
    assert title == "no link"
