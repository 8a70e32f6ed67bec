"""Tests for the GitHub search listing."""

import asyncio

import httpx
import pytest

from twir_digest.config import GitHubConfig
from twir_digest.errors import CollaboratorError
from twir_digest.fetch.github import (
    PullRequest,
    collect_raw_entries,
    iter_pages,
    pr_entry,
    raw_entry_line,
)

WEEK = "2026-10-06..2026-10-13"
NEXT = "https://api.github.com/search/issues?q=next&page=2"


def _handler(requests: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.params.get("page") == "2":
            return httpx.Response(
                200,
                json={
                    "total_count": 3,
                    "items": [
                        {"title": " Improve docs. ", "html_url": "https://github.com/rust-lang/rust/pull/3"},
                    ],
                },
            )
        return httpx.Response(
            200,
            json={
                "total_count": 3,
                "items": [
                    {"title": "Fix the thing.", "html_url": "https://github.com/rust-lang/miri/pull/1"},
                    {"title": "clippy: new lint", "html_url": "https://github.com/rust-lang/rust-clippy/pull/2"},
                ],
            },
            headers={"Link": f'<{NEXT}>; rel="next"'},
        )

    return handler


def test_collect_follows_pages_and_prefixes_aliases():
    requests: list[httpx.Request] = []

    async def run():
        transport = httpx.MockTransport(_handler(requests))
        async with httpx.AsyncClient(transport=transport) as client:
            return await collect_raw_entries(GitHubConfig(), WEEK, None, client=client)

    total, lines = asyncio.run(run())

    assert total == 3
    assert lines == [
        "* [miri: Fix the thing](https://github.com/rust-lang/miri/pull/1)",
        "* [clippy: new lint](https://github.com/rust-lang/rust-clippy/pull/2)",
        "* [Improve docs](https://github.com/rust-lang/rust/pull/3)",
    ]
    assert len(requests) == 2
    assert requests[0].url.params["q"] == f"is:pr org:rust-lang is:merged merged:{WEEK}"
    assert requests[0].url.params["per_page"] == "100"
    assert str(requests[1].url) == NEXT


def test_iter_pages_is_lazy():
    requests: list[httpx.Request] = []

    async def run():
        transport = httpx.MockTransport(_handler(requests))
        async with httpx.AsyncClient(transport=transport) as client:
            async for page in iter_pages(client, GitHubConfig(), WEEK):
                return page

    page = asyncio.run(run())
    assert page.next_url == NEXT
    assert page.items[0] == PullRequest(title="Fix the thing.", url="https://github.com/rust-lang/miri/pull/1")
    assert len(requests) == 1


def test_http_error_is_a_collaborator_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="rate limited")

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await collect_raw_entries(GitHubConfig(), WEEK, None, client=client)

    with pytest.raises(CollaboratorError, match="HTTP 403"):
        asyncio.run(run())


def test_raw_entry_line_outside_org_is_not_prefixed():
    pr = PullRequest(title="Fix miri thing", url="https://github.com/other/miri/pull/1")
    assert raw_entry_line(pr, "rust-lang", {"miri": "miri"}) == (
        "* [Fix miri thing](https://github.com/other/miri/pull/1)"
    )


def test_pr_entry_records_repo_prefix():
    pr = PullRequest(title="Fix the thing.", url="https://github.com/rust-lang/miri/pull/1")
    entry = pr_entry(pr, "rust-lang", {"miri": "miri"})
    assert entry.title == "miri: Fix the thing"
    assert entry.repo_prefix == "miri"


def test_pr_entry_without_added_prefix():
    aliases = {"miri": "miri"}
    already = PullRequest(title="miri: fix", url="https://github.com/rust-lang/miri/pull/2")
    unknown = PullRequest(title="Fix", url="https://github.com/rust-lang/rust/pull/3")
    assert pr_entry(already, "rust-lang", aliases).repo_prefix is None
    assert pr_entry(unknown, "rust-lang", aliases).repo_prefix is None
