"""
Merged pull request listing via the GitHub search API.

Pages are requested one at a time and yielded lazily in arrival order.
Failures are not retried: any transport or HTTP error aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import AsyncIterator, Mapping
from urllib.parse import urlsplit

import httpx

from ..config import GitHubConfig
from ..core.entry_line import render_entry_line
from ..core.types import Entry
from ..errors import CollaboratorError
from ..week import search_query

logger = logging.getLogger("twir_digest.fetch")


@dataclass
class PullRequest:
    """One search result.

    Attributes:
        title: Pull request title as written by its author
        url: HTML URL of the pull request
    """
    title: str
    url: str


@dataclass
class SearchPage:
    """One page of search results.

    Attributes:
        total_count: Total number of matches reported by the API
        items: Pull requests on this page
        next_url: URL of the following page, or None on the last page
    """
    total_count: int
    items: list[PullRequest]
    next_url: str | None


def _headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _parse_page(resp: httpx.Response) -> SearchPage:
    data = resp.json()
    items = [
        PullRequest(title=item.get("title", ""), url=item.get("html_url", ""))
        for item in data.get("items", [])
    ]
    next_link = resp.links.get("next")
    return SearchPage(
        total_count=int(data.get("total_count") or 0),
        items=items,
        next_url=next_link.get("url") if next_link else None,
    )


async def fetch_page(client: httpx.AsyncClient, url: str, params: Mapping[str, str | int] | None = None) -> SearchPage:
    """Fetch a single search page.

    Raises:
        CollaboratorError: On transport failures and non-2xx responses
    """
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise CollaboratorError(
            "GitHub search", f"HTTP {exc.response.status_code}: {exc.response.text[:200]}"
        ) from exc
    except httpx.HTTPError as exc:
        raise CollaboratorError("GitHub search", f"{type(exc).__name__}: {exc}") from exc
    return _parse_page(resp)


async def iter_pages(
    client: httpx.AsyncClient,
    cfg: GitHubConfig,
    week_spec: str,
) -> AsyncIterator[SearchPage]:
    """Yield search pages for the week, following ``rel="next"`` links."""
    endpoint = f"{cfg.api_url.rstrip('/')}/search/issues"
    params = {"q": search_query(cfg.org, week_spec), "per_page": cfg.per_page}
    page = await fetch_page(client, endpoint, params)
    yield page
    while page.next_url:
        page = await fetch_page(client, page.next_url)
        yield page


def build_client(cfg: GitHubConfig, token: str | None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=_headers(token),
        timeout=cfg.timeout_seconds,
        trust_env=cfg.trust_env,
        follow_redirects=True,
    )


def pr_entry(pr: PullRequest, org: str, repo_aliases: Mapping[str, str]) -> Entry:
    """Turn a pull request into a cache entry.

    The title is trimmed of surrounding spaces and dots. Pull requests of
    aliased repositories get an ``alias: `` prefix unless the title
    already starts with the alias, which is then kept as `repo_prefix`.
    """
    title = pr.title.strip(" .")
    repo_prefix = None
    path = urlsplit(pr.url).path
    prefix = f"/{org}/"
    if path.startswith(prefix):
        repo = path[len(prefix):].split("/", 1)[0]
        alias = repo_aliases.get(repo)
        if alias and not pr.title.startswith(alias):
            title = f"{alias}: {title}"
            repo_prefix = alias
    return Entry(title=title, link=pr.url, repo_prefix=repo_prefix)


def raw_entry_line(pr: PullRequest, org: str, repo_aliases: Mapping[str, str]) -> str:
    """Render a pull request as a raw cache line."""
    entry = pr_entry(pr, org, repo_aliases)
    return render_entry_line(entry.title, entry.link)


async def collect_raw_entries(
    cfg: GitHubConfig,
    week_spec: str,
    token: str | None,
    client: httpx.AsyncClient | None = None,
) -> tuple[int, list[str]]:
    """Fetch all merged pull requests of the week as raw cache lines.

    Returns:
        A tuple of (total count reported by the API, raw lines)
    """
    owns_client = client is None
    if client is None:
        client = build_client(cfg, token)
    total_count: int | None = None
    lines: list[str] = []
    try:
        async for page in iter_pages(client, cfg, week_spec):
            if total_count is None:
                total_count = page.total_count
            for pr in page.items:
                lines.append(raw_entry_line(pr, cfg.org, cfg.repo_aliases))
            logger.debug("Fetched page: items=%d collected=%d", len(page.items), len(lines))
    finally:
        if owns_client:
            await client.aclose()
    return total_count or 0, lines
