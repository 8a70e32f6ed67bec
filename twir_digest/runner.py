"""
Workflow orchestration for the weekly digest.

Each public function is one step of the editing cycle:
1. run_week: advance the search window
2. run_fetch: list merged pull requests into the raw cache
3. run_filter: dedup, ignore, format and sort into the filtered cache
4. run_start: splice templates and updates into the draft, open the editor
5. run_check: lint the draft
6. run_push: publish the draft branch and rotate the caches

Every step reads the cache files fresh and overwrites what it produces.
Errors from the I/O boundary propagate unchanged and abort the step.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .commands import git, open_tabs, run_command
from .config import AppConfig, get_list, get_value, read_flat_config
from .core.filtering import filter_and_sort, load_previous_links
from .core.lint import check_document
from .draft import find_draft, get_number, merged_count_line, render_updates, splice_draft
from .errors import CacheFormatError
from .fetch.github import collect_raw_entries
from .logging_utils import log_event
from .store import CacheFiles
from .week import next_week_spec, search_url

logger = logging.getLogger("twir_digest.runner")

COTW_THREAD = "https://users.rust-lang.org/t/crate-of-the-week/2704/last"
QOTW_THREAD = "https://users.rust-lang.org/t/twir-quote-of-the-week/328/last"
COMMIT_MESSAGE = "C/QotW and notable changes"


def cache_files(cfg: AppConfig) -> CacheFiles:
    return CacheFiles(Path(cfg.paths.cache_dir))


def twir_dir(cfg: AppConfig) -> Path:
    return Path(cfg.paths.twir_dir)


def draft_path(cfg: AppConfig) -> Path:
    return find_draft(twir_dir(cfg) / cfg.paths.draft_subdir)


def read_week_spec(cache: CacheFiles) -> str:
    return cache.week_spec.read_text().strip()


def run_week(cfg: AppConfig) -> str:
    """Advance the stored search window by one week and return it."""
    cache = cache_files(cfg)
    week_spec = next_week_spec(read_week_spec(cache))
    cache.week_spec.write_text(week_spec)
    log_event(logger, "week", "Week advanced", week_spec=week_spec)
    return week_spec


def run_fetch(cfg: AppConfig, token: str | None, week_spec: str | None = None) -> int:
    """Fetch the week's merged pull requests into the raw cache.

    Returns:
        The total merged count reported by GitHub
    """
    cache = cache_files(cfg)
    if week_spec is None:
        week_spec = read_week_spec(cache)
    total_count, lines = asyncio.run(collect_raw_entries(cfg.github, week_spec, token))
    cache.num_prs.save([merged_count_line(total_count)])
    cache.prs.save(lines)
    log_event(
        logger,
        "fetch",
        "Fetched pull requests",
        week_spec=week_spec,
        total_count=total_count,
        fetched=len(lines),
    )
    return total_count


def run_filter(cfg: AppConfig) -> list[str]:
    """Filter the raw cache into the filtered cache and return its lines."""
    cache = cache_files(cfg)
    keywords = read_flat_config(cache.config)
    ignore = get_list(keywords, "ignore")
    order = get_list(keywords, "order")
    code_words = set(get_list(keywords, "code_keywords"))

    previous = load_previous_links(cache.last_prs.load())
    raw = cache.prs.load()
    filtered = filter_and_sort(raw, previous, ignore, code_words, order)
    cache.filtered.save(filtered)
    log_event(
        logger,
        "filter",
        "Filtered pull requests",
        raw=len(raw),
        kept=len(filtered),
    )
    return filtered


def run_start(cfg: AppConfig, token: str | None) -> Path:
    """Prepare the draft for editing and open it in the editor.

    Returns:
        Path of the updated draft
    """
    keywords = read_flat_config(cache_files(cfg).config)
    browser = get_value(keywords, "firefox")
    editor = get_value(keywords, "editor")
    repo = twir_dir(cfg)

    git(["checkout", "master"], repo)
    git(["pull"], repo)
    path = draft_path(cfg)
    contents = path.read_text(encoding="utf-8")
    # fails before any side effect when the placeholders are missing
    splice_draft(contents, "")

    open_tabs(browser, [COTW_THREAD, QOTW_THREAD])
    week_spec = read_week_spec(cache_files(cfg))
    total_count = run_fetch(cfg, token, week_spec)
    logger.info("found %d prs", total_count)
    filtered = run_filter(cfg)
    updates = render_updates(total_count, search_url(cfg.github.org, week_spec), filtered)
    path.write_text(splice_draft(contents, updates), encoding="utf-8")
    logger.info("updated contents, opening editor")
    run_command(editor, [str(path)])
    return path


def run_check(cfg: AppConfig) -> Path:
    """Lint the draft.

    Raises:
        LintViolation: With every issue of the first failing chapter
    """
    path = draft_path(cfg)
    check_document(path.read_text(encoding="utf-8"), cfg.github.org)
    log_event(logger, "check", "Draft is clean", draft=str(path))
    return path


def run_push(cfg: AppConfig) -> str:
    """Commit and push the draft branch, then roll the week forward.

    Returns:
        The new week window
    """
    cache = cache_files(cfg)
    keywords = read_flat_config(cache.config)
    browser = get_value(keywords, "firefox")
    repo = twir_dir(cfg)
    path = draft_path(cfg)
    number = get_number(path.read_text(encoding="utf-8"))
    branch = f"twir-{number}"
    if not cache.prs.exists():
        raise CacheFormatError(str(cache.prs.path), "cache file not found")
    week_spec = next_week_spec(read_week_spec(cache))

    git(["checkout", "-b", branch], repo)
    git(["add", f"{cfg.paths.draft_subdir}/{path.name}"], repo)
    git(["commit", "-m", COMMIT_MESSAGE], repo)
    git(["push", cfg.github.remote, branch], repo)
    open_tabs(
        browser,
        [f"https://github.com/{cfg.github.fork_owner}/this-week-in-rust/pull/new/{branch}"],
    )

    cache.week_spec.write_text(week_spec)
    log_event(logger, "week", "Week advanced", week_spec=week_spec)
    cache.rotate()

    if number.isdigit() and int(number) > 0:
        previous_branch = f"twir-{int(number) - 1}"
        git(["branch", "-d", previous_branch], repo)
        git(["push", "--delete", cfg.github.remote, previous_branch], repo)
    return week_spec
