"""
Remote listing of merged pull requests.
"""

from .github import PullRequest, SearchPage, collect_raw_entries, iter_pages, pr_entry, raw_entry_line

__all__ = [
    "PullRequest",
    "SearchPage",
    "collect_raw_entries",
    "iter_pages",
    "pr_entry",
    "raw_entry_line",
]
