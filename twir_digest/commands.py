"""
Subprocess helpers for git, the editor and the browser.
"""

from __future__ import annotations

import logging
from pathlib import Path
import subprocess
from typing import Sequence

from .errors import CollaboratorError

logger = logging.getLogger("twir_digest.commands")


def run_command(binary: str, args: Sequence[str] = (), cwd: Path | None = None) -> str:
    """Run an external program and return its stdout.

    Raises:
        CollaboratorError: If the program cannot be started or exits non-zero
    """
    command = [binary, *args]
    logger.info("Running %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise CollaboratorError(binary, f"{type(exc).__name__}: {exc}") from exc
    if result.returncode != 0:
        raise CollaboratorError(" ".join(command), result.stderr.strip())
    return result.stdout


def git(args: Sequence[str], repo_dir: Path) -> str:
    return run_command("git", args, repo_dir)


def list_branches(repo_dir: Path) -> tuple[list[str], str]:
    """Return (all branch names, current branch name)."""
    branches: list[str] = []
    current = ""
    for line in git(["branch"], repo_dir).splitlines():
        if line.startswith("* "):
            current = line[2:].strip()
            branches.append(current)
        elif line.strip():
            branches.append(line.strip())
    return branches, current


def open_tabs(browser: str, urls: Sequence[str]) -> None:
    args: list[str] = []
    for url in urls:
        args += ["--new-tab", url]
    run_command(browser, args)
