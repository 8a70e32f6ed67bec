"""
Command-line interface for the weekly digest tool.

Uses Typer to expose one subcommand per workflow step. Supports loading
.env files for the GitHub token.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from . import runner
from .commands import list_branches, run_command
from .config import AppConfig, get_token, get_value, load_config, read_flat_config
from .errors import DigestError, LintViolation
from .logging_utils import setup_logging
from .week import search_url

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False, help="Assemble the weekly Rust project updates digest.")
console = Console()


def _cfg(ctx: typer.Context) -> AppConfig:
    return ctx.obj


def _fail(exc: DigestError) -> NoReturn:
    console.print(f"[red]error:[/red] {escape(str(exc))}", soft_wrap=True)
    raise typer.Exit(code=1)


def _token(cfg: AppConfig) -> str:
    token = get_token(cfg.github)
    if token:
        return token
    return typer.prompt("token", hide_input=True)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Load configuration and logging shared by all subcommands."""
    if load_dotenv is not None:
        load_dotenv()

    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file
    setup_logging(cfg.logging, Path(cfg.paths.cache_dir))
    ctx.obj = cfg


@app.command()
def week(ctx: typer.Context):
    """Advance the search window by one week and print the search URL."""
    cfg = _cfg(ctx)
    try:
        week_spec = runner.run_week(cfg)
    except DigestError as exc:
        _fail(exc)
    console.print(search_url(cfg.github.org, week_spec), soft_wrap=True)


@app.command()
def token(ctx: typer.Context):
    """Print the GitHub token that would be used."""
    console.print(f"[{_token(_cfg(ctx))}]", markup=False)


@app.command()
def prs(ctx: typer.Context):
    """Fetch the merged pull requests of the current window into the cache."""
    cfg = _cfg(ctx)
    try:
        total = runner.run_fetch(cfg, _token(cfg))
    except DigestError as exc:
        _fail(exc)
    console.print(f"found {total} prs")


@app.command("filter")
def filter_(ctx: typer.Context):
    """Filter, format and sort the cached pull requests."""
    try:
        filtered = runner.run_filter(_cfg(ctx))
    except DigestError as exc:
        _fail(exc)
    console.print(f"kept {len(filtered)} prs")


@app.command()
def branches(ctx: typer.Context):
    """List branches of the newsletter checkout."""
    try:
        names, current = list_branches(runner.twir_dir(_cfg(ctx)))
    except DigestError as exc:
        _fail(exc)
    console.print(f"{', '.join(names)}\n* {current}", markup=False)


@app.command()
def editor(ctx: typer.Context):
    """Launch the configured editor."""
    cfg = _cfg(ctx)
    try:
        path = get_value(read_flat_config(runner.cache_files(cfg).config), "editor")
        run_command(path)
    except DigestError as exc:
        _fail(exc)


@app.command()
def browser(ctx: typer.Context):
    """Print the configured browser path."""
    cfg = _cfg(ctx)
    try:
        path = get_value(read_flat_config(runner.cache_files(cfg).config), "firefox")
    except DigestError as exc:
        _fail(exc)
    console.print(repr(path), markup=False)


@app.command()
def start(ctx: typer.Context):
    """Fill the draft with templates and this week's updates, then edit it."""
    cfg = _cfg(ctx)
    try:
        path = runner.run_start(cfg, _token(cfg))
    except DigestError as exc:
        _fail(exc)
    console.print(f"Draft updated: {path}", markup=False, soft_wrap=True)


@app.command()
def check(ctx: typer.Context):
    """Lint the draft and report every issue found."""
    try:
        path = runner.run_check(_cfg(ctx))
    except LintViolation as exc:
        for issue in exc.issues:
            console.print(str(issue), markup=False, soft_wrap=True)
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    except DigestError as exc:
        _fail(exc)
    console.print(f"{path} looks good", markup=False, soft_wrap=True)


@app.command()
def push(ctx: typer.Context):
    """Publish the draft branch and roll the caches to the next week."""
    try:
        week_spec = runner.run_push(_cfg(ctx))
    except DigestError as exc:
        _fail(exc)
    console.print(f"set week to {week_spec}")


if __name__ == "__main__":
    app()
