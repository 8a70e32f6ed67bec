"""
Configuration management using YAML files, dataclasses and the flat
keyword file.

Application settings come from an optional YAML file merged onto
dataclass defaults. Configuration sections:
- PathsConfig: cache directory and newsletter checkout locations
- GitHubConfig: organization, API access and repository aliases
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Digest keywords (ignore list, repository order, code words, editor and
browser paths) live in the flat ``key=value`` file inside the cache
directory and are read with `read_flat_config`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigKeyMissing

FlatConfig = dict[str, str]

DEFAULT_REPO_ALIASES = {
    "rust-clippy": "clippy",
    "rustfmt": "rustfmt",
    "cargo": "cargo",
    "rustc_codegen_gcc": "codegen\\_gcc",
    "futures-rs": "futures",
    "rustup": "rustup",
    "libc": "libc",
    "docs.rs": "docs.rs",
    "hashbrown": "hashbrown",
    "miri": "miri",
    "rust-analyzer": "rust-analyzer",
    "rust-bindgen": "bindgen",
}


@dataclass
class PathsConfig:
    """Filesystem locations.

    Attributes:
        cache_dir: Directory holding the flat cache files and keyword config
        twir_dir: Checkout of the newsletter repository
        draft_subdir: Directory inside twir_dir containing the draft
    """

    cache_dir: str = "cache"
    twir_dir: str = "../this-week-in-rust"
    draft_subdir: str = "draft"


@dataclass
class GitHubConfig:
    """Configuration for the GitHub search and publishing steps.

    Attributes:
        org: Organization whose merged pull requests are collected
        api_url: Base URL of the GitHub REST API
        token_env: Environment variable holding the access token
        per_page: Search page size (GitHub allows at most 100)
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        remote: Git remote the draft branch is pushed to
        fork_owner: Owner of the fork used to open the pull request
        repo_aliases: Repository name to title prefix mapping
    """

    org: str = "rust-lang"
    api_url: str = "https://api.github.com"
    token_env: str = "GH_TOKEN"
    per_page: int = 100
    timeout_seconds: float = 30.0
    trust_env: bool = True
    remote: str = "llogiq"
    fork_owner: str = "llogiq"
    repo_aliases: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REPO_ALIASES))


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file inside the cache directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "paths": {
            "cache_dir": cfg.paths.cache_dir,
            "twir_dir": cfg.paths.twir_dir,
            "draft_subdir": cfg.paths.draft_subdir,
        },
        "github": {
            "org": cfg.github.org,
            "api_url": cfg.github.api_url,
            "token_env": cfg.github.token_env,
            "per_page": cfg.github.per_page,
            "timeout_seconds": cfg.github.timeout_seconds,
            "trust_env": cfg.github.trust_env,
            "remote": cfg.github.remote,
            "fork_owner": cfg.github.fork_owner,
            "repo_aliases": dict(cfg.github.repo_aliases),
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        paths=PathsConfig(**data["paths"]),
        github=GitHubConfig(**data["github"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_token(cfg: GitHubConfig) -> str | None:
    """Get the GitHub token from the configured environment variable."""
    return os.getenv(cfg.token_env) or None


def read_flat_config(path: Path) -> FlatConfig:
    """Read the flat ``key=value`` keyword file.

    Lines without ``=`` are skipped; only the first ``=`` separates key
    from value, and trailing whitespace is dropped.
    """
    config: FlatConfig = {}
    for line in path.read_text(encoding="utf-8").split("\n"):
        key, sep, value = line.rstrip().partition("=")
        if sep:
            config[key] = value
    return config


def get_value(config: FlatConfig, key: str, hint: str | None = None) -> str:
    """Return a required value or raise ConfigKeyMissing naming the key."""
    try:
        return config[key]
    except KeyError:
        raise ConfigKeyMissing(key, hint or f"{key}=<path>") from None


def get_list(config: FlatConfig, key: str) -> list[str]:
    """Return a required comma-space separated list."""
    if key not in config:
        raise ConfigKeyMissing(key)
    return config[key].split(", ")
