"""
TWIR Digest - weekly Rust project updates assembler.

This package collects the merged pull requests of an organization,
normalizes their titles into the newsletter house style, filters and
orders them, splices them into the draft, and lints the result.

Main entry point is the CLI via the `twir-digest` command.

Example:
    $ twir-digest start
    $ twir-digest check
"""

__all__ = ["__version__", "format_title", "filter_and_sort", "lint"]
__version__ = "0.1.0"

from .core.filtering import filter_and_sort
from .core.lint import lint
from .core.title import format_title
