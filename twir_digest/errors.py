"""
Error taxonomy for the digest tool.

Every failure the tool reports belongs to one of a closed set of kinds so
callers can branch on the type instead of on message text:
- ConfigKeyMissing: a required key is absent from the flat config file
- CacheFormatError: a cache file is missing or has an unexpected shape
- LintViolation: the draft document failed structural validation
- CollaboratorError: GitHub, git, the editor or the browser failed
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .core.types import LintIssue


class DigestError(Exception):
    """Base class for all errors raised by the digest tool."""


class ConfigKeyMissing(DigestError):
    """A required configuration key was not found.

    Attributes:
        key: Name of the missing key
        hint: Example of the expected line, e.g. ``ignore=a, b, c``
    """

    def __init__(self, key: str, hint: str | None = None):
        self.key = key
        self.hint = hint or f"{key}=a, b, c"
        super().__init__(f"missing `{self.hint}` in config")


class CacheFormatError(DigestError):
    """A cache or draft file could not be interpreted."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class LintViolation(DigestError):
    """The draft document failed linting.

    Attributes:
        issues: Every issue found in the failing chapter
    """

    def __init__(self, issues: Sequence[LintIssue]):
        self.issues = list(issues)
        count = len(self.issues)
        if count == 1:
            message = "There was 1 error"
        else:
            message = f"There were {count} errors"
        super().__init__(message)

    @property
    def count(self) -> int:
        return len(self.issues)


class CollaboratorError(DigestError):
    """An external collaborator (HTTP API or subprocess) failed."""

    def __init__(self, command: str, detail: str):
        self.command = command
        self.detail = detail
        super().__init__(f"{command} failed: {detail}")
