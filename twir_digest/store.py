"""
Flat line-oriented record stores for the cache directory.

Every run reads these files fresh and overwrites them; there is no other
persistent state. `LineStore` hides the file so the algorithms only see
sequences of lines.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .errors import CacheFormatError


class LineStore:
    """A UTF-8 text file holding one record per line.

    Attributes:
        path: Location of the backing file
    """

    def __init__(self, path: Path):
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[str]:
        """Return all non-empty lines.

        Raises:
            CacheFormatError: If the file does not exist
        """
        if not self.exists():
            raise CacheFormatError(str(self.path), "cache file not found")
        text = self.path.read_text(encoding="utf-8")
        return [line for line in text.split("\n") if line]

    def read_text(self) -> str:
        if not self.exists():
            raise CacheFormatError(str(self.path), "cache file not found")
        return self.path.read_text(encoding="utf-8")

    def save(self, lines: Iterable[str]) -> None:
        """Overwrite the file with the given lines, newline terminated."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")

    def write_text(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


class CacheFiles:
    """Names the stores living in the cache directory.

    - prs: raw entries of the current week, before filtering
    - last_prs: raw entries of the previously published week
    - filtered: this run's filtered, formatted and sorted entries
    - num_prs: the merged pull request count sentence
    - week_spec: the ``YYYY-MM-DD..YYYY-MM-DD`` search window
    - config: the flat keyword configuration
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir
        self.prs = LineStore(cache_dir / "prs")
        self.last_prs = LineStore(cache_dir / "last_prs")
        self.filtered = LineStore(cache_dir / "filteredprs")
        self.num_prs = LineStore(cache_dir / "num_prs")
        self.week_spec = LineStore(cache_dir / "week_spec")
        self.config = cache_dir / "config"

    def rotate(self) -> None:
        """Make this week's raw entries the dedup source of the next run."""
        self.prs.path.replace(self.last_prs.path)
