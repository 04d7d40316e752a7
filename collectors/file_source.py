"""Source that reads a whole file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .base import BaseSource, SourceFetchError, SourceKind


@dataclass(frozen=True)
class FileSource(BaseSource):
    file_path: str
    kind = SourceKind.FILE

    @property
    def locator(self) -> str:
        return self.file_path

    def fetch(self) -> str:
        try:
            return Path(self.file_path).read_text(encoding="utf-8", errors="replace")
        except (OSError, ValueError) as e:
            raise SourceFetchError(f"reading {self.file_path} failed: {e}") from e
