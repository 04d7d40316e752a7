"""Parsers that pull a single numeric value out of a raw payload."""

from __future__ import annotations

import re
from dataclasses import dataclass

from . import json_value
from .base import BaseParser, ParseError


def _pick(parts: list[str], index: int, what: str) -> str:
    if index < 0 or index >= len(parts):
        raise ParseError(f"{what} {index} out of range")
    return parts[index].strip()


@dataclass(frozen=True)
class RegexParser(BaseParser):
    """First capture group of the first match."""

    pattern: str
    kind = "regex"

    def extract(self, raw: str) -> str:
        try:
            regex = re.compile(self.pattern)
        except re.error as e:
            raise ParseError(f"invalid regex pattern: {e}") from e

        match = regex.search(raw)
        if match is None or regex.groups < 1 or match.group(1) is None:
            raise ParseError("regex pattern did not match or capture group not found")
        return match.group(1)


@dataclass(frozen=True)
class JsonParser(BaseParser):
    """Value at a dot path such as ``stats.items.0.count``."""

    json_path: str = ""
    kind = "json"

    def extract(self, raw: str) -> str:
        return json_value.evaluate(json_value.decode(raw), self.json_path)


@dataclass(frozen=True)
class LineParser(BaseParser):
    line_num: int = 0
    kind = "line"

    def extract(self, raw: str) -> str:
        return _pick(raw.strip().split("\n"), self.line_num, "line number")


@dataclass(frozen=True)
class SplitParser(BaseParser):
    split: str = ""
    index: int = 0
    kind = "split"

    def extract(self, raw: str) -> str:
        text = raw.strip()
        # An empty delimiter splits between every character
        parts = text.split(self.split) if self.split else list(text)
        return _pick(parts, self.index, "split index")


@dataclass(frozen=True)
class RawParser(BaseParser):
    kind = "raw"

    def extract(self, raw: str) -> str:
        return raw.strip()

