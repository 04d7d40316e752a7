"""Base source/parser ABCs, exporter definition and shared error types."""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ConfigError(ExporterError):
    """Configuration file is unreadable or malformed."""


class SourceFetchError(ExporterError):
    """A command, HTTP endpoint or file could not be read."""


class ParseError(ExporterError):
    """A numeric value could not be extracted from a payload."""


_INFINITY = re.compile(r"[+-]?(inf|infinity)", re.IGNORECASE)


def to_number(text: str) -> float:
    """Parse a plain float literal.

    Stricter than ``float()``: surrounding whitespace, digit separators and
    non-ASCII digits are rejected, as is a finite literal that overflows.
    """
    if text != text.strip() or "_" in text or not text.isascii():
        raise ParseError(f"failed to parse value as a number: {text!r}")
    try:
        value = float(text)
    except ValueError as e:
        raise ParseError(f"failed to parse value as a number: {text!r}") from e
    if math.isinf(value) and not _INFINITY.fullmatch(text):
        raise ParseError(f"value out of range: {text!r}")
    return value


class SourceKind(str, Enum):
    COMMAND = "command"
    HTTP = "http"
    FILE = "file"


class MetricKind(str, Enum):
    GAUGE = "gauge"
    COUNTER = "counter"


class BaseSource(ABC):
    """Abstract base for all payload sources."""

    kind: SourceKind

    @property
    @abstractmethod
    def locator(self) -> str:
        """Command string, URL or path this source reads from."""

    @abstractmethod
    def fetch(self) -> str:
        """Return the raw payload. Raises SourceFetchError on failure."""
        ...


class BaseParser(ABC):
    """Abstract base for all value parsers."""

    kind: str

    @abstractmethod
    def extract(self, raw: str) -> str:
        """Return the text holding the value. Raises ParseError on failure."""
        ...

    def parse(self, raw: str) -> float:
        return to_number(self.extract(raw))


@dataclass(frozen=True)
class ExporterSpec:
    name: str
    source: BaseSource
    parser: BaseParser
    interval: int = 0
    metric_type: MetricKind = MetricKind.GAUGE
    labels: dict[str, str] = field(default_factory=dict)
    description: str = ""

    def fetch_value(self) -> float:
        """Run fetch then parse. Raises SourceFetchError or ParseError."""
        return self.parser.parse(self.source.fetch())
