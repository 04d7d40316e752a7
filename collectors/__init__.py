from .base import (
    BaseParser,
    BaseSource,
    ConfigError,
    ExporterError,
    ExporterSpec,
    MetricKind,
    ParseError,
    SourceFetchError,
    SourceKind,
)
from .cache import CacheEntry, MetricCache
from .command_source import CommandSource
from .exporter_collector import ExporterCollector
from .file_source import FileSource
from .http_source import HttpSource
from .parsers import JsonParser, LineParser, RawParser, RegexParser, SplitParser

__all__ = [
    "BaseParser",
    "BaseSource",
    "ConfigError",
    "ExporterError",
    "ExporterSpec",
    "MetricKind",
    "ParseError",
    "SourceFetchError",
    "SourceKind",
    "CacheEntry",
    "MetricCache",
    "CommandSource",
    "ExporterCollector",
    "FileSource",
    "HttpSource",
    "JsonParser",
    "LineParser",
    "RawParser",
    "RegexParser",
    "SplitParser",
]
