"""Load export.yaml into ExporterSpec objects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from collectors import (
    BaseParser,
    BaseSource,
    CommandSource,
    ConfigError,
    ExporterSpec,
    FileSource,
    HttpSource,
    JsonParser,
    LineParser,
    MetricKind,
    RawParser,
    RegexParser,
    SplitParser,
)

logger = logging.getLogger(__name__)


def _int_field(section: dict, key: str, where: str, default: int = 0) -> int:
    value = section.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}: '{key}' must be an integer, got {value!r}")
    return value


def _str_field(section: dict, key: str, where: str) -> str:
    value = section.get(key)
    if value is None or value == "":
        raise ConfigError(f"{where}: '{key}' is required")
    return str(value)


def _build_source(exp: dict, where: str) -> BaseSource:
    stype = exp.get("type")
    if stype == "command":
        return CommandSource(command=_str_field(exp, "command", where))
    if stype == "http":
        return HttpSource(url=_str_field(exp, "url", where))
    if stype == "file":
        return FileSource(file_path=_str_field(exp, "file_path", where))
    raise ConfigError(f"{where}: unsupported exporter type: {stype!r}")


def _build_parser(section: Any, where: str) -> BaseParser:
    if section is None:
        return RawParser()
    if not isinstance(section, dict):
        raise ConfigError(f"{where}: 'parser' must be a mapping")

    ptype = section.get("type") or "raw"
    if ptype == "regex":
        return RegexParser(pattern=_str_field(section, "pattern", where))
    if ptype == "json":
        return JsonParser(json_path=str(section.get("json_path") or ""))
    if ptype == "line":
        return LineParser(line_num=_int_field(section, "line_num", where))
    if ptype == "split":
        return SplitParser(
            split=str(section.get("split") or ""),
            index=_int_field(section, "index", where),
        )
    if ptype != "raw":
        logger.warning(f"{where}: unknown parser type {ptype!r}, using the whole output as the value")
    return RawParser()


def _build_exporter(exp: Any, position: int) -> ExporterSpec:
    if not isinstance(exp, dict):
        raise ConfigError(f"exporter #{position}: must be a mapping")

    name = exp.get("name")
    if not name:
        raise ConfigError(f"exporter #{position}: 'name' is required")
    where = f"exporter '{name}'"

    interval = _int_field(exp, "interval", where)
    if interval < 0:
        raise ConfigError(f"{where}: 'interval' must be >= 0, got {interval}")

    metric_type = exp.get("metric_type") or "gauge"
    try:
        kind = MetricKind(metric_type)
    except ValueError:
        raise ConfigError(f"{where}: unsupported metric_type: {metric_type!r}") from None

    labels = exp.get("labels") or {}
    if not isinstance(labels, dict):
        raise ConfigError(f"{where}: 'labels' must be a mapping")

    return ExporterSpec(
        name=str(name),
        source=_build_source(exp, where),
        parser=_build_parser(exp.get("parser"), where),
        interval=interval,
        metric_type=kind,
        labels={str(k): str(v) for k, v in labels.items()},
        description=str(exp.get("description") or ""),
    )


def parse_config(config: Any) -> list[ExporterSpec]:
    """Validate an already-decoded config document."""
    if config is None:
        return []
    if not isinstance(config, dict):
        raise ConfigError("top level of the config must be a mapping")

    entries = config.get("exporters") or []
    if not isinstance(entries, list):
        raise ConfigError("'exporters' must be a list")

    exporters: list[ExporterSpec] = []
    seen: set[str] = set()
    for position, exp in enumerate(entries):
        spec = _build_exporter(exp, position)
        if spec.name in seen:
            raise ConfigError(f"duplicate exporter name: {spec.name!r}")
        seen.add(spec.name)
        exporters.append(spec)
    return exporters


def load_config(path: Path | str) -> list[ExporterSpec]:
    """Parse export.yaml and return the exporter list."""
    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse {path}: {e}") from e
    return parse_config(config)
