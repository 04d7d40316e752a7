"""Prometheus collector that runs the fetch -> parse -> build pipeline per exporter."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from prometheus_client.metrics_core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from .base import ExporterSpec, MetricKind, ParseError, SourceFetchError
from .cache import CacheEntry, MetricCache

logger = logging.getLogger(__name__)


def build_metric(exporter: ExporterSpec, value: float | None = None) -> Metric:
    """Constant-label metric family for ``exporter``, sample-less when value is None."""
    family = CounterMetricFamily if exporter.metric_type is MetricKind.COUNTER else GaugeMetricFamily
    if value is None:
        return family(exporter.name, exporter.description)
    metric = family(exporter.name, exporter.description, labels=list(exporter.labels))
    metric.add_metric(list(exporter.labels.values()), value)
    return metric


class ExporterCollector(Collector):
    """Collects one metric per configured exporter on every scrape.

    Values are cached per exporter for ``interval`` seconds. A failed fetch or
    parse is logged and reported as 0.0, so every exporter always shows up in
    the scrape output.
    """

    def __init__(self, exporters: Iterable[ExporterSpec], cache: MetricCache | None = None) -> None:
        self.exporters = tuple(exporters)
        self.cache = cache if cache is not None else MetricCache()

    def describe(self) -> Iterator[Metric]:
        for exporter in self.exporters:
            yield build_metric(exporter)

    def collect(self) -> Iterator[Metric]:
        for exporter in self.exporters:
            yield self.collect_one(exporter)

    def collect_one(self, exporter: ExporterSpec) -> Metric:
        entry = self.cache.get(exporter.name)
        if entry is not None and self.cache.is_fresh(entry, exporter.interval):
            logger.debug(f"{exporter.name}: serving cached value {entry.value}")
            return entry.metric

        value = self._fetch_value(exporter)
        metric = build_metric(exporter, value)
        self.cache.put(exporter.name, CacheEntry(metric=metric, value=value, fetched_at=self.cache.now()))
        return metric

    def _fetch_value(self, exporter: ExporterSpec) -> float:
        try:
            value = exporter.fetch_value()
        except (SourceFetchError, ParseError) as e:
            logger.error(f"Error fetching data for {exporter.name}: {e} ({exporter.source.kind.value} {exporter.source.locator})")
            return 0.0
        logger.debug(f"{exporter.name}: fetched {value} from {exporter.source.kind.value} {exporter.source.locator}")
        return value
