"""Pytest configuration and shared fixtures"""
from __future__ import annotations

import pytest

from collectors import BaseSource, ExporterSpec, MetricCache, RawParser, SourceKind


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubSource(BaseSource):
    """Source returning queued payloads and counting fetches."""

    kind = SourceKind.COMMAND

    def __init__(self, *payloads: str | Exception) -> None:
        self.payloads = list(payloads)
        self.calls = 0

    @property
    def locator(self) -> str:
        return "stub"

    def fetch(self) -> str:
        self.calls += 1
        payload = self.payloads[min(self.calls, len(self.payloads)) - 1]
        if isinstance(payload, Exception):
            raise payload
        return payload


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MetricCache(clock=clock)


@pytest.fixture
def make_exporter():
    """Build an ExporterSpec around a StubSource."""

    def _make(name="test_metric", payloads=("1",), parser=None, **kwargs) -> ExporterSpec:
        return ExporterSpec(
            name=name,
            source=StubSource(*payloads),
            parser=parser or RawParser(),
            **kwargs,
        )

    return _make
