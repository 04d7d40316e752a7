"""Per-exporter metric cache guarded by a reader/writer lock."""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from prometheus_client.metrics_core import Metric


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True)
class CacheEntry:
    metric: Metric
    value: float
    fetched_at: float


class MetricCache:
    """Last materialized metric per exporter name.

    Entries are overwritten in place and live as long as the cache does.
    ``clock`` must be monotonic; tests pass a fake one to move time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

    def now(self) -> float:
        return self._clock()

    def get(self, name: str) -> CacheEntry | None:
        with self._lock.read():
            return self._entries.get(name)

    def put(self, name: str, entry: CacheEntry) -> None:
        with self._lock.write():
            self._entries[name] = entry

    def is_fresh(self, entry: CacheEntry, interval: float, now: float | None = None) -> bool:
        if now is None:
            now = self.now()
        return now - entry.fetched_at < interval

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, name: str) -> bool:
        with self._lock.read():
            return name in self._entries
