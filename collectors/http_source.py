"""Source that GETs an HTTP endpoint and returns the response body."""

from __future__ import annotations

import time
from dataclasses import dataclass

import httpx

from .base import BaseSource, SourceFetchError, SourceKind

HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class HttpSource(BaseSource):
    url: str
    kind = SourceKind.HTTP
    transport: httpx.BaseTransport | None = None

    @property
    def locator(self) -> str:
        return self.url

    def fetch(self) -> str:
        # HTTP_TIMEOUT bounds the whole request, not just each socket operation.
        # Status codes are not checked, an error page just fails to parse later.
        deadline = time.monotonic() + HTTP_TIMEOUT
        try:
            with httpx.Client(timeout=HTTP_TIMEOUT, transport=self.transport) as client:
                with client.stream("GET", self.url) as resp:
                    chunks = []
                    for chunk in resp.iter_bytes():
                        if time.monotonic() > deadline:
                            raise SourceFetchError(f"GET {self.url} failed: timed out after {HTTP_TIMEOUT}s")
                        chunks.append(chunk)
                    encoding = resp.encoding or "utf-8"
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SourceFetchError(f"GET {self.url} failed: {e}") from e

        if time.monotonic() > deadline:
            raise SourceFetchError(f"GET {self.url} failed: timed out after {HTTP_TIMEOUT}s")
        body = b"".join(chunks)
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")
