#!/usr/bin/env python3
"""Custom Exporter: turns command output, HTTP bodies and files into Prometheus metrics.

Usage:
    python exporter.py                                # export.yaml, port 9100
    python exporter.py --config my.yaml --port 9200   # custom config and port
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from collectors import ConfigError, ExporterCollector, ExporterSpec, MetricCache
from config import load_config

logger = logging.getLogger("exporter")

STATIC_DIR = Path(__file__).parent / "static"


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

def create_app(exporters: Iterable[ExporterSpec], cache: MetricCache | None = None) -> FastAPI:
    """Build the app around a private registry holding one ExporterCollector."""
    collector = ExporterCollector(exporters, cache=cache)
    registry = CollectorRegistry()
    registry.register(collector)
    start_time = time.time()

    app = FastAPI(title="Custom Exporter", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.collector = collector
    app.state.registry = registry

    # Plain def: Starlette runs it in its thread pool, fetches block only this scrape
    @app.get("/metrics")
    def metrics() -> Response:
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health", response_class=HTMLResponse)
    async def health() -> str:
        return "OK"

    @app.get("/uptime", response_class=PlainTextResponse)
    async def uptime() -> str:
        return f"{time.time() - start_time:.0f}"

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

    return app


# ---------------------------------------------------------------------------
# CLI entrypoint
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Custom Exporter: Prometheus metrics from commands, URLs and files")
    parser.add_argument("--config", default="export.yaml", help="Path to the YAML export configuration file")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=9100, help="Serve app at the specified port (default: 9100)")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        exporters = load_config(args.config)
    except ConfigError as e:
        print(f"Failed to load configuration: {e}")
        sys.exit(1)

    if not exporters:
        logger.warning(f"No exporters configured in {args.config}, /metrics will be empty")

    app = create_app(exporters)
    logger.info(f"Custom Exporter starting on port {args.port}")
    logger.info(f"Metrics endpoint: http://localhost:{args.port}/metrics")
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
