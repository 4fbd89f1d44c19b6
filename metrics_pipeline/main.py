"""FastAPI application exposing health and live metric values for the pipeline."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import Depends, FastAPI
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response

from metrics_pipeline import __version__
from metrics_pipeline.collection import CollectionScheduler, Collector, Counter, Gauge
from metrics_pipeline.config import Settings, get_settings
from metrics_pipeline.lib.logger import configure_logging, get_logger

REQUEST_COUNTER_NAME = "http_requests"
REQUEST_LATENCY_NAME = "http_request_latency_ms"


def get_collector(request: Request) -> Collector:
    collector: Collector | None = getattr(request.app.state, "collector", None)
    if collector is None:
        raise RuntimeError("Metrics collector not configured on application state")
    return collector


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; the collector and its output file only exist while it is served."""

    settings = settings or get_settings()
    configure_logging(level=settings.log_level, diagnostic_path=settings.diagnostic_log_path)
    logger = get_logger("metrics_pipeline.main")

    requests_counter = Counter(REQUEST_COUNTER_NAME)
    latency_gauge = Gauge(REQUEST_LATENCY_NAME)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        collector = Collector(settings.output_path, logger=logger)
        collector.add_metric(requests_counter)
        collector.add_metric(latency_gauge)
        scheduler = CollectionScheduler(collector, settings.collect_interval_seconds, logger=logger)
        app.state.collector = collector
        app.state.scheduler = scheduler
        scheduler.start()
        logger.info("Collection scheduler started", extra={"interval_seconds": settings.collect_interval_seconds})
        try:
            yield
        finally:
            scheduler.stop(final=True)
            collector.close()
            app.state.collector = None
            app.state.scheduler = None
            logger.info("Collection scheduler stopped", extra={"cycles": scheduler.cycles})

    app = FastAPI(title="Metrics Pipeline", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.collector = None
    app.state.scheduler = None
    app.state.request_counter = requests_counter
    app.state.request_latency = latency_gauge

    @app.middleware("http")
    async def record_request(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        requests_counter.increment()
        latency_gauge.update((time.perf_counter() - started) * 1000)
        return response

    @app.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> JSONResponse:
        """Return liveness response for uptime monitoring."""
        payload = {"ok": True, "data": {"status": "healthy"}}
        return JSONResponse(content=payload)

    @app.get("/metrics", tags=["system"], summary="Current metric values")
    async def metrics_endpoint(collector: Collector = Depends(get_collector)) -> JSONResponse:
        """Return values accumulated since the last collection cycle, without resetting them."""
        return JSONResponse({"ok": True, "data": collector.values()})

    return app
