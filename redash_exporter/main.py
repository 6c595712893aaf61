from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import HTMLResponse
from prometheus_client import CONTENT_TYPE_LATEST

from .config import Settings, settings
from .metrics.registry import MetricRegistry
from .services.collector import PollLoop
from .services.fetcher import StatusFetcher

ROOT_DOC = """<html>
<head><title>Redash Exporter</title></head>
<body>
<h1>Redash Exporter</h1>
<p><a href="/metrics">Metrics</a></p>
</body>
</html>
"""


def create_app(
    app_settings: Settings,
    registry: Optional[MetricRegistry] = None,
    poll_loop: Optional[PollLoop] = None,
) -> FastAPI:
    registry = registry or MetricRegistry()
    if poll_loop is None:
        fetcher = StatusFetcher(
            base_url=app_settings.redash_base_url,
            api_key=app_settings.api_key.get_secret_value(),
            timeout_seconds=app_settings.request_timeout_seconds,
        )
        poll_loop = PollLoop(
            fetcher=fetcher,
            sink=registry,
            interval_seconds=app_settings.metrics_interval_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        poll_loop.start()
        try:
            yield
        finally:
            await poll_loop.stop()
            aclose = getattr(poll_loop.fetcher, "aclose", None)
            if aclose is not None:
                await aclose()

    app = FastAPI(title=app_settings.app_name, lifespan=lifespan)
    app.state.registry = registry
    app.state.poll_loop = poll_loop

    @app.get("/", include_in_schema=False)
    async def root() -> HTMLResponse:
        return HTMLResponse(ROOT_DOC)

    @app.get("/metrics")
    async def metrics(registry: MetricRegistry = Depends(get_registry)) -> Response:
        return Response(content=registry.exposition(), media_type=CONTENT_TYPE_LATEST)

    return app


def get_registry(request: Request) -> MetricRegistry:
    return request.app.state.registry


app = create_app(settings)
