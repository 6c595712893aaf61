"""
Redash exporter entry point.

Reads configuration from the environment (``REDASH_EXPORTER_*`` plus
``REDASH_API_KEY``), starts the poll loop and serves ``/metrics``.

Usage:
    REDASH_API_KEY=... python -m redash_exporter
"""

from __future__ import annotations

import logging

import uvicorn

from .config import settings
from .main import app

logger = logging.getLogger("redash_exporter")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request URL at INFO, and ours carry the api key.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    configure_logging(settings.log_level)
    if not settings.api_key.get_secret_value():
        logger.warning("REDASH_API_KEY is not set; Redash will reject the status requests.")
    logger.info("start Redash exporter.")
    logger.info(
        "Polling %s every %ss, serving on %s:%s",
        settings.redash_base_url,
        settings.metrics_interval_seconds,
        settings.listen_host,
        settings.listen_port,
    )
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
