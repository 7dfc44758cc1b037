from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from app.api import build_router
from app.web import router as web_router
from logging_config import configure_logging
from services.sampler import build_default_sampler
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    sampler = build_default_sampler()
    # Discovery failures abort startup before any request is served.
    sampler.start()
    logger.info("Started", extra={"hostname": sampler.hostname, "device_count": len(sampler.devices)})
    try:
        yield
    finally:
        sampler.shutdown()
        build_default_sampler.cache_clear()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    app = FastAPI(
        title="OneWire Exporter",
        description="Publishes 1-Wire temperature readings as Prometheus metrics and JSON.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.metrics_path = settings.metrics_path
    app.state.json_path = settings.json_path
    app.include_router(build_router(settings.metrics_path, settings.json_path))
    app.include_router(web_router)
    return app

app = create_app()
