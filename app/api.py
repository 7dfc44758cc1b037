"""HTTP route definitions for the exporter."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from prometheus_client import CONTENT_TYPE_LATEST

from app.schemas import HealthStatus, SensorReadingOut
from datastore.reading_store import ReadingStore, build_default_store
from services.sampler import TemperatureSampler, build_default_sampler


def get_store() -> ReadingStore:
    return build_default_store()


def get_sampler() -> TemperatureSampler:
    return build_default_sampler()


async def json_readings(
    store: ReadingStore = Depends(get_store),
) -> List[SensorReadingOut]:
    return [SensorReadingOut.from_reading(reading) for reading in store.current()]


def prometheus_metrics(
    store: ReadingStore = Depends(get_store),
) -> Response:
    return Response(store.exposition(), media_type=CONTENT_TYPE_LATEST)


async def healthcheck(
    sampler: TemperatureSampler = Depends(get_sampler),
) -> HealthStatus:
    snapshot = sampler.store.snapshot()
    return HealthStatus(
        sampler=sampler.state.value,
        devices=len(sampler.devices),
        cycle=snapshot.cycle,
        last_cycle_at=snapshot.completed_at,
    )


def build_router(metrics_path: str, json_path: str) -> APIRouter:
    """Routes whose paths are chosen at startup."""
    router = APIRouter()
    router.add_api_route(
        json_path,
        json_readings,
        methods=["GET"],
        response_model=List[SensorReadingOut],
        summary="Latest readings of every sensor read in the last cycle.",
    )
    router.add_api_route(
        metrics_path,
        prometheus_metrics,
        methods=["GET"],
        include_in_schema=False,
    )
    router.add_api_route(
        "/health",
        healthcheck,
        methods=["GET"],
        response_model=HealthStatus,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint.",
    )
    return router
