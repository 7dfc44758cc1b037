"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.records import Reading


class SensorReadingOut(BaseModel):
    """One entry of the JSON snapshot endpoint."""

    sensorid: str = Field(..., description="Identifier of the 1-Wire device.")
    type: str = Field(..., description="Kind of measurement, e.g. temperature.")
    value: float

    @classmethod
    def from_reading(cls, reading: Reading) -> "SensorReadingOut":
        return cls(sensorid=reading.device_id, type=reading.kind.value, value=reading.value)


class HealthStatus(BaseModel):
    """Liveness details for the exporter."""

    status: str = "ok"
    sampler: str
    devices: int = Field(..., ge=0)
    cycle: int = Field(..., ge=0)
    last_cycle_at: Optional[datetime] = None
