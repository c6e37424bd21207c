"""Pydantic schema for the health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus datastore and object-store reachability."""

    status: Literal["ok", "degraded"] = Field(description="Overall service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity status",
    )
    image_store: Literal["available", "unavailable"] = Field(
        description="Whether the image storage directory is writable",
    )
