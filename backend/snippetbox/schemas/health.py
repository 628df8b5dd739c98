"""
Snippetbox — Pydantic Response Schemas
=======================================

The HTML pages render ORM objects directly; the JSON health endpoint is the
only API contract and is described here for the OpenAPI docs.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
