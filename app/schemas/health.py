"""Health check API schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness). The cache never affects status."""

    status: str = Field(default="ok", description="Service status")
    cache: Literal["connected", "unavailable", "disabled"] = Field(
        default="disabled", description="Redis cache state (advisory only)"
    )
    cache_failures: dict[str, int] = Field(
        default_factory=dict,
        description="Non-fatal cache failures per operation since startup",
    )
