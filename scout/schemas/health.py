"""
Schema for the service health probe.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness payload for GET /health."""

    status: str = Field(default="ok", examples=["ok"])
    service: str = Field(default="global-gourmet-scout")
    version: str = Field(..., examples=["0.1.0"])
    storage_backend: str = Field(
        ...,
        description="Configured key-value backend: memory, file or supabase",
        examples=["file"]
    )
