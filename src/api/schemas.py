"""
Pydantic request/response schemas for the dashboard view service.
"""

from typing import Optional
from pydantic import BaseModel, Field


class PreferencesRequest(BaseModel):
    """Input schema for PUT /preferences (the setup flow)."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    language: str = Field("en", min_length=2, max_length=5, description="Language code (e.g. 'en', 'hi')")

    model_config = {"json_schema_extra": {
        "examples": [{"latitude": 28.6139, "longitude": 77.209, "language": "hi"}]
    }}


class PreferencesResponse(BaseModel):
    latitude: float
    longitude: float
    language: str


class StatusResponse(BaseModel):
    """Fetch lifecycle state."""
    status: str
    error_message: Optional[str] = None
    has_payload: bool
    generation: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    fetch_status: str
    version: str


class ChatRequest(BaseModel):
    """Input schema for POST /chat."""
    message: str = Field(..., min_length=1, description="Question for the farming assistant")


class ChatResponse(BaseModel):
    reply: str
    language: str
