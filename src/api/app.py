"""
FastAPI application serving projected dashboard views to the presentation layer.

Endpoints:
    GET  /health               — Health check
    GET  /status               — Fetch lifecycle state
    POST /refetch              — Re-run the all-data fetch
    GET  /preferences          — Stored location and language
    PUT  /preferences          — Save preferences (triggers a refetch)
    GET  /views/{name}         — overview | weather | soil | crops | analytics
    POST /chat                 — Forward a message to the chatbot endpoint
    GET  /metrics              — Prometheus metrics
"""

import logging
import sys
from dataclasses import asdict
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.api.schemas import (
    ChatRequest, ChatResponse, HealthResponse,
    PreferencesRequest, PreferencesResponse, StatusResponse,
)
from src.dashboard.config import DashboardConfig
from src.dashboard.errors import ChatbotApiError
from src.dashboard.orchestrator import FetchState, FetchStatus
from src.dashboard.preferences import UserPreferences
from src.dashboard.service import DashboardService

logger = logging.getLogger(__name__)

# ---- App setup ----
app = FastAPI(
    title="Kisaan Mitra Dashboard API",
    description="Page-specific agricultural telemetry views for the dashboard",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

VIEW_REQUESTS = Counter(
    "dashboard_view_requests_total", "View requests by page", ["view"],
)

# ---- Global service reference ----
service: DashboardService = None
api_version: str = "1.0.0"


def get_service() -> DashboardService:
    if service is None:
        raise HTTPException(status_code=503, detail="Dashboard service not started")
    return service


def _status(state: FetchState) -> StatusResponse:
    return StatusResponse(
        status=state.status.value,
        error_message=state.error_message,
        has_payload=state.payload is not None,
        generation=state.generation,
    )


@app.on_event("startup")
async def startup_event():
    global service
    if service is None:
        service = DashboardService.from_config(DashboardConfig.from_env())
    # Initial fetch uses blocking requests; keep it off the event loop
    state = await run_in_threadpool(service.start)
    logger.info("Initial fetch finished with status %s", state.status.value)


@app.on_event("shutdown")
async def shutdown_event():
    if service is not None:
        service.stop()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    state = get_service().snapshot()
    return HealthResponse(
        status="healthy" if state.status == FetchStatus.SUCCESS else "degraded",
        fetch_status=state.status.value,
        version=api_version,
    )


@app.get("/status", response_model=StatusResponse)
async def status():
    return _status(get_service().snapshot())


@app.post("/refetch", response_model=StatusResponse)
def refetch():
    """Re-run the fetch with the current preferences."""
    return _status(get_service().refetch())


@app.get("/preferences", response_model=PreferencesResponse)
async def get_preferences():
    return PreferencesResponse(**asdict(get_service().preferences()))


@app.put("/preferences", response_model=PreferencesResponse)
def put_preferences(request: PreferencesRequest):
    """Save preferences. The change listener refetches with the new values."""
    prefs = UserPreferences(
        latitude=request.latitude,
        longitude=request.longitude,
        language=request.language,
    )
    get_service().update_preferences(prefs)
    return PreferencesResponse(**asdict(prefs))


@app.get("/views/{name}")
async def get_view(name: str, display_defaults: bool = False):
    """
    Project one page view from the cached payload.

    `display_defaults` applies the Overview page literals to unresolved
    overview fields; it has no effect on other views.
    """
    svc = get_service()
    try:
        view = svc.view(name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if name == "overview" and display_defaults:
        view = view.with_display_defaults()

    VIEW_REQUESTS.labels(view=name).inc()
    return asdict(view)


@app.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest):
    """Forward a message to the chatbot using the stored location and language."""
    svc = get_service()
    try:
        reply = svc.ask(request.message)
    except ChatbotApiError as e:
        # No status means the chatbot server could not be reached
        code = 503 if e.status is None else 502
        raise HTTPException(status_code=code, detail=e.message)
    return ChatResponse(reply=reply, language=svc.preferences().language)


@app.get("/metrics")
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
