"""
System router: liveness and configuration status.

Endpoints:
- GET /        Liveness message
- GET /health  Provider configuration and usage counters
"""

from fastapi import APIRouter

from ..schemas import HealthResponse, StatusResponse
from ..deps import get_llm


router = APIRouter(tags=["System"])


@router.get("/", response_model=StatusResponse)
async def root():
    return StatusResponse(status="ResuVibe API is running!")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Report which providers are usable. API keys are never included."""
    llm = get_llm()
    configured = llm.primary_configured or llm.secondary_configured

    return HealthResponse(
        status="healthy" if configured else "unconfigured",
        version="1.0.0",
        primary_configured=llm.primary_configured,
        primary_model=llm.primary_model if llm.primary_configured else None,
        groq_key_count=llm.dispatcher.rotator.size(),
        groq_models=list(llm.dispatcher.models),
        stats=llm.get_stats(),
    )
