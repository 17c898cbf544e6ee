"""
ResuVibe FastAPI Application.

This module provides the REST API layer for the resume critique backend.
All provider logic is delegated to resuvibe.orchestrator; no LLM calls here.

Endpoints:
- POST /analyze - Analyze pasted resume text
- POST /upload-analyze - Analyze an uploaded PDF/DOCX/TXT resume
- GET /health - Provider configuration status
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configs import ALLOWED_ORIGINS, PORT, validate_configuration, ConfigurationError

from .deps import get_llm, logger
from .routers import analyze, system


# ============================================================
# APP LIFECYCLE
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        config = validate_configuration()
        logger.info(
            "ResuVibe API started. Primary: %s, Groq keys: %d",
            config["primary_model"] if config["primary_configured"] else "none",
            config["groq_key_count"],
        )
    except ConfigurationError as e:
        # Still serve requests: /analyze answers with the degraded payload
        logger.error("%s", e)
    get_llm()
    yield
    logger.info("ResuVibe API shutting down.")


# ============================================================
# FASTAPI APP
# ============================================================

app = FastAPI(
    title="ResuVibe API",
    description="Resume critique backend with multi-provider LLM fallback",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(analyze.router)


# ============================================================
# RUN DIRECTLY (for development)
# ============================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
