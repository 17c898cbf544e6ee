"""
Pydantic schemas for the ResuVibe API.

Analysis results are returned as the model produced them (no schema
validation), so only requests and the fixed-shape responses live here.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# ============================================================
# REQUEST MODELS
# ============================================================

class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze."""
    resume_text: Optional[str] = Field(None, alias="resumeText", description="Plain resume text", max_length=50000)
    job_description: Optional[str] = Field(
        None,
        alias="jobDescription",
        description="Optional job description to score the resume against",
        max_length=20000,
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"resumeText": "Jane Doe\nSoftware Engineer Intern at Acme (2024)..."},
                {
                    "resumeText": "Jane Doe\nSoftware Engineer Intern at Acme (2024)...",
                    "jobDescription": "Backend intern, Python, FastAPI, PostgreSQL",
                },
            ]
        },
    }


# ============================================================
# RESPONSE MODELS
# ============================================================

class ErrorResponse(BaseModel):
    """Body of 4xx responses."""
    error: str


class StatusResponse(BaseModel):
    """Response for GET /."""
    status: str


class HealthResponse(BaseModel):
    """Response for GET /health."""
    status: str = "healthy"
    version: str = "1.0.0"
    primary_configured: bool = False
    primary_model: Optional[str] = None
    groq_key_count: int = 0
    groq_models: List[str] = []
    stats: Dict[str, Any] = {}
