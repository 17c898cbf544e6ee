"""
Analysis router: resume critique from pasted text or an uploaded document.

Endpoints:
- POST /analyze         Analyze resume text (JSON body)
- POST /upload-analyze  Extract text from a PDF/DOCX/TXT upload, then analyze
"""

import asyncio
import threading
from typing import Any, Dict, Optional

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from configs import ANALYSIS_TIMEOUT_SECONDS, MAX_UPLOAD_BYTES, MIN_RESUME_CHARS
from resuvibe.analysis import analyze_resume, degraded_result
from resuvibe.orchestrator import LLMError
from resuvibe.utils.document_text import DocumentExtractionError, extract_text

from ..schemas import AnalyzeRequest, ErrorResponse
from ..deps import get_llm, logger


router = APIRouter(tags=["Analysis"])

_ERROR_RESPONSES = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


# =============================================================================
# HELPERS
# =============================================================================

def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def _run_analysis(resume_text: str, job_description: Optional[str]) -> Dict[str, Any]:
    """
    Run the blocking fallback chain in a worker thread under an overall deadline.

    Terminal failures never escape: the client always gets a renderable
    payload, with the failure kind in its "error" field.
    """
    llm = get_llm()
    cancel_event = threading.Event()

    try:
        return await asyncio.wait_for(
            asyncio.to_thread(analyze_resume, resume_text, job_description, llm, cancel_event),
            timeout=ANALYSIS_TIMEOUT_SECONDS,
        )

    except asyncio.TimeoutError:
        # Stops the worker before its next provider attempt
        cancel_event.set()
        logger.error("Analysis timed out after %.0fs", ANALYSIS_TIMEOUT_SECONDS)
        return degraded_result("timeout")

    except LLMError as e:
        logger.warning("Analysis failed [%s]: %s", e.kind.value, e)
        return degraded_result(e.kind.value)

    except Exception:
        logger.exception("Unexpected analysis failure")
        return degraded_result()


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/analyze", responses=_ERROR_RESPONSES)
async def analyze(request: AnalyzeRequest):
    """Analyze pasted resume text, optionally against a job description."""
    resume_text = (request.resume_text or "").strip()
    if len(resume_text) < MIN_RESUME_CHARS:
        return _bad_request(
            f"Resume text is too short. Please provide at least {MIN_RESUME_CHARS} characters."
        )

    return await _run_analysis(resume_text, request.job_description)


@router.post("/upload-analyze", responses=_ERROR_RESPONSES)
async def upload_analyze(
    file: Optional[UploadFile] = File(None),
    job_description: Optional[str] = Form(None, alias="jobDescription"),
):
    """Extract text from an uploaded PDF, DOCX or TXT resume and analyze it."""
    if file is None:
        return _bad_request("No file uploaded.")

    data = await file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        return _bad_request(f"File is too large. Maximum size is {MAX_UPLOAD_BYTES // (1024 * 1024)} MB.")

    try:
        extracted = await asyncio.to_thread(extract_text, file.filename, file.content_type, data)
    except DocumentExtractionError as e:
        return _bad_request(str(e))

    if len(extracted) < MIN_RESUME_CHARS:
        return _bad_request("Could not extract enough text from the file.")

    logger.info("Extracted %d chars from upload %r", len(extracted), file.filename)
    return await _run_analysis(extracted, job_description)
