"""
ResuVibe Backend Package

This package contains the resume critique backend:
- orchestrator: LLM provider clients, key rotation, fallback chain, JSON recovery
- prompts: Analysis prompt template
- analysis: Caller-facing analyze() contract and degraded payload
- utils: Document text extraction
- api: FastAPI application
"""

from resuvibe.analysis import analyze, analyze_resume, degraded_result, AnalysisResult
from resuvibe.orchestrator import (
    MultiProviderLLM,
    create_llm_client,
    LLMError,
    ErrorKind,
)

__all__ = [
    "analyze",
    "analyze_resume",
    "degraded_result",
    "AnalysisResult",
    "MultiProviderLLM",
    "create_llm_client",
    "LLMError",
    "ErrorKind",
]
