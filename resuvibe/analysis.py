"""
Caller-facing analysis entry points.

analyze() is the contract used by every outer surface (API routes, CLI):
system prompt + user prompt in, parsed AnalysisResult out, or an LLMError
whose .kind says what failed.
"""
import copy
import logging
import threading
from typing import Any, Dict, List, Optional, TypedDict

from resuvibe.orchestrator import MultiProviderLLM, get_llm
from resuvibe.prompts import build_messages, build_system_prompt, build_user_prompt


logger = logging.getLogger("resuvibe.analysis")


class SectionFeedback(TypedDict):
    issues: List[str]
    suggested: List[str]


class InterviewQuestion(TypedDict):
    question: str
    hint: str


class AnalysisResult(TypedDict, total=False):
    """Expected model output. Not enforced: any parseable JSON object passes through."""
    name: str
    score: int
    label: str
    description: str
    recruiterSnapshot: str
    overview: str
    sections: Dict[str, SectionFeedback]
    roasts: List[str]
    improvements: List[str]
    missingKeywords: List[str]
    greenFlags: List[str]
    redFlags: List[str]
    interviewQuestions: List[InterviewQuestion]
    sourceText: str


# Returned to clients whenever analysis fails terminally, so the UI always
# has something to render. Never mixed with partial model output.
DEGRADED_RESULT: Dict[str, Any] = {
    "name": "Unknown",
    "score": 0,
    "label": "Server Error",
    "description": "The AI is currently overwhelmed or unreachable.",
    "recruiterSnapshot": "I can't even read this right now.",
    "overview": "",
    "sections": {},
    "roasts": ["Server connection failed", "Try again later", "Check your internet"],
    "improvements": ["Refresh the page", "Check API status", "Contact support"],
}


def degraded_result(error: str = "internal_error") -> Dict[str, Any]:
    """A fresh copy of the degraded payload tagged with an error code (usually an ErrorKind value)."""
    result = copy.deepcopy(DEGRADED_RESULT)
    result["error"] = error
    return result


def analyze(
    system_prompt: str,
    user_prompt: str,
    llm: Optional[MultiProviderLLM] = None,
    cancel_event: Optional[threading.Event] = None,
) -> AnalysisResult:
    """
    Send one system + user prompt through the provider fallback chain.

    Args:
        system_prompt: Instructions for the model
        user_prompt: Resume (and job description) text
        llm: Client to use; defaults to the process-wide client
        cancel_event: Set by the caller to stop before the next attempt

    Raises:
        LLMError: Any terminal failure; inspect .kind
    """
    llm = llm or get_llm()
    return llm.call(build_messages(system_prompt, user_prompt), cancel_event=cancel_event)


def analyze_resume(
    resume_text: str,
    job_description: Optional[str] = None,
    llm: Optional[MultiProviderLLM] = None,
    cancel_event: Optional[threading.Event] = None,
) -> AnalysisResult:
    """Build the prompts for a resume, analyze it and attach the source text."""
    logger.info("Analyzing resume (%d chars, job description: %s)",
                len(resume_text), "yes" if job_description else "no")
    result = analyze(
        build_system_prompt(job_description),
        build_user_prompt(resume_text, job_description),
        llm=llm,
        cancel_event=cancel_event,
    )
    return {**result, "sourceText": resume_text}
