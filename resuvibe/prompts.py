"""
Prompt templates for resume analysis.

One template covers both modes; passing a job description switches on the
job-match rules and the extra output keys.
"""
from typing import List, Optional

from resuvibe.orchestrator import Message


SECTION_NAMES = ("summary", "experience", "projects", "education", "skills", "certifications")

_BASE_RULES = """You are "ResuVibe Recruiter AI", a Gen-Z technical recruiter who screens resumes in under 10 seconds. Your job: analyze how this resume FEELS to a recruiter, not just what it says.

CRITICAL OUTPUT RULES: Output ONLY valid JSON. ALL content MUST be on ONE SINGLE LINE. NO newlines, NO markdown, NO explanations. The JSON must be directly parsable.

NAME EXTRACTION (MANDATORY): Extract the candidate's full name from the first visible line or header. If no name is detectable, use "Unknown".

SCORING (0-100 INTEGER): Keep scores within +/-5 points for the same resume. Base the score on: Signal & relevance (30%), Proof of impact / metrics (25%), Clarity & scan-ability (20%), Technical fundamentals (15%), Polish & focus (10%).

VIBE LABEL (choose ONE based on the actual resume content): "Corporate-Heavy", "Startup-Ready", "Academic-Focused", "Resume-Padding Energy", "Generic Template Syndrome", "Balanced & Recruiter-Friendly".

RECRUITER SNAPSHOT: ONE sharp sentence that sounds like a real recruiter thinking silently after a quick scan.

DESCRIPTION: A concise 1-2 sentence explanation of the overall resume vibe. No praise without evidence.

OVERVIEW: ONE sentence summarizing the candidate's background.

ROASTS (EXACTLY 4): Savage, funny, conversational one-liners. Never boring bullet points like "No metrics to back up claims".

IMPROVEMENTS (EXACTLY 3): Actionable steps a student can achieve. No fake experience suggestions.

SECTIONS: For each section ({sections}) provide "issues" (2-3 specific critiques) and "suggested" (2-4 improved rewrites of the ACTUAL resume content). In "suggested" you MUST preserve every original detail (company names, titles, dates, project names, technologies, links, schools, certificates), NEVER invent metrics or percentages, and improve only wording and action verbs."""

_JOB_MATCH_RULES = """

JOB MATCH MODE: A job description is provided. Score the resume AGAINST this role: relevance to the listed requirements weighs most.

MISSING KEYWORDS: 5-10 important skills, tools or terms from the job description that the resume never mentions.

GREEN FLAGS (EXACTLY 3): Concrete reasons this candidate fits the role.

RED FLAGS (EXACTLY 3): Concrete reasons a recruiter for this role would hesitate.

INTERVIEW QUESTIONS (EXACTLY 4): Questions this recruiter would likely ask, each with a short "hint" on how to answer using the candidate's own experience."""

_SECTION_SHAPE = '{"issues": string[], "suggested": string[]}'

_BASE_FORMAT = (
    '{{"name": string, "score": number, "label": string, "description": string, '
    '"recruiterSnapshot": string, "overview": string, "sections": {{{sections}}}, '
    '"roasts": [string, string, string, string], "improvements": [string, string, string]{extra}}}'
)

_JOB_MATCH_FORMAT = (
    ', "missingKeywords": string[], "greenFlags": [string, string, string], '
    '"redFlags": [string, string, string], "interviewQuestions": [{"question": string, "hint": string}]'
)


def _has_job_description(job_description: Optional[str]) -> bool:
    return bool(job_description and job_description.strip())


def build_system_prompt(job_description: Optional[str] = None) -> str:
    """Build the system prompt; job-match rules are added when a job description is given."""
    job_mode = _has_job_description(job_description)
    sections = ", ".join(f'"{name}": {_SECTION_SHAPE}' for name in SECTION_NAMES)
    json_format = _BASE_FORMAT.format(
        sections=sections,
        extra=_JOB_MATCH_FORMAT if job_mode else "",
    )

    prompt = _BASE_RULES.format(sections=", ".join(SECTION_NAMES))
    if job_mode:
        prompt += _JOB_MATCH_RULES
    return f"{prompt}\n\nJSON FORMAT (EXACT KEYS):\n{json_format}"


def build_user_prompt(resume_text: str, job_description: Optional[str] = None) -> str:
    prompt = f"Resume Text:\n{resume_text.strip()}"
    if _has_job_description(job_description):
        prompt += f"\n\nJob Description:\n{job_description.strip()}"
    return prompt


def build_messages(system_prompt: str, user_prompt: str) -> List[Message]:
    """The fixed call shape: one system message, then one user message."""
    return [
        Message(role="system", content=system_prompt),
        Message(role="user", content=user_prompt),
    ]
