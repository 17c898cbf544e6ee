"""
ResuVibe command-line entry point.

Analyzes a resume without running the API server and prints the result
as JSON.

Usage:
    python -m resuvibe.main resume.pdf
    python -m resuvibe.main resume.docx --job-description jd.txt
    python -m resuvibe.main --text "Jane Doe, Software Engineer ..."
"""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Optional

from configs import ConfigurationError, MIN_RESUME_CHARS, validate_configuration
from resuvibe.analysis import analyze_resume
from resuvibe.orchestrator import LLMError
from resuvibe.utils.document_text import DocumentExtractionError, extract_text


def _read_document(path: str) -> str:
    file_path = Path(path)
    content_type, _ = mimetypes.guess_type(file_path.name)
    return extract_text(file_path.name, content_type, file_path.read_bytes())


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI usage."""
    parser = argparse.ArgumentParser(
        description="ResuVibe - recruiter-style resume critique",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m resuvibe.main resume.pdf
  python -m resuvibe.main resume.docx --job-description jd.txt
  python -m resuvibe.main --text "Jane Doe, Software Engineer ..."
        """
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Resume file (PDF, DOCX or TXT)"
    )
    parser.add_argument(
        "--text", "-t",
        type=str,
        help="Resume text instead of a file"
    )
    parser.add_argument(
        "--job-description", "-j",
        type=str,
        help="File containing a job description to score against"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log provider attempts to stderr"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.file and not args.text:
        parser.print_help()
        print("\nError: Please provide a resume file or --text", file=sys.stderr)
        return 1

    try:
        validate_configuration()
        resume_text = args.text.strip() if args.text else _read_document(args.file)
        job_description = _read_document(args.job_description) if args.job_description else None
    except (ConfigurationError, DocumentExtractionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if len(resume_text) < MIN_RESUME_CHARS:
        print(f"Error: resume text is too short (at least {MIN_RESUME_CHARS} characters).", file=sys.stderr)
        return 1

    try:
        result = analyze_resume(resume_text, job_description)
    except LLMError as e:
        print(f"Analysis failed [{e.kind.value}]: {e}", file=sys.stderr)
        return 1

    result.pop("sourceText", None)
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
