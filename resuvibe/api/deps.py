"""
Shared dependencies for the ResuVibe API.

Provides:
- Structured logging
- Singleton LLM client (one key rotator shared by every request)
- Configuration constants for API behavior
"""

import logging

from configs import LOG_LEVEL
from resuvibe.orchestrator import get_llm, reset_llm


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

def setup_logging() -> logging.Logger:
    """Configure structured logging for the API."""
    logger = logging.getLogger("resuvibe")

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    return logger


logger = setup_logging()


# Singleton LLM client, shared with the CLI and library callers of analyze()
__all__ = ["setup_logging", "logger", "get_llm", "reset_llm"]
