"""
Error taxonomy for the LLM call layer.

Every error raised by the orchestrator package derives from LLMError and
carries an ErrorKind so the API layer can report what went wrong without
inspecting message text.
"""
from enum import Enum
from typing import Any, List, Optional

from configs import ConfigurationError


class ErrorKind(str, Enum):
    """Terminal error categories exposed to callers."""
    RATE_LIMITED = "rate_limited"
    PARSE = "parse"
    CONFIG = "config"
    ALL_EXHAUSTED = "all_exhausted"
    TRANSPORT = "transport"
    CANCELLED = "cancelled"


class LLMError(Exception):
    """Base exception for LLM errors."""
    kind = ErrorKind.TRANSPORT


class ProviderConfigurationError(LLMError, ConfigurationError):
    """Raised when no provider is usable at all (no primary key, no Groq keys)."""
    kind = ErrorKind.CONFIG


class NoCredentialsError(LLMError):
    """Raised when a credential is requested from an empty key set."""
    kind = ErrorKind.CONFIG


class RateLimitError(LLMError):
    """Raised when a provider reports quota exhaustion or too many requests."""
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str, provider: Optional[str] = None, model: Optional[str] = None):
        super().__init__(message)
        self.provider = provider
        self.model = model


class TransportError(LLMError):
    """Raised when a provider call fails for any reason other than rate limiting."""
    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.model = model
        self.status_code = status_code


class ParseError(LLMError):
    """Raised when no JSON object can be recovered from a completion."""
    kind = ErrorKind.PARSE

    def __init__(self, message: str, raw_text: Any = None):
        super().__init__(message)
        self.raw_text = raw_text


class AllAttemptsExhaustedError(LLMError):
    """Raised after every (model, key) combination of a provider has failed."""
    kind = ErrorKind.ALL_EXHAUSTED

    def __init__(self, message: str, attempts: Optional[List[Any]] = None):
        super().__init__(message)
        self.attempts = list(attempts or [])


class AllProvidersFailedError(AllAttemptsExhaustedError):
    """Raised when the primary was rate limited and the secondary is exhausted or unusable."""

    def __init__(
        self,
        message: str,
        attempts: Optional[List[Any]] = None,
        primary_reason: Optional[str] = None,
    ):
        super().__init__(message, attempts)
        self.primary_reason = primary_reason


class AnalysisCancelledError(LLMError):
    """Raised when the caller cancelled the request before it finished."""
    kind = ErrorKind.CANCELLED
