"""Orchestrator module initialization."""

from .errors import (
    ErrorKind,
    LLMError,
    ProviderConfigurationError,
    NoCredentialsError,
    RateLimitError,
    TransportError,
    ParseError,
    AllAttemptsExhaustedError,
    AllProvidersFailedError,
    AnalysisCancelledError,
)
from .json_utils import sanitize
from .key_rotator import KeyRotator
from .llm_client import (
    LLMProvider,
    StatusCategory,
    Message,
    ProviderReply,
    LLMClient,
    GeminiClient,
    GroqClient,
)
from .dispatcher import ProviderDispatcher, AttemptRecord
from .fallback import MultiProviderLLM, create_llm_client, get_llm, reset_llm

__all__ = [
    "ErrorKind",
    "LLMError",
    "ProviderConfigurationError",
    "NoCredentialsError",
    "RateLimitError",
    "TransportError",
    "ParseError",
    "AllAttemptsExhaustedError",
    "AllProvidersFailedError",
    "AnalysisCancelledError",
    "sanitize",
    "KeyRotator",
    "LLMProvider",
    "StatusCategory",
    "Message",
    "ProviderReply",
    "LLMClient",
    "GeminiClient",
    "GroqClient",
    "ProviderDispatcher",
    "AttemptRecord",
    "MultiProviderLLM",
    "create_llm_client",
    "get_llm",
    "reset_llm",
]
