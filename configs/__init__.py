"""Config module initialization."""
from .settings import (
    # LLM configuration
    GEMINI_API_KEY,
    GEMINI_MODEL,
    GROQ_API_KEYS,
    GROQ_MODEL,
    GROQ_MODELS,
    GROQ_FALLBACK_MODELS,
    LLM_TEMPERATURE,
    MAX_LLM_TOKENS,
    LLM_REQUEST_TIMEOUT_SECONDS,
    ANALYSIS_TIMEOUT_SECONDS,
    # Request limits
    MIN_RESUME_CHARS,
    MAX_UPLOAD_BYTES,
    # System settings
    LOG_LEVEL,
    ALLOWED_ORIGINS,
    PORT,
    # Helpers
    parse_key_list,
    build_model_chain,
    # Validation
    ConfigurationError,
    validate_configuration,
)

__all__ = [
    # LLM configuration
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GROQ_API_KEYS",
    "GROQ_MODEL",
    "GROQ_MODELS",
    "GROQ_FALLBACK_MODELS",
    "LLM_TEMPERATURE",
    "MAX_LLM_TOKENS",
    "LLM_REQUEST_TIMEOUT_SECONDS",
    "ANALYSIS_TIMEOUT_SECONDS",
    # Request limits
    "MIN_RESUME_CHARS",
    "MAX_UPLOAD_BYTES",
    # System settings
    "LOG_LEVEL",
    "ALLOWED_ORIGINS",
    "PORT",
    # Helpers
    "parse_key_list",
    "build_model_chain",
    # Validation
    "ConfigurationError",
    "validate_configuration",
]
