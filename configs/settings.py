"""
Configuration management for the ResuVibe backend.

All values are read once at import time from the environment (and an
optional .env file) and are immutable for the life of the process.
Provider credentials are validated lazily: a missing Groq key set or a
missing Gemini key is not an import error, it only makes that provider
unusable. validate_configuration() reports what is usable.
"""
import os
from typing import List, Optional, Tuple
from dotenv import load_dotenv

# interpolate=False prevents $VAR expansion in values (API keys may contain $)
load_dotenv(interpolate=False)


# =============================================================================
# CONFIGURATION VALIDATION
# =============================================================================

class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


PLACEHOLDER_VALUES = {
    "your_groq_api_key_here",
    "your_gemini_api_key_here",
    "your_google_api_key_here",
    "gsk_XXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX",
    "AIzaSy_XXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX",
}


def _clean_key(value: Optional[str]) -> Optional[str]:
    """Return a stripped key, or None for blanks and template placeholders."""
    if value is None:
        return None
    value = value.strip()
    if not value or value in PLACEHOLDER_VALUES:
        return None
    return value


def parse_key_list(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Parse a comma-delimited list of API keys.

    Order is preserved, blanks/placeholders are dropped and duplicates are
    removed (first occurrence wins) so the rotator never hands out the
    same account twice per cycle.
    """
    keys: List[str] = []
    for part in (raw or "").split(","):
        key = _clean_key(part)
        if key and key not in keys:
            keys.append(key)
    return tuple(keys)


def build_model_chain(preferred: Optional[str], fallbacks: Tuple[str, ...]) -> Tuple[str, ...]:
    """Put the preferred model (if any) ahead of the built-in fallback chain."""
    chain: List[str] = []
    for model in ((preferred,) if preferred else ()) + fallbacks:
        model = model.strip()
        if model and not model.startswith("groq/"):
            model = f"groq/{model}"
        if model and model not in chain:
            chain.append(model)
    return tuple(chain)


def _load_groq_keys() -> Tuple[str, ...]:
    keys = parse_key_list(os.getenv("GROQ_API_KEYS"))
    if not keys:
        keys = parse_key_list(os.getenv("GROQ_API_KEY"))
    return keys


def _load_gemini_key() -> Optional[str]:
    return _clean_key(os.getenv("GEMINI_API_KEY")) or _clean_key(os.getenv("GOOGLE_API_KEY"))


# =============================================================================
# LLM CONFIGURATION
# =============================================================================

# Primary provider: a single Gemini key, one fixed model, no rotation
GEMINI_API_KEY = _load_gemini_key()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini/gemini-2.0-flash")

# Secondary provider: several Groq keys rotated round-robin
GROQ_API_KEYS = _load_groq_keys()

# Built-in fallback chain, most preferred first. GROQ_MODEL only overrides
# the head of the chain; the rest always stays available.
GROQ_FALLBACK_MODELS = (
    "groq/llama-3.3-70b-versatile",
    "groq/llama-3.1-8b-instant",
    "groq/gemma2-9b-it",
)
GROQ_MODEL = os.getenv("GROQ_MODEL", "").strip() or None
GROQ_MODELS = build_model_chain(GROQ_MODEL, GROQ_FALLBACK_MODELS)

LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
MAX_LLM_TOKENS = int(os.getenv("MAX_LLM_TOKENS", "4096"))

# Per-attempt timeout (each provider call) and aggregate deadline (whole analysis)
LLM_REQUEST_TIMEOUT_SECONDS = float(os.getenv("LLM_REQUEST_TIMEOUT_SECONDS", "30"))
ANALYSIS_TIMEOUT_SECONDS = float(os.getenv("ANALYSIS_TIMEOUT_SECONDS", "120"))

# =============================================================================
# REQUEST LIMITS
# =============================================================================

MIN_RESUME_CHARS = int(os.getenv("MIN_RESUME_CHARS", "50"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# =============================================================================
# SYSTEM SETTINGS
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]
PORT = int(os.getenv("PORT", "3000"))


def validate_configuration(require_provider: bool = True) -> dict:
    """
    Validate provider configuration and return a summary dict.

    Args:
        require_provider: If True, raise when neither provider is usable

    Returns:
        Dictionary describing which providers are usable

    Raises:
        ConfigurationError: If no provider is usable and require_provider is set
    """
    config = {
        "primary_configured": GEMINI_API_KEY is not None,
        "primary_model": GEMINI_MODEL,
        "groq_key_count": len(GROQ_API_KEYS),
        "groq_models": list(GROQ_MODELS),
    }

    if require_provider and not config["primary_configured"] and not config["groq_key_count"]:
        raise ConfigurationError(
            "❌ No LLM provider is configured!\n"
            "   Set GROQ_API_KEYS (comma-separated) or GROQ_API_KEY for Groq,\n"
            "   and/or GEMINI_API_KEY for the primary Gemini provider, in your .env file."
        )

    return config
