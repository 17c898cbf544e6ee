"""
Primary → secondary fallback orchestration.

FALLBACK CHAIN (DETERMINISTIC):
================================
1. PRIMARY: Gemini (single key, single model)
   - Exactly one attempt
   - Rate limited / quota exhausted → fall through to the secondary
   - Any other failure → surfaced as-is, NO fallback
   - Not configured → skipped

2. SECONDARY: Groq via ProviderDispatcher
   - Every key on the preferred model, then every key on each cheaper model
   - Exhausted → AllProvidersFailedError

3. Nothing configured → ProviderConfigurationError before any network call

A malformed body from a call that otherwise succeeded is a ParseError and
is never retried on another provider or key.
"""

import logging
import threading
from typing import Any, Dict, Optional, Sequence

from configs import GEMINI_API_KEY, GEMINI_MODEL, GROQ_API_KEYS, GROQ_MODELS

from .dispatcher import ProviderDispatcher
from .errors import (
    AllAttemptsExhaustedError,
    AllProvidersFailedError,
    AnalysisCancelledError,
    ProviderConfigurationError,
    RateLimitError,
    TransportError,
)
from .json_utils import sanitize
from .key_rotator import KeyRotator
from .llm_client import GeminiClient, GroqClient, LLMClient, MessageLike, StatusCategory


logger = logging.getLogger("resuvibe.fallback")


class MultiProviderLLM:
    """
    LLM entry point with primary-to-secondary fallback.

    The instance is safe to share between threads: it holds no per-request
    state, and the only mutable pieces (rotator cursor, stats) are guarded
    by locks.
    """

    def __init__(
        self,
        dispatcher: ProviderDispatcher,
        primary: Optional[LLMClient] = None,
        primary_key: Optional[str] = None,
        primary_model: str = GEMINI_MODEL,
    ):
        self.dispatcher = dispatcher
        self.primary = primary
        self.primary_key = primary_key
        self.primary_model = primary_model

        self._stats_lock = threading.Lock()
        self.stats = {
            "total_calls": 0,
            "primary_successes": 0,
            "secondary_fallbacks": 0,
            "secondary_successes": 0,
            "failures": 0,
        }

    @property
    def primary_configured(self) -> bool:
        return self.primary is not None and bool(self.primary_key)

    @property
    def secondary_configured(self) -> bool:
        return self.dispatcher.usable

    def call(
        self,
        messages: Sequence[MessageLike],
        cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """
        Run the fallback chain and return the parsed JSON object.

        Raises:
            ProviderConfigurationError: Neither provider is configured
            TransportError: The primary failed with a non-rate-limit error
            ParseError: A provider answered with unrecoverable JSON
            AllProvidersFailedError: Primary rate limited (or absent) and secondary exhausted
            AnalysisCancelledError: cancel_event was set before the chain finished
        """
        self._bump("total_calls")

        if not self.primary_configured and not self.secondary_configured:
            self._bump("failures")
            raise ProviderConfigurationError(
                "No LLM provider configured: set GEMINI_API_KEY and/or GROQ_API_KEYS"
            )

        try:
            return self._run_chain(messages, cancel_event)
        except Exception:
            self._bump("failures")
            raise

    def _run_chain(self, messages, cancel_event) -> Dict[str, Any]:
        primary_reason = None

        if self.primary_configured:
            if cancel_event is not None and cancel_event.is_set():
                raise AnalysisCancelledError("Analysis cancelled by caller")

            logger.info("→ Attempting PRIMARY provider: %s (%s)",
                        self.primary.provider.value.upper(), self.primary_model)
            reply = self.primary.send(self.primary_model, self.primary_key, messages)

            if reply.category is StatusCategory.OK:
                result = sanitize(reply.body)
                self._bump("primary_successes")
                logger.info("✓ PRIMARY (%s) successful", self.primary.provider.value.upper())
                return result

            if reply.category is not StatusCategory.RATE_LIMITED:
                logger.error("✗ PRIMARY provider error (status=%s), not falling back", reply.status_code)
                raise TransportError(
                    f"{self.primary.provider.value} API error: {reply.body}",
                    provider=self.primary.provider.value,
                    model=self.primary_model,
                    status_code=reply.status_code,
                )

            primary_error = RateLimitError(
                f"{self.primary.provider.value} rate limited: {reply.body[:200]}",
                provider=self.primary.provider.value,
                model=self.primary_model,
            )
            primary_reason = str(primary_error)
            logger.warning("⚠️ PRIMARY provider rate limited, falling back to secondary")
        else:
            primary_error = None
            logger.info("PRIMARY provider not configured, skipping to secondary")

        if not self.secondary_configured:
            raise AllProvidersFailedError(
                "Primary provider rate limited and no secondary API keys configured",
                primary_reason=primary_reason,
            ) from primary_error

        self._bump("secondary_fallbacks")
        try:
            result = self.dispatcher.dispatch(messages, cancel_event=cancel_event)
        except AllAttemptsExhaustedError as e:
            raise AllProvidersFailedError(
                "LLM quota temporarily exhausted on all providers. Please wait a few minutes and retry.",
                attempts=e.attempts,
                primary_reason=primary_reason,
            ) from e

        self._bump("secondary_successes")
        return result

    def _bump(self, counter: str) -> None:
        with self._stats_lock:
            self.stats[counter] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Usage counters plus the configured fallback chain."""
        chain = []
        if self.primary_configured:
            chain.append(self.primary_model)
        if self.secondary_configured:
            chain.extend(self.dispatcher.models)
        with self._stats_lock:
            stats = dict(self.stats)
        return {
            **stats,
            "fallback_chain": " → ".join(chain) if chain else "[none configured]",
        }


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def create_llm_client(
    groq_keys: Optional[Sequence[str]] = None,
    groq_models: Optional[Sequence[str]] = None,
    gemini_key: Optional[str] = None,
    gemini_model: str = GEMINI_MODEL,
) -> MultiProviderLLM:
    """
    Build a MultiProviderLLM from configuration.

    Arguments default to the values loaded by configs; pass them explicitly
    to build an isolated client (each call creates its own KeyRotator).
    """
    keys = GROQ_API_KEYS if groq_keys is None else tuple(groq_keys)
    models = GROQ_MODELS if groq_models is None else tuple(groq_models)
    primary_key = GEMINI_API_KEY if gemini_key is None else gemini_key

    rotator = KeyRotator(keys, name="groq")
    dispatcher = ProviderDispatcher(GroqClient(), rotator, models)
    primary = GeminiClient() if primary_key else None

    logger.info("LLM client ready: primary=%s, groq keys=%d, groq models=%s",
                "gemini" if primary else "none", rotator.size(), list(models))

    return MultiProviderLLM(
        dispatcher=dispatcher,
        primary=primary,
        primary_key=primary_key,
        primary_model=gemini_model,
    )


# ============================================================
# PROCESS-WIDE CLIENT
# ============================================================

_llm: Optional[MultiProviderLLM] = None
_llm_lock = threading.Lock()


def get_llm() -> MultiProviderLLM:
    """
    Get or create the process-wide LLM client.

    The Groq key rotator lives inside this client, so every caller (API
    requests, CLI, library use of analyze()) draws from the same rotation
    sequence for the life of the process.
    """
    global _llm
    with _llm_lock:
        if _llm is None:
            logger.info("Creating singleton MultiProviderLLM")
            _llm = create_llm_client()
        return _llm


def reset_llm() -> None:
    """Drop the process-wide client (useful for testing)."""
    global _llm
    with _llm_lock:
        _llm = None
