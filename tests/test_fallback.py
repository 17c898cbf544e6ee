"""
Tests for the Gemini → Groq fallback chain.
"""

import pytest

from configs import ConfigurationError
from resuvibe.orchestrator import (
    AllProvidersFailedError,
    ErrorKind,
    LLMProvider,
    ParseError,
    ProviderConfigurationError,
    RateLimitError,
    TransportError,
)

MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]


# =============================================================================
# PRIMARY PROVIDER
# =============================================================================

class TestPrimaryProvider:

    def test_primary_success_skips_secondary(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.ok('{"score": 70}'), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok('{"score": 1}'))
        llm = llm_factory(secondary, primary=primary)

        assert llm.call(MESSAGES) == {"score": 70}
        assert primary.calls == [("gemini/test-model", "gemini-key")]
        assert secondary.calls == []
        assert llm.get_stats()["primary_successes"] == 1

    def test_primary_rate_limit_falls_back(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.rate_limited(), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok('{"score": 65}'))
        llm = llm_factory(secondary, primary=primary)

        assert llm.call(MESSAGES) == {"score": 65}
        assert len(primary.calls) == 1
        assert secondary.calls == [("groq/model-1", "key-a")]

    def test_primary_other_error_does_not_fall_back(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.failed("401 invalid key"), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok("{}"))
        llm = llm_factory(secondary, primary=primary)

        with pytest.raises(TransportError) as exc_info:
            llm.call(MESSAGES)

        assert exc_info.value.kind is ErrorKind.TRANSPORT
        assert exc_info.value.status_code == 500
        assert secondary.calls == []

    def test_primary_parse_error_is_terminal(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.ok("not json"), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok("{}"))
        llm = llm_factory(secondary, primary=primary)

        with pytest.raises(ParseError):
            llm.call(MESSAGES)
        assert secondary.calls == []

    def test_primary_without_key_is_skipped(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.ok('{"from": "primary"}'), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok('{"from": "groq"}'))
        llm = llm_factory(secondary, primary=primary, primary_key="")

        assert llm.primary_configured is False
        assert llm.call(MESSAGES) == {"from": "groq"}
        assert primary.calls == []


# =============================================================================
# SECONDARY PROVIDER
# =============================================================================

class TestSecondaryProvider:

    def test_groq_only_configuration(self, scripted_client, llm_factory, outcomes):
        secondary = scripted_client(lambda m, k: outcomes.ok('{"score": 42}'))
        llm = llm_factory(secondary)

        assert llm.call(MESSAGES) == {"score": 42}
        stats = llm.get_stats()
        assert stats["secondary_fallbacks"] == 1
        assert stats["secondary_successes"] == 1

    def test_secondary_exhausted(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.rate_limited(), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.rate_limited())
        llm = llm_factory(secondary, primary=primary)

        with pytest.raises(AllProvidersFailedError) as exc_info:
            llm.call(MESSAGES)

        error = exc_info.value
        assert error.kind is ErrorKind.ALL_EXHAUSTED
        assert len(error.attempts) == 4
        assert "rate limited" in error.primary_reason
        assert len(secondary.calls) == 4
        assert llm.get_stats()["failures"] == 1

    def test_primary_rate_limited_without_groq_keys(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.rate_limited(), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok("{}"))
        llm = llm_factory(secondary, keys=(), primary=primary)

        with pytest.raises(AllProvidersFailedError) as exc_info:
            llm.call(MESSAGES)

        assert isinstance(exc_info.value.__cause__, RateLimitError)
        assert secondary.calls == []


# =============================================================================
# CONFIGURATION
# =============================================================================

class TestUnconfigured:

    def test_no_provider_fails_before_any_call(self, scripted_client, llm_factory, outcomes):
        secondary = scripted_client(lambda m, k: outcomes.ok("{}"))
        llm = llm_factory(secondary, keys=())

        with pytest.raises(ProviderConfigurationError) as exc_info:
            llm.call(MESSAGES)

        assert exc_info.value.kind is ErrorKind.CONFIG
        assert isinstance(exc_info.value, ConfigurationError)
        assert secondary.calls == []

    def test_fallback_chain_in_stats(self, scripted_client, llm_factory, outcomes):
        primary = scripted_client(lambda m, k: outcomes.ok("{}"), LLMProvider.GEMINI)
        secondary = scripted_client(lambda m, k: outcomes.ok("{}"))
        llm = llm_factory(secondary, primary=primary)

        assert llm.get_stats()["fallback_chain"] == "gemini/test-model → groq/model-1 → groq/model-2"
        assert llm_factory(secondary, keys=()).get_stats()["fallback_chain"] == "[none configured]"
