"""
Conftest for ResuVibe tests.

Ensures the project root is on sys.path so that 'resuvibe' and 'configs'
resolve without installation, and provides a scripted provider client so
no test ever reaches a real LLM API.
"""

import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

# Add project root to sys.path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from resuvibe.orchestrator import (  # noqa: E402
    KeyRotator,
    LLMClient,
    LLMProvider,
    MultiProviderLLM,
    ProviderDispatcher,
    ProviderReply,
    StatusCategory,
)


Outcome = Tuple[StatusCategory, str]
Responder = Callable[[str, str], Outcome]


def ok(body: str) -> Outcome:
    return StatusCategory.OK, body


def rate_limited(body: str = "429 Too Many Requests") -> Outcome:
    return StatusCategory.RATE_LIMITED, body


def failed(body: str = "500 Internal Server Error") -> Outcome:
    return StatusCategory.OTHER_ERROR, body


class ScriptedClient(LLMClient):
    """Provider client whose replies come from a responder(model, key) function."""

    def __init__(self, responder: Responder, provider: LLMProvider = LLMProvider.GROQ):
        super().__init__()
        self.provider = provider
        self.responder = responder
        self.calls: List[Tuple[str, str]] = []
        self.messages: List[list] = []

    def send(self, model, credential, messages):
        self.calls.append((model, credential))
        self.messages.append(list(messages))
        category, body = self.responder(model, credential)
        status_code = {StatusCategory.OK: 200, StatusCategory.RATE_LIMITED: 429}.get(category, 500)
        return ProviderReply(
            category=category,
            body=body,
            provider=self.provider,
            model=model,
            status_code=status_code,
        )


def build_llm(
    secondary: ScriptedClient,
    keys=("key-a", "key-b"),
    models=("groq/model-1", "groq/model-2"),
    primary: Optional[ScriptedClient] = None,
    primary_key: Optional[str] = "gemini-key",
) -> MultiProviderLLM:
    """Assemble a MultiProviderLLM around scripted clients with its own rotator."""
    dispatcher = ProviderDispatcher(secondary, KeyRotator(keys), models)
    return MultiProviderLLM(
        dispatcher=dispatcher,
        primary=primary,
        primary_key=primary_key if primary is not None else None,
        primary_model="gemini/test-model",
    )


@pytest.fixture
def scripted_client():
    """Factory: scripted_client(responder, provider=LLMProvider.GROQ)."""
    return ScriptedClient


@pytest.fixture
def llm_factory():
    """Factory: llm_factory(secondary, keys=..., models=..., primary=..., primary_key=...)."""
    return build_llm


@pytest.fixture
def outcomes():
    """Reply helpers: outcomes.ok(body), outcomes.rate_limited(), outcomes.failed()."""
    class _Outcomes:
        pass

    helpers = _Outcomes()
    helpers.ok = staticmethod(ok)
    helpers.rate_limited = staticmethod(rate_limited)
    helpers.failed = staticmethod(failed)
    return helpers
