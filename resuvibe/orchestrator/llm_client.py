"""
LLM provider clients.

PURPOSE:
========
Wraps a single chat-completion request to one provider (Gemini or Groq)
and reports the outcome as a ProviderReply whose StatusCategory is set
exactly once, here, at the transport boundary. Nothing upstream ever
inspects error message text to decide whether to rotate or fall back.

ARCHITECTURE:
=============
- LLMClient: Base class, one litellm call per send()
- GeminiClient: Primary provider (single key, single model)
- GroqClient: Secondary provider (driven by ProviderDispatcher)

USAGE:
======
    client = GroqClient()
    reply = client.send("groq/llama-3.1-8b-instant", api_key, messages)
    if reply.category is StatusCategory.OK:
        data = sanitize(reply.body)
"""

import logging
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from litellm import completion
from litellm.exceptions import RateLimitError as LiteLLMRateLimitError

from configs import LLM_TEMPERATURE, MAX_LLM_TOKENS, LLM_REQUEST_TIMEOUT_SECONDS


logger = logging.getLogger("resuvibe.llm")


# ============================================================
# DATA MODELS
# ============================================================

class LLMProvider(Enum):
    """Supported LLM providers."""
    GEMINI = "gemini"
    GROQ = "groq"


class StatusCategory(Enum):
    """Outcome of a single provider call."""
    OK = "ok"
    RATE_LIMITED = "rate_limited"
    OTHER_ERROR = "other_error"


@dataclass(frozen=True)
class Message:
    """One chat message; role is system, user or assistant."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ProviderReply:
    """Classified result of one provider call."""
    category: StatusCategory
    body: str
    provider: LLMProvider
    model: str
    status_code: Optional[int] = None
    tokens_used: int = 0

    @property
    def ok(self) -> bool:
        return self.category is StatusCategory.OK


MessageLike = Union[Message, Mapping[str, str]]


def to_provider_messages(messages: Sequence[MessageLike]) -> List[Dict[str, str]]:
    """Serialise messages into the OpenAI-style dicts litellm expects."""
    out = []
    for message in messages:
        if isinstance(message, Message):
            out.append(message.to_dict())
        else:
            out.append({"role": message["role"], "content": message["content"]})
    return out


def classify_exception(exc: BaseException) -> StatusCategory:
    """Map a provider exception to RATE_LIMITED or OTHER_ERROR."""
    if isinstance(exc, LiteLLMRateLimitError) or getattr(exc, "status_code", None) == 429:
        return StatusCategory.RATE_LIMITED
    return StatusCategory.OTHER_ERROR


# ============================================================
# BASE CLIENT
# ============================================================

class LLMClient(ABC):
    """
    Base class for provider clients.

    Subclasses only pin the provider and its call parameters; the call
    itself and the outcome classification are shared.
    """

    provider: LLMProvider

    def __init__(
        self,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = MAX_LLM_TOKENS,
        timeout: float = LLM_REQUEST_TIMEOUT_SECONDS,
    ):
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def _completion_kwargs(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "response_format": {"type": "json_object"},
        }

    def send(self, model: str, credential: str, messages: Sequence[MessageLike]) -> ProviderReply:
        """
        Issue one chat completion.

        Args:
            model: litellm model id (e.g. "groq/llama-3.1-8b-instant")
            credential: API key for this attempt
            messages: Ordered conversation (system + user)

        Returns:
            ProviderReply; provider failures are reported through its
            category rather than raised
        """
        try:
            response = completion(
                model=model,
                messages=to_provider_messages(messages),
                api_key=credential,
                num_retries=0,
                **self._completion_kwargs(),
            )
        except Exception as e:
            category = classify_exception(e)
            logger.debug("%s call to %s failed (%s): %s", self.provider.value, model, category.value, e)
            return ProviderReply(
                category=category,
                body=str(e),
                provider=self.provider,
                model=model,
                status_code=getattr(e, "status_code", None),
            )

        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        return ProviderReply(
            category=StatusCategory.OK,
            body=content,
            provider=self.provider,
            model=model,
            status_code=200,
            tokens_used=getattr(usage, "total_tokens", 0) or 0,
        )


# ============================================================
# PROVIDERS
# ============================================================

class GeminiClient(LLMClient):
    """Primary provider: one configured key, one model, no rotation."""
    provider = LLMProvider.GEMINI


class GroqClient(LLMClient):
    """Secondary provider, called once per (model, key) attempt by the dispatcher."""
    provider = LLMProvider.GROQ
