"""
Groq-style provider dispatcher.

FALLBACK ORDER
==============
For each model in preference order, try up to N keys (N = number of keys),
drawing each key from the shared KeyRotator:

    model 1: key a, key b, key c
    model 2: key a, key b, key c      (offset depends on the shared cursor)
    ...

Rate limits are usually per key per model, so every key is spent on the
best model before the dispatcher downgrades to a cheaper one.

OUTCOMES PER ATTEMPT
====================
- OK            -> sanitize and return (a ParseError is terminal, not retried)
- RATE_LIMITED  -> next slot
- OTHER_ERROR   -> next slot as well, logged separately

Only when every (model, key) slot has been used does the dispatcher give up
with AllAttemptsExhaustedError.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import AllAttemptsExhaustedError, AnalysisCancelledError, NoCredentialsError
from .json_utils import sanitize
from .key_rotator import KeyRotator
from .llm_client import LLMClient, MessageLike, StatusCategory


logger = logging.getLogger("resuvibe.dispatcher")


@dataclass(frozen=True)
class AttemptRecord:
    """Diagnostic record of one (model, key) attempt. Holds the key number, never the key."""
    provider: str
    model: str
    key_number: int
    category: StatusCategory
    detail: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "model": self.model,
            "key_number": self.key_number,
            "status": self.category.value,
            "detail": self.detail,
        }


class ProviderDispatcher:
    """Tries every (model, key) combination of one provider until one succeeds."""

    def __init__(self, client: LLMClient, rotator: KeyRotator, models: Sequence[str]):
        if not models:
            raise ValueError("ProviderDispatcher needs at least one model")
        self.client = client
        self.rotator = rotator
        self.models: Tuple[str, ...] = tuple(models)

    @property
    def usable(self) -> bool:
        return self.rotator.size() > 0

    def attempt_plan(self) -> Iterator[Tuple[str, int]]:
        """Yield (model, slot) pairs: every key slot of model 1, then model 2, ..."""
        return itertools.product(self.models, range(self.rotator.size()))

    def dispatch(
        self,
        messages: Sequence[MessageLike],
        cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """
        Run the fallback sequence and return the parsed JSON object.

        Raises:
            NoCredentialsError: If the rotator holds no keys
            ParseError: If a successful call returned unrecoverable JSON
            AnalysisCancelledError: If cancel_event is set between attempts
            AllAttemptsExhaustedError: If every (model, key) slot failed
        """
        if not self.usable:
            raise NoCredentialsError(f"No {self.rotator.name} API keys configured")

        provider = self.client.provider.value
        attempts: List[AttemptRecord] = []

        for model, _slot in self.attempt_plan():
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Dispatch cancelled after %d attempt(s)", len(attempts))
                raise AnalysisCancelledError("Analysis cancelled by caller")

            key_number, credential = self.rotator.next_with_number()
            logger.debug("→ %s (%s) with key #%d", provider, model, key_number)
            reply = self.client.send(model, credential, messages)

            if reply.category is StatusCategory.OK:
                logger.info("✓ %s (%s) succeeded with key #%d after %d failed attempt(s)",
                            provider, model, key_number, len(attempts))
                return sanitize(reply.body)

            attempts.append(AttemptRecord(
                provider=provider,
                model=model,
                key_number=key_number,
                category=reply.category,
                detail=reply.body[:200],
            ))
            if reply.category is StatusCategory.RATE_LIMITED:
                logger.warning("✗ %s key #%d rate limited on %s, rotating...", provider, key_number, model)
            else:
                logger.warning("✗ %s key #%d error on %s (status=%s), rotating...",
                               provider, key_number, model, reply.status_code)

        logger.error("✗ All %d %s attempts exhausted (%d model(s) × %d key(s))",
                     len(attempts), provider, len(self.models), self.rotator.size())
        raise AllAttemptsExhaustedError(
            f"All {len(self.models)} {provider} model(s) × {self.rotator.size()} key(s) exhausted",
            attempts=attempts,
        )
