"""
Tests for the (model, key) dispatch sequence of one provider.

All provider traffic goes through ScriptedClient (see conftest.py).
"""

import threading

import pytest

from resuvibe.orchestrator import (
    AllAttemptsExhaustedError,
    AnalysisCancelledError,
    KeyRotator,
    NoCredentialsError,
    ParseError,
    ProviderDispatcher,
    StatusCategory,
)

MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]


# =============================================================================
# ORDERING
# =============================================================================

class TestDispatchOrder:

    def test_first_attempt_success(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.ok('{"score": 90}'))
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b"]), ["m1", "m2"])

        assert dispatcher.dispatch(MESSAGES) == {"score": 90}
        assert client.calls == [("m1", "a")]

    def test_every_key_on_first_model_before_downgrading(self, scripted_client, outcomes):
        def responder(model, key):
            if model == "m2" and key == "a":
                return outcomes.ok('{"score": 80}')
            return outcomes.rate_limited()

        client = scripted_client(responder)
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b"]), ["m1", "m2"])

        assert dispatcher.dispatch(MESSAGES) == {"score": 80}
        assert client.calls == [("m1", "a"), ("m1", "b"), ("m2", "a")]

    def test_attempt_plan_covers_models_times_keys(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.ok("{}"))
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b", "c"]), ["m1", "m2"])
        plan = list(dispatcher.attempt_plan())
        assert len(plan) == 6
        assert [model for model, _ in plan] == ["m1"] * 3 + ["m2"] * 3

    def test_shared_cursor_offsets_the_sequence(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.rate_limited())
        rotator = KeyRotator(["a", "b", "c"])
        rotator.next()  # another request already took "a"
        dispatcher = ProviderDispatcher(client, rotator, ["m1", "m2"])

        with pytest.raises(AllAttemptsExhaustedError):
            dispatcher.dispatch(MESSAGES)

        assert client.calls == [
            ("m1", "b"), ("m1", "c"), ("m1", "a"),
            ("m2", "b"), ("m2", "c"), ("m2", "a"),
        ]

    def test_other_errors_rotate_like_rate_limits(self, scripted_client, outcomes):
        def responder(model, key):
            return outcomes.failed() if key == "a" else outcomes.ok('{"ok": true}')

        client = scripted_client(responder)
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b"]), ["m1"])

        assert dispatcher.dispatch(MESSAGES) == {"ok": True}
        assert len(client.calls) == 2


# =============================================================================
# TERMINAL OUTCOMES
# =============================================================================

class TestDispatchFailures:

    def test_exhaustion_after_all_slots(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.rate_limited())
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b"]), ["m1", "m2", "m3"])

        with pytest.raises(AllAttemptsExhaustedError) as exc_info:
            dispatcher.dispatch(MESSAGES)

        assert len(client.calls) == 6
        attempts = exc_info.value.attempts
        assert len(attempts) == 6
        assert all(a.category is StatusCategory.RATE_LIMITED for a in attempts)
        assert [a.key_number for a in attempts] == [1, 2, 1, 2, 1, 2]

    def test_attempt_records_never_hold_keys(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.failed())
        dispatcher = ProviderDispatcher(client, KeyRotator(["gsk_secret"]), ["m1"])

        with pytest.raises(AllAttemptsExhaustedError) as exc_info:
            dispatcher.dispatch(MESSAGES)

        record = exc_info.value.attempts[0].to_dict()
        assert record["status"] == "other_error"
        assert "gsk_secret" not in str(record)

    def test_parse_failure_is_not_retried(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.ok("no json here"))
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b"]), ["m1", "m2"])

        with pytest.raises(ParseError):
            dispatcher.dispatch(MESSAGES)
        assert len(client.calls) == 1

    def test_empty_key_set_fails_before_any_call(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.ok("{}"))
        dispatcher = ProviderDispatcher(client, KeyRotator([]), ["m1"])

        assert dispatcher.usable is False
        with pytest.raises(NoCredentialsError):
            dispatcher.dispatch(MESSAGES)
        assert client.calls == []

    def test_no_models_rejected(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.ok("{}"))
        with pytest.raises(ValueError):
            ProviderDispatcher(client, KeyRotator(["a"]), [])


# =============================================================================
# CANCELLATION
# =============================================================================

class TestDispatchCancellation:

    def test_cancelled_before_start(self, scripted_client, outcomes):
        client = scripted_client(lambda model, key: outcomes.ok("{}"))
        dispatcher = ProviderDispatcher(client, KeyRotator(["a"]), ["m1"])
        cancel_event = threading.Event()
        cancel_event.set()

        with pytest.raises(AnalysisCancelledError):
            dispatcher.dispatch(MESSAGES, cancel_event=cancel_event)
        assert client.calls == []

    def test_cancel_stops_remaining_attempts(self, scripted_client, outcomes):
        cancel_event = threading.Event()

        def responder(model, key):
            cancel_event.set()
            return outcomes.rate_limited()

        client = scripted_client(responder)
        dispatcher = ProviderDispatcher(client, KeyRotator(["a", "b"]), ["m1", "m2"])

        with pytest.raises(AnalysisCancelledError):
            dispatcher.dispatch(MESSAGES, cancel_event=cancel_event)
        assert len(client.calls) == 1
