"""
Tests for the trainer client.
"""
import json
from datetime import datetime

import httpx
import openai
import pytest

from ai_trainer.client import CredentialPreference, TrainerClient, error_from_response, trim_history
from ai_trainer.core.errors import (
    ConfigurationError,
    InvalidRequest,
    MalformedPlan,
    QuotaExceeded,
    RateLimited,
    UpstreamError,
)
from ai_trainer.main import app
from ai_trainer.models.plans import ChatMessage, ChatReply, DietPlan, WorkoutPlan
from ai_trainer.models.profile import UserProfile


def recording_transport(status, body, seen):
    """MockTransport answering every request with one canned response."""
    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(status, json=body)
    return httpx.MockTransport(handler)


def conversation(n):
    return [
        ChatMessage(role="user" if i % 2 == 0 else "assistant", content=f"message {i}")
        for i in range(n)
    ]


class TestCredentialPreference:
    """Tests for the custom-key switch."""

    def test_off_by_default(self):
        assert CredentialPreference().override() is None

    def test_on_with_key(self):
        pref = CredentialPreference(preferCustomCredential=True, credential=" user-key ")
        assert pref.override() == "user-key"

    def test_on_without_key(self):
        assert CredentialPreference(preferCustomCredential=True, credential="").override() is None

    def test_key_ignored_when_off(self):
        assert CredentialPreference(preferCustomCredential=False, credential="user-key").override() is None


class TestTrimHistory:
    """Tests for chat history capping."""

    def test_keeps_most_recent_ten(self):
        trimmed = trim_history(conversation(15))
        assert len(trimmed) == 10
        assert trimmed[0].content == "message 5"
        assert trimmed[-1].content == "message 14"

    def test_short_history_unchanged(self):
        history = conversation(3)
        assert trim_history(history) == history

    def test_custom_limit(self):
        assert [m.content for m in trim_history(conversation(5), limit=2)] == ["message 3", "message 4"]

    def test_zero_limit(self):
        assert trim_history(conversation(5), limit=0) == []


class TestErrorFromResponse:
    """Tests for rebuilding typed errors from HTTP responses."""

    @pytest.mark.parametrize("code,expected", [
        ("rate_limited", RateLimited),
        ("quota_exceeded", QuotaExceeded),
        ("malformed_plan", MalformedPlan),
        ("configuration_error", ConfigurationError),
    ])
    def test_by_code(self, code, expected):
        error = error_from_response(httpx.Response(500, json={"error": "msg", "code": code}))
        assert type(error) is expected
        assert error.message == "msg"

    def test_status_fallback(self):
        assert type(error_from_response(httpx.Response(429, text="slow down"))) is RateLimited
        assert type(error_from_response(httpx.Response(402, json={}))) is QuotaExceeded

    def test_unknown_failure_is_upstream(self):
        error = error_from_response(httpx.Response(504, text="<html>gateway timeout</html>"))
        assert type(error) is UpstreamError
        assert error.status == 504

    def test_validation_rejection_is_invalid_request(self):
        detail = [{"loc": ["body", "userProfile", "weight"], "msg": "Input should be greater than 0"}]
        error = error_from_response(httpx.Response(422, json={"detail": detail}))

        assert type(error) is InvalidRequest
        assert error.detail == detail
        assert "422" in error.message

    def test_string_detail_becomes_message(self):
        error = error_from_response(httpx.Response(400, json={"detail": "Bad payload"}))
        assert type(error) is InvalidRequest
        assert error.message == "Bad payload"

    def test_upstream_status_survives_the_hop(self):
        body = {"error": "AI gateway error: 503", "code": "upstream_error", "status": 503}
        error = error_from_response(httpx.Response(502, json=body))

        assert type(error) is UpstreamError
        assert error.status == 503

    def test_upstream_without_status(self):
        body = {"error": "AI gateway timed out", "code": "upstream_error"}
        assert error_from_response(httpx.Response(502, json=body)).status is None


class TestTrainerClient:
    """Tests for TrainerClient against mocked transports."""

    @pytest.mark.asyncio
    async def test_workout_is_stamped(self, sample_profile, sample_workout_plan):
        seen = []
        trainer = TrainerClient("http://trainer.test", transport=recording_transport(200, sample_workout_plan, seen))

        plan = await trainer.generate_workout(UserProfile(**sample_profile))

        assert isinstance(plan, WorkoutPlan)
        assert len(plan.weeklyPlan) == 2
        assert datetime.fromisoformat(plan.generatedAt).tzinfo is not None
        assert seen[0]["type"] == "workout"
        assert "customApiKey" not in seen[0]
        assert "messages" not in seen[0]

    @pytest.mark.asyncio
    async def test_diet_sends_custom_key(self, sample_profile, sample_diet_plan):
        seen = []
        trainer = TrainerClient(
            "http://trainer.test",
            preference=CredentialPreference(preferCustomCredential=True, credential="user-key"),
            transport=recording_transport(200, sample_diet_plan, seen),
        )

        plan = await trainer.generate_diet(UserProfile(**sample_profile))

        assert isinstance(plan, DietPlan)
        assert plan.generatedAt is not None
        assert seen[0]["customApiKey"] == "user-key"
        assert seen[0]["userProfile"]["weight"] == 70

    @pytest.mark.asyncio
    async def test_chat_sends_trimmed_history(self, sample_profile):
        seen = []
        trainer = TrainerClient("http://trainer.test", transport=recording_transport(200, {"response": "Nice!"}, seen))

        reply = await trainer.chat(UserProfile(**sample_profile), conversation(12))

        assert isinstance(reply, ChatReply)
        assert reply.response == "Nice!"
        assert len(seen[0]["messages"]) == 10
        assert seen[0]["messages"][-1] == {"role": "assistant", "content": "message 11"}

    @pytest.mark.asyncio
    async def test_error_body_raises_typed_error(self, sample_profile):
        body = {"error": "Usage limit reached. Please add credits.", "code": "quota_exceeded"}
        trainer = TrainerClient("http://trainer.test", transport=recording_transport(402, body, []))

        with pytest.raises(QuotaExceeded, match="add credits"):
            await trainer.generate_workout(UserProfile(**sample_profile))

    @pytest.mark.asyncio
    async def test_unreachable_service(self, sample_profile):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        trainer = TrainerClient("http://trainer.test", transport=httpx.MockTransport(handler))

        with pytest.raises(UpstreamError, match="unreachable"):
            await trainer.chat(UserProfile(**sample_profile), [])

    @pytest.mark.asyncio
    async def test_against_app(self, sample_profile, mock_gateway, make_completion, workout_reply):
        mock_gateway.return_value = make_completion(workout_reply)
        trainer = TrainerClient("http://testserver", transport=httpx.ASGITransport(app=app))

        plan = await trainer.generate_workout(UserProfile(**sample_profile))

        assert plan.weeklyPlan[0].exercises[0].name == "Push-ups"
        assert plan.generatedAt is not None

    @pytest.mark.asyncio
    async def test_against_app_malformed(self, sample_profile, mock_gateway, make_completion):
        mock_gateway.return_value = make_completion("no json here")
        trainer = TrainerClient("http://testserver", transport=httpx.ASGITransport(app=app))

        with pytest.raises(MalformedPlan):
            await trainer.generate_diet(UserProfile(**sample_profile))

    @pytest.mark.asyncio
    async def test_against_app_upstream_status(self, sample_profile, mock_gateway):
        request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
        mock_gateway.side_effect = openai.APIStatusError(
            "boom", response=httpx.Response(503, request=request), body=None
        )
        trainer = TrainerClient("http://testserver", transport=httpx.ASGITransport(app=app))

        with pytest.raises(UpstreamError) as excinfo:
            await trainer.chat(UserProfile(**sample_profile), [])

        assert excinfo.value.status == 503

    @pytest.mark.asyncio
    async def test_rejected_request_is_not_retryable(self, sample_profile):
        body = {"detail": [{"loc": ["body", "type"], "msg": "Input should be 'workout', 'diet' or 'chat'"}]}
        trainer = TrainerClient("http://trainer.test", transport=recording_transport(422, body, []))

        with pytest.raises(InvalidRequest) as excinfo:
            await trainer.generate_workout(UserProfile(**sample_profile))

        assert excinfo.value.detail == body["detail"]
