"""
API tests for the chat controller.

Covers the chat turn endpoint including error envelopes for missing
resources and provider failures.
"""

import base64
import uuid

import pytest
from fastapi import status
from httpx import AsyncClient

from app.exceptions.provider import ProviderConfigurationError, ResponseGenerationError, SpeechGenerationError
from tests.conftest import FAKE_AUDIO, MENTOR_REPLY


def turn_payload(conversation, **overrides):
    payload = {
        "conversation_id": str(conversation.id),
        "mentor_id": str(conversation.mentor_id),
        "content": "How do I learn Rust?",
    }
    payload.update(overrides)
    return payload


class TestChatController:
    """Test cases for POST /api/chat."""

    @pytest.mark.asyncio
    async def test_chat_turn_success(self, authenticated_client: AsyncClient, test_conversation):
        response = await authenticated_client.post("/api/chat", json=turn_payload(test_conversation))

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "success"
        assert data["message"] == "Response generated successfully"
        assert data["data"]["content"] == MENTOR_REPLY
        assert isinstance(data["data"]["response_time"], int)
        assert data["data"]["user_message"]["role"] == "user"
        assert data["data"]["assistant_message"]["role"] == "assistant"
        assert data["data"]["speech"]["status"] == "succeeded"
        assert data["data"]["audio_base64"] is None

    @pytest.mark.asyncio
    async def test_chat_turn_with_audio(self, authenticated_client: AsyncClient, test_conversation):
        response = await authenticated_client.post(
            "/api/chat", json=turn_payload(test_conversation, include_audio=True)
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert base64.b64decode(response.json()["data"]["audio_base64"]) == FAKE_AUDIO

    @pytest.mark.asyncio
    async def test_chat_turn_unknown_mentor(self, authenticated_client: AsyncClient, test_conversation):
        response = await authenticated_client.post(
            "/api/chat", json=turn_payload(test_conversation, mentor_id=str(uuid.uuid4()))
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["status"] == "error"
        assert data["message"] == "Mentor not found"
        assert data["error_code"] == "MENTOR_NOT_FOUND"
        assert data["request_id"]

    @pytest.mark.asyncio
    async def test_chat_turn_unknown_conversation(self, authenticated_client: AsyncClient, test_mentor):
        response = await authenticated_client.post(
            "/api/chat",
            json={
                "conversation_id": str(uuid.uuid4()),
                "mentor_id": str(test_mentor.id),
                "content": "Hello",
            },
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "CONVERSATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_chat_turn_generation_failure(
        self, authenticated_client: AsyncClient, test_conversation, mock_response_generator
    ):
        mock_response_generator.generate.side_effect = ResponseGenerationError()

        response = await authenticated_client.post("/api/chat", json=turn_payload(test_conversation))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["message"] == "Failed to generate mentor response"
        assert data["error_code"] == "RESPONSE_GENERATION_FAILED"

    @pytest.mark.asyncio
    async def test_chat_turn_provider_not_configured(
        self, authenticated_client: AsyncClient, test_conversation, mock_response_generator
    ):
        mock_response_generator.generate.side_effect = ProviderConfigurationError("Gemini API key not configured")

        response = await authenticated_client.post("/api/chat", json=turn_payload(test_conversation))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_chat_turn_speech_failure_still_succeeds(
        self, authenticated_client: AsyncClient, test_conversation, mock_speech_generator
    ):
        mock_speech_generator.synthesize.side_effect = SpeechGenerationError()

        response = await authenticated_client.post("/api/chat", json=turn_payload(test_conversation))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["speech"]["status"] == "failed"

    @pytest.mark.asyncio
    async def test_chat_turn_replay_with_idempotency_key(
        self, authenticated_client: AsyncClient, test_conversation, mock_response_generator
    ):
        payload = turn_payload(test_conversation, idempotency_key="retry-1")

        first = await authenticated_client.post("/api/chat", json=payload)
        second = await authenticated_client.post("/api/chat", json=payload)

        assert first.status_code == second.status_code == status.HTTP_201_CREATED
        assert second.json()["data"]["replayed"] is True
        assert (
            second.json()["data"]["assistant_message"]["id"]
            == first.json()["data"]["assistant_message"]["id"]
        )
        assert mock_response_generator.generate.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"content": ""},
            {"content": "x" * 10001},
            {"mentor_id": "not-a-uuid"},
            {"idempotency_key": "retry-1:reply"},
        ],
    )
    async def test_chat_turn_invalid_payload(
        self, authenticated_client: AsyncClient, test_conversation, overrides
    ):
        response = await authenticated_client.post(
            "/api/chat", json=turn_payload(test_conversation, **overrides)
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"

    @pytest.mark.asyncio
    async def test_chat_turn_blank_content_is_400(
        self, authenticated_client: AsyncClient, test_conversation, mock_response_generator
    ):
        response = await authenticated_client.post(
            "/api/chat", json=turn_payload(test_conversation, content="   ")
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        transcript = await authenticated_client.get(
            f"/api/conversations/{test_conversation.id}/messages"
        )
        assert transcript.json()["data"]["message_count"] == 0
        mock_response_generator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("keys", [("abc", "abc:reply"), ("abc:reply", "abc")])
    async def test_reply_suffixed_key_in_either_order(
        self, authenticated_client: AsyncClient, test_conversation, keys
    ):
        """A key shaped like a stored reply key is refused and never disturbs the transcript."""
        statuses = []
        for key in keys:
            response = await authenticated_client.post(
                "/api/chat", json=turn_payload(test_conversation, idempotency_key=key)
            )
            statuses.append(response.status_code)

        expected = {"abc": status.HTTP_201_CREATED, "abc:reply": status.HTTP_422_UNPROCESSABLE_ENTITY}
        assert statuses == [expected[key] for key in keys]
        transcript = await authenticated_client.get(
            f"/api/conversations/{test_conversation.id}/messages"
        )
        messages = transcript.json()["data"]["messages"]
        assert [m["role"] for m in messages] == ["user", "assistant"]
        assert messages[0]["content"] == "How do I learn Rust?"

    @pytest.mark.asyncio
    async def test_chat_requires_authentication(self, client: AsyncClient, test_conversation):
        response = await client.post("/api/chat", json=turn_payload(test_conversation))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
