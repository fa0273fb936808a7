"""API tests for the speech controller."""

import httpx
import pytest
from fastapi import status
from httpx import AsyncClient

from app.core.dependencies import get_speech_generator
from app.exceptions.base import ValidationError
from app.exceptions.provider import SpeechGenerationError
from app.main import app
from app.services.speech_generator import SpeechGenerator
from tests.conftest import FAKE_AUDIO


class TestSpeechController:
    """Test cases for /api/speech endpoints."""

    @pytest.mark.asyncio
    async def test_synthesize_returns_audio(self, authenticated_client: AsyncClient, mock_speech_generator):
        response = await authenticated_client.post(
            "/api/speech", json={"text": "Hello there", "voice_id": "voice-ada"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"] == "audio/mpeg"
        assert response.headers["content-length"] == str(len(FAKE_AUDIO))
        assert response.content == FAKE_AUDIO
        mock_speech_generator.synthesize.assert_awaited_once_with("Hello there", "voice-ada")

    @pytest.mark.asyncio
    async def test_synthesize_missing_text_is_400(
        self, authenticated_client: AsyncClient, mock_speech_generator
    ):
        mock_speech_generator.synthesize.side_effect = ValidationError("Text and voice ID are required")

        response = await authenticated_client.post("/api/speech", json={"voice_id": "voice-ada"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["message"] == "Text and voice ID are required"
        assert data["error_code"] == "VALIDATION_ERROR"
        mock_speech_generator.synthesize.assert_awaited_once_with(None, "voice-ada")

    @pytest.mark.asyncio
    async def test_synthesize_null_text_is_400(self, authenticated_client: AsyncClient):
        def handler(request):
            raise AssertionError("no request expected")

        app.dependency_overrides[get_speech_generator] = lambda: SpeechGenerator(
            api_key="xi-test-key", transport=httpx.MockTransport(handler)
        )

        response = await authenticated_client.post(
            "/api/speech", json={"text": None, "voice_id": "voice-ada"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_synthesize_provider_failure_is_500(
        self, authenticated_client: AsyncClient, mock_speech_generator
    ):
        mock_speech_generator.synthesize.side_effect = SpeechGenerationError(details={"status_code": 401})

        response = await authenticated_client.post(
            "/api/speech", json={"text": "Hello", "voice_id": "voice-ada"}
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["message"] == "Failed to generate speech"
        assert data["details"] == {"status_code": 401}

    @pytest.mark.asyncio
    async def test_list_voices(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/speech/voices")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["voices"] == [{"voice_id": "voice-ada", "name": "Ada"}]
