"""Unit tests for the ElevenLabs speech generator."""

import json

import httpx
import pytest

from app.exceptions.base import ValidationError
from app.exceptions.provider import (
    ProviderConfigurationError,
    ProviderTimeoutError,
    SpeechGenerationError,
)
from app.services.speech_generator import SpeechGenerator

AUDIO = b"ID3\x04\x00mpeg"


def generator_for(handler, api_key="xi-test-key"):
    return SpeechGenerator(
        api_key=api_key,
        base_url="https://speech.test/",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
class TestSynthesize:
    """Test cases for SpeechGenerator.synthesize."""

    async def test_returns_audio_bytes(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=AUDIO, headers={"Content-Type": "audio/mpeg"})

        audio = await generator_for(handler).synthesize("Hello there", "voice-ada")

        assert audio == AUDIO
        assert seen["url"] == "https://speech.test/v1/text-to-speech/voice-ada"
        assert seen["headers"]["xi-api-key"] == "xi-test-key"
        assert seen["headers"]["accept"] == "audio/mpeg"
        assert seen["body"]["text"] == "Hello there"
        assert seen["body"]["model_id"] == "eleven_monolingual_v1"
        assert seen["body"]["voice_settings"] == {"stability": 0.5, "similarity_boost": 0.5}

    @pytest.mark.parametrize(
        "text,voice_id",
        [("", "voice-ada"), ("   ", "voice-ada"), (None, "voice-ada"), ("Hello", ""), ("Hello", None)],
    )
    async def test_missing_input_is_validation_error(self, text, voice_id):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(ValidationError) as exc_info:
            await generator_for(handler).synthesize(text, voice_id)

        assert exc_info.value.status_code == 400

    async def test_missing_key_is_configuration_error(self):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(ProviderConfigurationError):
            await generator_for(handler, api_key="").synthesize("Hello", "voice-ada")

    @pytest.mark.parametrize("status_code", [401, 422, 500])
    async def test_error_status_raises(self, status_code):
        def handler(request):
            return httpx.Response(status_code, json={"detail": "nope"})

        with pytest.raises(SpeechGenerationError) as exc_info:
            await generator_for(handler).synthesize("Hello", "voice-ada")

        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"status_code": status_code}

    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SpeechGenerationError):
            await generator_for(handler).synthesize("Hello", "voice-ada")

    async def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ProviderTimeoutError):
            await generator_for(handler).synthesize("Hello", "voice-ada")


@pytest.mark.asyncio
class TestListVoices:
    """Test cases for SpeechGenerator.list_voices."""

    async def test_returns_voices(self):
        def handler(request):
            assert request.url.path == "/v1/voices"
            return httpx.Response(200, json={"voices": [{"voice_id": "v1", "name": "Rachel"}]})

        assert await generator_for(handler).list_voices() == {
            "voices": [{"voice_id": "v1", "name": "Rachel"}]
        }

    async def test_failure_returns_empty_list(self):
        def handler(request):
            return httpx.Response(503)

        assert await generator_for(handler).list_voices() == {"voices": []}

    async def test_without_key_returns_empty_list(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert await generator_for(handler, api_key="").list_voices() == {"voices": []}
