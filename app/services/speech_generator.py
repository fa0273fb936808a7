"""Speech synthesis with the ElevenLabs text-to-speech API."""

import logging

import httpx

from app.core.config import settings
from app.exceptions.base import ValidationError
from app.exceptions.provider import (
    ProviderConfigurationError,
    ProviderTimeoutError,
    SpeechGenerationError,
)

logger = logging.getLogger(__name__)


class SpeechGenerator:
    """Client for the hosted text-to-speech API.

    A short-lived ``httpx.AsyncClient`` is opened per request. ``transport``
    can be injected to route requests elsewhere (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.elevenlabs_api_key
        self.base_url = (base_url or settings.elevenlabs_api_url).rstrip("/")
        self.model_id = settings.elevenlabs_model_id
        self.timeout = settings.speech_request_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def synthesize(self, text: str | None, voice_id: str | None) -> bytes:
        """Synthesize ``text`` with ``voice_id`` and return raw audio/mpeg bytes.

        Raises:
            ValidationError: Text or voice id is missing or blank.
            ProviderConfigurationError: The API key is missing.
            ProviderTimeoutError: The request exceeded ``speech_request_timeout``.
            SpeechGenerationError: Non-success status or transport failure.
        """
        if not text or not text.strip() or not voice_id:
            raise ValidationError("Text and voice ID are required")
        if not self.api_key:
            raise ProviderConfigurationError("ElevenLabs API key not configured")

        payload = {
            "text": text,
            "model_id": self.model_id,
            "voice_settings": {
                "stability": settings.voice_stability,
                "similarity_boost": settings.voice_similarity_boost,
            },
        }
        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self.api_key,
        }

        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.base_url}/v1/text-to-speech/{voice_id}", headers=headers, json=payload
                )
        except httpx.TimeoutException as e:
            logger.error(f"ElevenLabs request timed out for voice {voice_id}")
            raise ProviderTimeoutError("Speech generation timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"ElevenLabs API error: {str(e)}")
            raise SpeechGenerationError(details={"reason": str(e)}) from e

        if response.status_code >= 400:
            logger.error(f"ElevenLabs API error: {response.status_code}")
            raise SpeechGenerationError(details={"status_code": response.status_code})

        return response.content

    async def list_voices(self) -> dict:
        """Return the provider's voice catalogue, or an empty list on any failure."""
        if not self.api_key:
            return {"voices": []}
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.base_url}/v1/voices", headers={"xi-api-key": self.api_key}
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to fetch voices: {str(e)}")
            return {"voices": []}
        return {"voices": data.get("voices", [])}
