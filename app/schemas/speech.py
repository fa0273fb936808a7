"""Speech synthesis schemas."""

from pydantic import Field

from .base import BaseSchema


class SpeechRequest(BaseSchema):
    """Schema for a speech synthesis request.

    Missing or empty values are accepted here and rejected by the service with a 400
    rather than a schema error.
    """

    text: str | None = Field(default=None, max_length=5000, description="Text to speak")
    voice_id: str | None = Field(default=None, max_length=100, description="Voice identifier")


class VoiceListResponse(BaseSchema):
    """Schema for the available voices list."""

    voices: list[dict] = Field(default=[])
