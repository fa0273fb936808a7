"""Chat turn schemas for request/response serialization."""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from pydantic import Field

from .base import BaseSchema
from .conversation import MessageResponse


class SpeechStatus(str, Enum):
    """Outcome of the best-effort speech step."""

    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class TranscriptTurn(BaseSchema):
    """One (role, content) pair sent to the response generator."""

    role: str
    content: str


class ChatTurnRequest(BaseSchema):
    """Schema for submitting a chat turn."""

    conversation_id: UUID = Field(..., description="Conversation the turn belongs to")
    mentor_id: UUID = Field(..., description="Mentor answering the turn")
    content: str = Field(..., min_length=1, max_length=10000, description="User message")
    idempotency_key: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        pattern=r"^[^:]+$",
        description="Client key making retries safe; must not contain ':'",
    )
    speak: bool = Field(default=True, description="Synthesize speech when the mentor has a voice")
    include_audio: bool = Field(default=False, description="Return synthesized audio as base64")


class SpeechOutcome(BaseSchema):
    """Result channel of the speech step; never affects turn success."""

    status: SpeechStatus = SpeechStatus.SKIPPED
    voice_id: str | None = None
    audio: bytes | None = Field(default=None, exclude=True)
    error: str | None = None


class ChatTurnResponse(BaseSchema):
    """Schema for a completed chat turn."""

    conversation_id: UUID
    content: str
    response_time: int = Field(..., description="Generation latency in milliseconds")
    user_message: MessageResponse
    assistant_message: MessageResponse
    speech: SpeechOutcome
    audio_base64: str | None = None
    replayed: bool = Field(default=False, description="True when served from an earlier identical turn")
