"""Conversation and message schemas."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from models.conversation import ConversationStatus
from models.message import MessageRole

from .base import BaseModelSchema, BaseSchema
from .mentor import MentorResponse


class ConversationCreate(BaseSchema):
    """Schema for starting a conversation with a mentor."""

    mentor_id: UUID = Field(..., description="Mentor to chat with")
    topic: str | None = Field(None, max_length=255, description="Optional topic")


class ConversationUpdate(BaseSchema):
    """Schema for a lifecycle status change."""

    status: ConversationStatus = Field(..., description="New status")


class ConversationResponse(BaseModelSchema):
    """Schema for conversation response."""

    user_id: UUID
    mentor_id: UUID
    title: str | None = None
    topic: str | None = None
    status: ConversationStatus
    metadata: dict = Field(default={}, validation_alias="extra")


class ConversationWithMentor(ConversationResponse):
    """Conversation joined with its mentor's display data."""

    mentor: MentorResponse


class ConversationListResponse(BaseSchema):
    """Schema for the conversation list."""

    conversations: list[ConversationResponse]
    total: int
    limit: int
    offset: int


class MessageResponse(BaseModelSchema):
    """Schema for a transcript message."""

    conversation_id: UUID
    role: MessageRole
    content: str
    metadata: dict = Field(default={}, validation_alias="extra")
    audio_url: str | None = None


class TranscriptResponse(BaseSchema):
    """Schema for a conversation transcript."""

    conversation_id: UUID
    messages: list[MessageResponse]
    message_count: int
