"""
Message model for conversation transcripts.

Messages are append-only: the application never edits or deletes them.
"""

import enum

from sqlalchemy import JSON, Column, Enum, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel


class MessageRole(str, enum.Enum):
    """Message role enumeration."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Message(BaseModel):
    """
    Represents a single transcript entry.

    :ivar extra: Stored in the ``metadata`` column, e.g. ``{"response_time": 812}``.
    :type extra: dict
    :ivar idempotency_key: Client key that makes a retried turn reuse this row.
    :type idempotency_key: str
    """

    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_conversation_created", "conversation_id", "created_at"),
        UniqueConstraint("conversation_id", "idempotency_key", name="uq_messages_conversation_idempotency"),
    )

    conversation_id = Column(UUID(), ForeignKey("conversations.id"), nullable=False)
    role = Column(
        Enum(MessageRole, values_callable=lambda e: [m.value for m in e], name="message_role"),
        nullable=False,
    )
    content = Column(Text, nullable=False)
    extra = Column("metadata", JSON, default=dict, nullable=False)
    audio_url = Column(String(1024))
    idempotency_key = Column(String(128))

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")
