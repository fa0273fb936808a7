"""
Conversation model for mentoring sessions.
"""

import enum

from sqlalchemy import JSON, Column, Enum, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel


class ConversationStatus(str, enum.Enum):
    """Conversation lifecycle status."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    COMPLETED = "completed"


class Conversation(BaseModel):
    """
    Represents a conversation between one profile and one mentor.

    ``updated_at`` is refreshed after each generated reply and drives the
    dashboard ordering.
    """

    __tablename__ = "conversations"
    __table_args__ = (Index("idx_conversations_user_updated", "user_id", "updated_at"),)

    user_id = Column(UUID(), ForeignKey("profiles.id"), nullable=False)
    mentor_id = Column(UUID(), ForeignKey("mentors.id"), nullable=False)
    title = Column(String(255))
    topic = Column(String(255))
    status = Column(
        Enum(ConversationStatus, values_callable=lambda e: [m.value for m in e], name="conversation_status"),
        default=ConversationStatus.ACTIVE,
        nullable=False,
    )
    # "metadata" is reserved on declarative classes
    extra = Column("metadata", JSON, default=dict, nullable=False)

    # Relationships
    user = relationship("Profile", back_populates="conversations")
    mentor = relationship("Mentor", lazy="raise")
    messages = relationship("Message", back_populates="conversation", order_by="Message.created_at")
