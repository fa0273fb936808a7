"""Mentor and conversation exceptions."""

from .base import NotFoundError


class MentorNotFoundError(NotFoundError):
    """Raised when a mentor id does not resolve to an active mentor."""

    def __init__(self, message: str = "Mentor not found"):
        super().__init__(message=message, error_code="MENTOR_NOT_FOUND")


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation is missing or belongs to another user."""

    def __init__(self, message: str = "Conversation not found"):
        super().__init__(message=message, error_code="CONVERSATION_NOT_FOUND")
