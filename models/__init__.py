"""
Models package initialization.
"""

from .base import Base, BaseModel, utcnow
from .conversation import Conversation, ConversationStatus
from .mentor import Mentor
from .message import Message, MessageRole
from .profile import Profile
from .progress_tracking import ProgressTracking, SkillLevel

__all__ = [
    "Base",
    "BaseModel",
    "utcnow",
    "Profile",
    "Mentor",
    "Conversation",
    "ConversationStatus",
    "Message",
    "MessageRole",
    "ProgressTracking",
    "SkillLevel",
]
