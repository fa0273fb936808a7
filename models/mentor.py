"""
Mentor persona model.

Mentors are seeded out-of-band and are read-only to the application.
"""

from sqlalchemy import JSON, Boolean, Column, String, Text

from .base import BaseModel


class Mentor(BaseModel):
    """
    Represents a mentor persona the user can chat with.

    :ivar personality: Free-text personality description added to the system prompt.
    :type personality: str
    :ivar system_prompt: Persona instructions sent with every completion request.
    :type system_prompt: str
    :ivar voice_id: Text-to-speech voice identifier; no spoken replies when empty.
    :type voice_id: str
    """

    __tablename__ = "mentors"

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    personality = Column(Text, nullable=False, default="")
    expertise = Column(JSON, default=list, nullable=False)
    avatar_url = Column(String(1024))
    system_prompt = Column(Text, nullable=False)
    voice_id = Column(String(100))
    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
