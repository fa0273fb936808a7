"""
Provides the Profile model for the application's database schema.

A profile is the local record of an authenticated user. Identity itself lives
with the external identity provider; the profile keeps the provider's subject
id plus the learner preferences shown in the UI.

Attributes
----------
external_id : sqlalchemy.Column
    Subject identifier issued by the identity provider.
email : sqlalchemy.Column
    The email address of the user, which must be unique.
preferred_learning_style : sqlalchemy.Column
    Free-form learning style hint, defaults to ``"visual"``.
interests, goals : sqlalchemy.Column
    JSON lists of short strings.
"""

from sqlalchemy import JSON, Column, String, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class Profile(BaseModel):
    """
    Represents an authenticated user's profile.

    :ivar external_id: Identity provider subject id. Unique.
    :type external_id: str
    :ivar email: Email address of the user. Unique.
    :type email: str
    :ivar full_name: Display name, optional.
    :type full_name: str
    :ivar timezone: IANA timezone name used for display.
    :type timezone: str
    """

    __tablename__ = "profiles"

    external_id = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255))
    avatar_url = Column(String(1024))
    bio = Column(Text)
    preferred_learning_style = Column(String(50), default="visual", nullable=False)
    interests = Column(JSON, default=list, nullable=False)
    goals = Column(JSON, default=list, nullable=False)
    timezone = Column(String(50), default="UTC", nullable=False)

    # Relationships
    conversations = relationship("Conversation", back_populates="user")
    progress = relationship("ProgressTracking", back_populates="user")
