"""
Progress tracking model.

One row per (user, topic). Rows are written by the session-completion process
and only read by the dashboard.
"""

import enum

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel, utcnow


class SkillLevel(str, enum.Enum):
    """Coarse skill level for a topic."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ProgressTracking(BaseModel):
    """Accumulated sessions and minutes for one topic."""

    __tablename__ = "progress_tracking"
    __table_args__ = (UniqueConstraint("user_id", "topic", name="uq_progress_user_topic"),)

    user_id = Column(UUID(), ForeignKey("profiles.id"), nullable=False)
    topic = Column(String(255), nullable=False)
    skill_level = Column(
        Enum(SkillLevel, values_callable=lambda e: [m.value for m in e], name="skill_level"),
        default=SkillLevel.BEGINNER,
        nullable=False,
    )
    sessions_completed = Column(Integer, default=0, nullable=False)
    total_time_minutes = Column(Integer, default=0, nullable=False)
    achievements = Column(JSON, default=list, nullable=False)
    last_activity_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("Profile", back_populates="progress")
