"""Dashboard schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from models.progress_tracking import SkillLevel

from .base import BaseModelSchema, BaseSchema
from .conversation import ConversationWithMentor


class ProgressResponse(BaseModelSchema):
    """Schema for one progress tracking row."""

    user_id: UUID
    topic: str
    skill_level: SkillLevel
    sessions_completed: int
    total_time_minutes: int
    achievements: list[str] = Field(default=[])
    last_activity_at: datetime


class DashboardStats(BaseSchema):
    """Summary counters shown on the dashboard."""

    total_sessions: int = 0
    total_minutes: int = 0
    active_topics: int = 0
    this_week_sessions: int = 0


class DashboardOverview(BaseSchema):
    """Schema for the dashboard overview."""

    stats: DashboardStats
    recent_conversations: list[ConversationWithMentor]
    progress: list[ProgressResponse]
