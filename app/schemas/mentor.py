"""Mentor schemas."""

from pydantic import Field

from .base import BaseModelSchema, BaseSchema


class MentorResponse(BaseModelSchema):
    """Schema for mentor persona response."""

    name: str
    description: str
    personality: str
    expertise: list[str] = Field(default=[])
    avatar_url: str | None = None
    voice_id: str | None = None
    is_default: bool = False
    is_active: bool = True


class MentorListResponse(BaseSchema):
    """Schema for the mentor selection list."""

    mentors: list[MentorResponse]
    total: int
