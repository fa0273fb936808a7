"""Profile schemas."""

from pydantic import Field

from .base import BaseModelSchema


class ProfileResponse(BaseModelSchema):
    """Schema for the caller's profile."""

    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    preferred_learning_style: str
    interests: list[str] = Field(default=[])
    goals: list[str] = Field(default=[])
    timezone: str
