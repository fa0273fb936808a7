"""
Test data factories for generating test objects.

Factories build unsaved ORM instances; tests add them to the async session
themselves (see ``persist`` in conftest).
"""

import uuid
from datetime import timedelta

import factory

from models import (
    Conversation,
    ConversationStatus,
    Mentor,
    Message,
    MessageRole,
    Profile,
    ProgressTracking,
    SkillLevel,
    utcnow,
)


class ProfileFactory(factory.Factory):
    """Factory for creating Profile test instances."""

    class Meta:
        model = Profile

    external_id = factory.LazyFunction(lambda: f"user_{uuid.uuid4().hex}")
    email = factory.Sequence(lambda n: f"learner{n}@example.com")
    full_name = factory.Faker("name")
    interests = factory.LazyFunction(list)
    goals = factory.LazyFunction(list)


class MentorFactory(factory.Factory):
    """Factory for creating Mentor test instances."""

    class Meta:
        model = Mentor

    name = factory.Sequence(lambda n: f"Mentor {n}")
    description = "Patient systems programming mentor"
    personality = "calm, precise and encouraging"
    expertise = factory.LazyFunction(lambda: ["rust", "systems"])
    system_prompt = "You are a senior engineer mentoring a junior developer."
    voice_id = factory.Sequence(lambda n: f"voice-{n}")
    is_default = False
    is_active = True


class ConversationFactory(factory.Factory):
    """Factory for creating Conversation test instances."""

    class Meta:
        model = Conversation

    title = factory.Sequence(lambda n: f"Conversation {n}")
    topic = "rust"
    status = ConversationStatus.ACTIVE
    extra = factory.LazyFunction(dict)
    # user_id and mentor_id are passed when creating


class MessageFactory(factory.Factory):
    """Factory for creating Message test instances."""

    class Meta:
        model = Message

    role = MessageRole.USER
    content = factory.Faker("sentence")
    extra = factory.LazyFunction(dict)


class ProgressTrackingFactory(factory.Factory):
    """Factory for creating ProgressTracking test instances."""

    class Meta:
        model = ProgressTracking

    topic = factory.Sequence(lambda n: f"topic-{n}")
    skill_level = SkillLevel.BEGINNER
    sessions_completed = 1
    total_time_minutes = 30
    achievements = factory.LazyFunction(list)
    last_activity_at = factory.LazyFunction(lambda: utcnow() - timedelta(hours=1))
