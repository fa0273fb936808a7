# ruff: noqa: F403, F401
"""Schemas package initialization."""

# Import all schemas to ensure they're registered
from .base import *
from .chat import *
from .conversation import *
from .dashboard import *
from .mentor import *
from .profile import *
from .speech import *

# Rebuild models after all schemas are loaded
ConversationWithMentor.model_rebuild()
ChatTurnResponse.model_rebuild()
