"""Conversation service layer."""

import logging
from uuid import UUID

from app.domains.chat.service import default_title
from app.exceptions.chat import ConversationNotFoundError, MentorNotFoundError
from app.schemas.conversation import (
    ConversationListResponse,
    ConversationResponse,
    ConversationWithMentor,
    MessageResponse,
    TranscriptResponse,
)
from app.shared.gateway import PersistenceGateway
from models import ConversationStatus

logger = logging.getLogger(__name__)


class ConversationService:
    """Conversation lifecycle and transcript reads."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def start_conversation(
        self, user_id: UUID, mentor_id: UUID, topic: str | None = None
    ) -> ConversationWithMentor:
        """Create an active conversation with an active mentor.

        Raises:
            MentorNotFoundError: The mentor is missing or inactive.
        """
        mentor = await self.gateway.select_one("mentors", {"id": mentor_id, "is_active": True})
        if not mentor:
            raise MentorNotFoundError()

        conversation = await self.gateway.insert(
            "conversations",
            {
                "user_id": user_id,
                "mentor_id": mentor.id,
                "title": default_title(mentor.name),
                "topic": topic,
                "status": ConversationStatus.ACTIVE,
            },
        )
        logger.info(f"Started conversation {conversation.id} with mentor {mentor.name}")
        return await self.get_conversation(conversation.id, user_id)

    async def list_conversations(
        self,
        user_id: UUID,
        status: ConversationStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> ConversationListResponse:
        """The caller's conversations, most recently updated first."""
        filters = {"user_id": user_id}
        if status:
            filters["status"] = status

        total = await self.gateway.count("conversations", filters=filters)
        conversations = await self.gateway.select(
            "conversations",
            filters=filters,
            order_by="updated_at",
            descending=True,
            limit=limit,
            offset=offset,
        )
        return ConversationListResponse(
            conversations=[ConversationResponse.model_validate(c) for c in conversations],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def get_conversation(self, conversation_id: UUID, user_id: UUID) -> ConversationWithMentor:
        conversation = await self.gateway.select_one(
            "conversations", {"id": conversation_id, "user_id": user_id}, load=["mentor"]
        )
        if not conversation:
            raise ConversationNotFoundError()
        return ConversationWithMentor.model_validate(conversation)

    async def get_messages(self, conversation_id: UUID, user_id: UUID) -> TranscriptResponse:
        """Transcript in creation order.

        Raises:
            ConversationNotFoundError: The conversation is missing or not the caller's.
        """
        conversation = await self.gateway.select_one(
            "conversations", {"id": conversation_id, "user_id": user_id}
        )
        if not conversation:
            raise ConversationNotFoundError()

        messages = await self.gateway.select(
            "messages", filters={"conversation_id": conversation_id}, order_by="created_at"
        )
        return TranscriptResponse(
            conversation_id=conversation_id,
            messages=[MessageResponse.model_validate(m) for m in messages],
            message_count=len(messages),
        )

    async def update_status(
        self, conversation_id: UUID, user_id: UUID, status: ConversationStatus
    ) -> ConversationResponse:
        conversation = await self.gateway.select_one(
            "conversations", {"id": conversation_id, "user_id": user_id}
        )
        if not conversation:
            raise ConversationNotFoundError()

        updated = await self.gateway.update("conversations", conversation.id, {"status": status})
        logger.info(f"Conversation {conversation_id} marked {status.value}")
        return ConversationResponse.model_validate(updated)
