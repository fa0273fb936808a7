"""Chat turn orchestration.

A turn is a strictly linear sequence:

1. validate mentor and conversation
2. persist the user message
3. generate the mentor reply over the stored transcript
4. persist the assistant message
5. synthesize speech, best effort
6. touch the conversation's ``updated_at``

Steps 2 and 3 are terminal on failure; nothing after them is attempted.
Step 5 never fails the turn. Each write commits on its own, so a retried
turn relies on the client's idempotency key instead of a transaction.
"""

import asyncio
import base64
import logging
import time
import weakref
from uuid import UUID

from app.core.config import settings
from app.exceptions.base import ValidationError
from app.exceptions.chat import ConversationNotFoundError, MentorNotFoundError
from app.schemas.chat import (
    ChatTurnRequest,
    ChatTurnResponse,
    SpeechOutcome,
    SpeechStatus,
    TranscriptTurn,
)
from app.schemas.conversation import MessageResponse
from app.services.response_generator import MentorResponseGenerator
from app.services.speech_generator import SpeechGenerator
from app.shared.gateway import PersistenceGateway
from models import ConversationStatus, MessageRole, utcnow

logger = logging.getLogger(__name__)

REPLY_KEY_SUFFIX = ":reply"


def default_title(mentor_name: str) -> str:
    return f"Chat with {mentor_name}"


class ChatService:
    """Runs chat turns against injected storage and provider clients."""

    # Per-conversation locks shared across instances; entries vanish once unused
    _conversation_locks: "weakref.WeakValueDictionary[UUID, asyncio.Lock]" = weakref.WeakValueDictionary()

    def __init__(
        self,
        gateway: PersistenceGateway,
        response_generator: MentorResponseGenerator,
        speech_generator: SpeechGenerator,
    ):
        """Initialize chat service.

        Args:
            gateway: Persistence gateway scoped to the current request.
            response_generator: Client for the chat-completion API.
            speech_generator: Client for the text-to-speech API.
        """
        self.gateway = gateway
        self.response_generator = response_generator
        self.speech_generator = speech_generator

    @classmethod
    def _lock_for(cls, conversation_id: UUID) -> asyncio.Lock:
        lock = cls._conversation_locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            cls._conversation_locks[conversation_id] = lock
        return lock

    async def run_turn(self, request: ChatTurnRequest, user_id: UUID) -> ChatTurnResponse:
        """Run one chat turn for ``user_id``.

        Raises:
            MentorNotFoundError: The mentor is missing or inactive.
            ConversationNotFoundError: The conversation is missing or not the caller's.
            ValidationError: The content is blank, or the conversation is inactive or
                bound to another mentor.
            ProviderError: Reply generation failed; the user message stays stored.
            PersistenceError: A storage read or write failed.
        """
        content = request.content.strip()
        if not content:
            raise ValidationError("Message content is required")

        mentor = await self.gateway.select_one("mentors", {"id": request.mentor_id, "is_active": True})
        if not mentor:
            raise MentorNotFoundError()

        conversation = await self.gateway.select_one(
            "conversations", {"id": request.conversation_id, "user_id": user_id}
        )
        if not conversation:
            raise ConversationNotFoundError()
        if conversation.mentor_id != mentor.id:
            raise ValidationError("Mentor does not match conversation")
        if conversation.status != ConversationStatus.ACTIVE:
            raise ValidationError(
                "Conversation is not active", details={"status": conversation.status.value}
            )

        async with self._lock_for(conversation.id):
            user_message, replay = await self._store_user_message(conversation.id, request, content)
            if replay is not None:
                logger.info(f"Replaying stored reply for idempotency key {request.idempotency_key}")
                return self._build_response(
                    conversation.id,
                    user_message,
                    replay,
                    SpeechOutcome(voice_id=mentor.voice_id),
                    include_audio=False,
                    replayed=True,
                )

            history = await self.gateway.select(
                "messages", filters={"conversation_id": conversation.id}, order_by="created_at"
            )
            transcript = [TranscriptTurn(role=m.role.value, content=m.content) for m in history]

            t0 = time.perf_counter()
            reply = await self.response_generator.generate(
                transcript, mentor.system_prompt, mentor.personality
            )
            response_time = int((time.perf_counter() - t0) * 1000)

            assistant_values = {
                "conversation_id": conversation.id,
                "role": MessageRole.ASSISTANT,
                "content": reply,
                "metadata": {"response_time": response_time, "reply_to": str(user_message.id)},
            }
            if request.idempotency_key:
                assistant_values["idempotency_key"] = request.idempotency_key + REPLY_KEY_SUFFIX
            assistant_message = await self.gateway.insert("messages", assistant_values)

            speech = SpeechOutcome(voice_id=mentor.voice_id)
            if request.speak:
                speech = await self._synthesize_best_effort(reply, mentor.voice_id)

            touch = {"updated_at": utcnow()}
            untitled = conversation.title in (None, "", default_title(mentor.name))
            if settings.auto_title_conversations and untitled and len(history) == 1:
                touch["title"] = await self.response_generator.generate_title(user_message.content)
            await self.gateway.update("conversations", conversation.id, touch)

            logger.info(
                f"Chat turn completed for conversation {conversation.id} "
                f"in {response_time}ms (speech: {speech.status.value})"
            )
            return self._build_response(
                conversation.id,
                user_message,
                assistant_message,
                speech,
                include_audio=request.include_audio,
            )

    # Private helper methods

    async def _store_user_message(
        self, conversation_id: UUID, request: ChatTurnRequest, content: str
    ):
        """Persist the user turn, reusing rows stored under the same idempotency key.

        Returns:
            Tuple of the user message and the already stored reply, if any.
        """
        if request.idempotency_key:
            existing = await self.gateway.select_one(
                "messages",
                {
                    "conversation_id": conversation_id,
                    "role": MessageRole.USER,
                    "idempotency_key": request.idempotency_key,
                },
            )
            if existing:
                reply = await self.gateway.select_one(
                    "messages",
                    {
                        "conversation_id": conversation_id,
                        "role": MessageRole.ASSISTANT,
                        "idempotency_key": request.idempotency_key + REPLY_KEY_SUFFIX,
                    },
                )
                return existing, reply

        user_message = await self.gateway.insert(
            "messages",
            {
                "conversation_id": conversation_id,
                "role": MessageRole.USER,
                "content": content,
                "idempotency_key": request.idempotency_key,
            },
        )
        return user_message, None

    async def _synthesize_best_effort(self, text: str, voice_id: str | None) -> SpeechOutcome:
        """Run the speech step; failures are logged and reported, never raised."""
        if not voice_id or not text:
            return SpeechOutcome(voice_id=voice_id)
        try:
            audio = await self.speech_generator.synthesize(text, voice_id)
        except Exception as e:
            logger.warning(f"Speech generation failed for voice {voice_id}: {str(e)}")
            return SpeechOutcome(status=SpeechStatus.FAILED, voice_id=voice_id, error=str(e))
        return SpeechOutcome(status=SpeechStatus.SUCCEEDED, voice_id=voice_id, audio=audio)

    @staticmethod
    def _build_response(
        conversation_id: UUID,
        user_message,
        assistant_message,
        speech: SpeechOutcome,
        include_audio: bool,
        replayed: bool = False,
    ) -> ChatTurnResponse:
        audio_base64 = None
        if include_audio and speech.audio:
            audio_base64 = base64.b64encode(speech.audio).decode("ascii")
        return ChatTurnResponse(
            conversation_id=conversation_id,
            content=assistant_message.content,
            response_time=(assistant_message.extra or {}).get("response_time", 0),
            user_message=MessageResponse.model_validate(user_message),
            assistant_message=MessageResponse.model_validate(assistant_message),
            speech=speech,
            audio_base64=audio_base64,
            replayed=replayed,
        )
