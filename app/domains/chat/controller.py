"""Chat API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Request

from app.core.dependencies import get_chat_service, get_current_profile, validate_token
from app.domains.chat.service import ChatService
from app.exceptions.provider import ProviderError
from app.schemas.base import ResponseSchema
from app.schemas.chat import ChatTurnRequest
from models import Profile

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/chat",
    tags=["chat"],
    dependencies=[Depends(validate_token)],
)


@router.post("", response_model=ResponseSchema, status_code=201)
async def submit_chat_turn(
    request: Request,
    turn: ChatTurnRequest = Body(...),
    current_profile: Profile = Depends(get_current_profile),
    service: ChatService = Depends(get_chat_service),
):
    """Send a message to a mentor and get the generated reply.

    Args:
        turn: Conversation, mentor and user message
        current_profile: Current authenticated user
        service: Chat turn orchestrator

    Returns:
        Generated text, latency in milliseconds, stored messages and the speech outcome
    """
    try:
        result = await service.run_turn(turn, user_id=current_profile.id)
    except ProviderError as e:
        logger.error(
            f"Chat turn failed for conversation {turn.conversation_id} "
            f"(request {getattr(request.state, 'request_id', None)}): {str(e)}"
        )
        raise

    return ResponseSchema(
        status="success",
        message="Response generated successfully",
        data=result.model_dump(mode="json"),
    )
