"""Conversation API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query

from app.core.dependencies import get_current_profile, get_gateway, validate_token
from app.domains.conversation.service import ConversationService
from app.schemas.base import ResponseSchema
from app.schemas.conversation import ConversationCreate, ConversationUpdate
from app.shared.gateway import PersistenceGateway
from models import ConversationStatus, Profile


router = APIRouter(
    prefix="/api/conversations",
    tags=["conversations"],
    dependencies=[Depends(validate_token)],
)


@router.post("", response_model=ResponseSchema, status_code=201)
async def start_conversation(
    payload: ConversationCreate = Body(...),
    current_profile: Profile = Depends(get_current_profile),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Start a conversation with the selected mentor.

    Args:
        payload: Mentor ID and optional topic
        current_profile: Current authenticated user
        gateway: Persistence gateway

    Returns:
        The new conversation with its mentor
    """
    result = await ConversationService(gateway).start_conversation(
        user_id=current_profile.id, mentor_id=payload.mentor_id, topic=payload.topic
    )
    return ResponseSchema(
        status="success",
        message="Conversation started successfully",
        data=result.model_dump(mode="json"),
    )


@router.get("", response_model=ResponseSchema)
async def list_conversations(
    status: ConversationStatus | None = Query(None, description="Filter by status"),
    limit: int = Query(20, ge=1, le=100, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    current_profile: Profile = Depends(get_current_profile),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """List the current user's conversations, most recently active first."""
    result = await ConversationService(gateway).list_conversations(
        user_id=current_profile.id, status=status, limit=limit, offset=offset
    )
    return ResponseSchema(
        status="success",
        message="Conversations retrieved successfully",
        data=result.model_dump(mode="json"),
    )


@router.get("/{conversation_id}", response_model=ResponseSchema)
async def get_conversation(
    conversation_id: UUID = Path(..., description="Conversation ID"),
    current_profile: Profile = Depends(get_current_profile),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Get a conversation with its mentor."""
    result = await ConversationService(gateway).get_conversation(conversation_id, current_profile.id)
    return ResponseSchema(
        status="success",
        message="Conversation retrieved successfully",
        data=result.model_dump(mode="json"),
    )


@router.get("/{conversation_id}/messages", response_model=ResponseSchema)
async def get_messages(
    conversation_id: UUID = Path(..., description="Conversation ID"),
    current_profile: Profile = Depends(get_current_profile),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Get the conversation transcript in creation order."""
    result = await ConversationService(gateway).get_messages(conversation_id, current_profile.id)
    return ResponseSchema(
        status="success",
        message="Messages retrieved successfully",
        data=result.model_dump(mode="json"),
    )


@router.patch("/{conversation_id}", response_model=ResponseSchema)
async def update_conversation(
    conversation_id: UUID = Path(..., description="Conversation ID"),
    payload: ConversationUpdate = Body(...),
    current_profile: Profile = Depends(get_current_profile),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Archive or complete a conversation."""
    result = await ConversationService(gateway).update_status(
        conversation_id, current_profile.id, payload.status
    )
    return ResponseSchema(
        status="success",
        message="Conversation updated successfully",
        data=result.model_dump(mode="json"),
    )
