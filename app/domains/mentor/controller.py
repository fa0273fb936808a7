"""Mentor API controller."""

from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.core.dependencies import get_gateway, validate_token
from app.domains.mentor.service import MentorService
from app.schemas.base import ResponseSchema
from app.shared.gateway import PersistenceGateway

router = APIRouter(
    prefix="/api/mentors",
    tags=["mentors"],
    dependencies=[Depends(validate_token)],
)


@router.get("", response_model=ResponseSchema)
async def list_mentors(gateway: PersistenceGateway = Depends(get_gateway)):
    """List active mentors for the selection screen."""
    result = await MentorService(gateway).list_mentors()
    return ResponseSchema(
        status="success",
        message="Mentors retrieved successfully",
        data=result.model_dump(mode="json"),
    )


@router.get("/{mentor_id}", response_model=ResponseSchema)
async def get_mentor(
    mentor_id: UUID = Path(..., description="Mentor ID"),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Get one active mentor."""
    result = await MentorService(gateway).get_mentor(mentor_id)
    return ResponseSchema(
        status="success",
        message="Mentor retrieved successfully",
        data=result.model_dump(mode="json"),
    )
