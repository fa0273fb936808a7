"""Mentor service layer."""

from uuid import UUID

from app.exceptions.chat import MentorNotFoundError
from app.schemas.mentor import MentorListResponse, MentorResponse
from app.shared.gateway import PersistenceGateway


class MentorService:
    """Read-only access to mentor personas."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def list_mentors(self) -> MentorListResponse:
        """Active mentors, default mentors first, then by name."""
        mentors = await self.gateway.select("mentors", filters={"is_active": True}, order_by="name")
        # stable sort keeps the name order within each group
        mentors.sort(key=lambda m: not m.is_default)
        return MentorListResponse(
            mentors=[MentorResponse.model_validate(m) for m in mentors],
            total=len(mentors),
        )

    async def get_mentor(self, mentor_id: UUID) -> MentorResponse:
        mentor = await self.gateway.select_one("mentors", {"id": mentor_id, "is_active": True})
        if not mentor:
            raise MentorNotFoundError()
        return MentorResponse.model_validate(mentor)
