# app/domains/profile/service.py
import logging
from uuid import UUID

from app.exceptions.base import PersistenceError
from app.shared.gateway import PersistenceGateway
from models import Profile

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def get_profile_by_external_id(self, external_id: str) -> Profile | None:
        """Get a profile by identity provider subject id."""
        return await self.gateway.select_one("profiles", {"external_id": external_id})

    async def get_profile_by_id(self, profile_id: UUID) -> Profile | None:
        return await self.gateway.select_one("profiles", {"id": profile_id})

    async def create_profile(self, external_id: str, email: str, full_name: str | None = None) -> Profile:
        """Create a new profile."""
        return await self.gateway.insert(
            "profiles",
            {"external_id": external_id, "email": email, "full_name": full_name},
        )

    async def get_or_create_profile(self, external_id: str, token_payload: dict) -> Profile:
        """Get existing profile or create one from the token payload.

        Concurrent first requests for the same subject can both miss the
        lookup; the one that loses the insert reads the winner's row.
        """
        profile = await self.get_profile_by_external_id(external_id)
        if profile:
            return profile

        try:
            return await self.create_profile(
                external_id=external_id,
                # Tokens without an email claim still need a unique address
                email=token_payload.get("email") or f"{external_id}@users.noreply",
                full_name=token_payload.get("full_name") or token_payload.get("name"),
            )
        except PersistenceError:
            profile = await self.get_profile_by_external_id(external_id)
            if profile is None:
                raise
            logger.info(f"Profile for {external_id} was created by a concurrent request")
            return profile
