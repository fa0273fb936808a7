# app/core/dependencies.py
"""Request-scoped dependencies.

Storage and provider clients are constructed per request and injected into
the services, so tests swap any of them through ``app.dependency_overrides``.
"""
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import ClerkAuthenticator
from app.database import get_db
from app.domains.chat.service import ChatService
from app.domains.profile.service import ProfileService
from app.exceptions.base import PersistenceError
from app.services.response_generator import MentorResponseGenerator
from app.services.speech_generator import SpeechGenerator
from app.shared.gateway import PersistenceGateway
from models import Profile

logger = logging.getLogger(__name__)

security = HTTPBearer()
auth = ClerkAuthenticator()


async def validate_token(token: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    """Validate and decode the bearer token.

    Returns:
        dict: Decoded token payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        if not token or not token.credentials:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication token is required",
                headers={"WWW-Authenticate": "Bearer"},
            )

        payload = await auth.verify_token(token.credentials)

        if not payload:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return payload

    except HTTPException:
        raise
    except Exception as e:
        logger.error("Token validation error: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def get_gateway(db: AsyncSession = Depends(get_db)) -> PersistenceGateway:
    return PersistenceGateway(db)


def get_response_generator() -> MentorResponseGenerator:
    return MentorResponseGenerator()


def get_speech_generator() -> SpeechGenerator:
    return SpeechGenerator()


def get_chat_service(
    gateway: PersistenceGateway = Depends(get_gateway),
    response_generator: MentorResponseGenerator = Depends(get_response_generator),
    speech_generator: SpeechGenerator = Depends(get_speech_generator),
) -> ChatService:
    return ChatService(gateway, response_generator, speech_generator)


async def get_current_profile(
    request: Request,
    payload: dict = Depends(validate_token),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> Profile:
    """Get the caller's profile, creating it on first sign-in.

    Raises:
        HTTPException: If the token has no subject or storage is unavailable
    """
    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload - missing user ID",
        )

    try:
        profile = await ProfileService(gateway).get_or_create_profile(subject, payload)
    except PersistenceError as e:
        logger.error("Profile lookup failed: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication service error",
        ) from e

    # Add profile info to request state for logging
    request.state.user_id = profile.id
    return profile
