"""Dashboard API controller."""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_profile, get_gateway, validate_token
from app.domains.dashboard.service import DashboardService
from app.schemas.base import ResponseSchema
from app.shared.gateway import PersistenceGateway
from models import Profile

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(validate_token)],
)


@router.get("", response_model=ResponseSchema)
async def get_dashboard(
    current_profile: Profile = Depends(get_current_profile),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Recent conversations, learning progress and session counters."""
    result = await DashboardService(gateway).get_overview(current_profile.id)
    return ResponseSchema(
        status="success",
        message="Dashboard retrieved successfully",
        data=result.model_dump(mode="json"),
    )
