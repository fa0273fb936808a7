"""Dashboard service layer."""

import logging
from collections.abc import Iterable
from datetime import timedelta
from uuid import UUID

from app.core.config import settings
from app.schemas.conversation import ConversationWithMentor
from app.schemas.dashboard import DashboardOverview, DashboardStats, ProgressResponse
from app.shared.gateway import PersistenceGateway
from models import ProgressTracking, utcnow

logger = logging.getLogger(__name__)


def summarize_progress(rows: Iterable[ProgressTracking]) -> DashboardStats:
    """Fold progress rows into dashboard counters.

    ``active_topics`` is the number of rows, since a user has one row per topic.
    ``this_week_sessions`` is left at zero for the caller to fill in.
    """
    rows = list(rows)
    return DashboardStats(
        total_sessions=sum(row.sessions_completed or 0 for row in rows),
        total_minutes=sum(row.total_time_minutes or 0 for row in rows),
        active_topics=len(rows),
    )


class DashboardService:
    """Recent activity and progress summary for one user."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def get_overview(self, user_id: UUID) -> DashboardOverview:
        """Build the dashboard overview.

        Args:
            user_id: Profile ID of the caller

        Returns:
            The most recently updated conversations with their mentors, every
            progress row ordered by last activity and the summary counters
        """
        conversations = await self.gateway.select(
            "conversations",
            filters={"user_id": user_id},
            order_by="updated_at",
            descending=True,
            limit=settings.dashboard_recent_conversations,
            load=["mentor"],
        )
        progress = await self.gateway.select(
            "progress_tracking",
            filters={"user_id": user_id},
            order_by="last_activity_at",
            descending=True,
        )

        stats = summarize_progress(progress)
        week_start = utcnow() - timedelta(days=settings.dashboard_week_days)
        stats.this_week_sessions = await self.gateway.count(
            "conversations",
            filters={"user_id": user_id},
            since={"created_at": week_start},
        )

        logger.debug(
            f"Dashboard for {user_id}: {len(conversations)} recent conversations, "
            f"{stats.active_topics} topics"
        )
        return DashboardOverview(
            stats=stats,
            recent_conversations=[ConversationWithMentor.model_validate(c) for c in conversations],
            progress=[ProgressResponse.model_validate(p) for p in progress],
        )
