"""
api/routes/analytics.py
-----------------------
Dashboard rollups for the caller's organization.

GET /api/analytics/overview         — Totals, top rooms, views by day, devices
GET /api/analytics/recent-activity  — Latest views with their room names
"""

from fastapi import APIRouter

from dealhub.dependencies import CurrentMember, DbSession
from dealhub.schemas.analytics import AnalyticsOverview, RecentActivityItem
from dealhub.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/overview", response_model=AnalyticsOverview, summary="Analytics overview")
async def overview(db: DbSession, member: CurrentMember) -> AnalyticsOverview:
    return await AnalyticsService.get_analytics_overview(db, member.organization_id)


@router.get(
    "/recent-activity",
    response_model=list[RecentActivityItem],
    summary="Most recent room views",
)
async def recent_activity(db: DbSession, member: CurrentMember) -> list[RecentActivityItem]:
    return await AnalyticsService.get_recent_activity(db, member.organization_id)
