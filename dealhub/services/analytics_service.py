"""
services/analytics_service.py
-----------------------------
Organization-wide engagement rollups for the dashboard.

Every figure is a single set-based query (GROUP BY, outer joins, a
row_number() window) scoped by joining deal_rooms on organization_id.

Ordering that is not asserted anywhere:
  - topRooms ties (equal views) fall back to newest room first
  - deviceBreakdown has no defined order
"""

from datetime import date, datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from dealhub.core.logging import get_logger
from dealhub.db.base import utcnow
from dealhub.models.deal_room import DealRoom, DealRoomAsset
from dealhub.models.tracking import AssetClick, DealRoomView, DeviceClass
from dealhub.schemas.analytics import (
    AnalyticsOverview,
    DayViews,
    DeviceCount,
    RecentActivityItem,
    TopRoom,
)
from dealhub.schemas.tracking import ViewRead

logger = get_logger(__name__)

WEEK = timedelta(days=7)
TOP_ROOMS_LIMIT = 5
VIEWS_BY_DAY_LIMIT = 14
RECENT_ACTIVITY_LIMIT = 10
RECENT_ACTIVITY_PER_ROOM = 5


def _iso_day(value: date | datetime | str) -> str:
    # PostgreSQL returns a date, SQLite the 'YYYY-MM-DD' string
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


class AnalyticsService:

    @staticmethod
    async def get_analytics_overview(
        db: AsyncSession,
        organization_id: str,
        now: datetime | None = None,
    ) -> AnalyticsOverview:
        """
        Totals, trailing-7-day views, top 5 rooms, views for the 14 most recent
        days that have any, and per-device counts.
        An organization without rooms gets zeros and empty lists.
        """
        now = now or utcnow()
        in_org = DealRoom.organization_id == organization_id

        total_rooms = (
            await db.execute(select(func.count(DealRoom.id)).where(in_org))
        ).scalar_one()
        if total_rooms == 0:
            return AnalyticsOverview()

        org_views = select(func.count(DealRoomView.id)).join(
            DealRoom, DealRoomView.deal_room_id == DealRoom.id
        ).where(in_org)
        total_views = (await db.execute(org_views)).scalar_one()
        views_this_week = (
            await db.execute(org_views.where(DealRoomView.viewed_at >= now - WEEK))
        ).scalar_one()

        total_clicks = (
            await db.execute(
                select(func.count(AssetClick.id))
                .join(DealRoomAsset, AssetClick.asset_id == DealRoomAsset.id)
                .join(DealRoom, DealRoomAsset.deal_room_id == DealRoom.id)
                .where(in_org)
            )
        ).scalar_one()

        logger.debug(
            "Analytics overview computed",
            organization_id=organization_id,
            rooms=total_rooms,
            views=total_views,
        )
        return AnalyticsOverview(
            total_rooms=total_rooms,
            total_views=total_views,
            total_clicks=total_clicks,
            views_this_week=views_this_week,
            top_rooms=await AnalyticsService._top_rooms(db, organization_id),
            views_by_day=await AnalyticsService._views_by_day(db, organization_id),
            device_breakdown=await AnalyticsService._device_breakdown(db, organization_id),
        )

    @staticmethod
    async def _top_rooms(db: AsyncSession, organization_id: str) -> list[TopRoom]:
        in_org = DealRoom.organization_id == organization_id
        view_counts = (
            select(
                DealRoomView.deal_room_id.label("deal_room_id"),
                func.count(DealRoomView.id).label("views"),
            )
            .join(DealRoom, DealRoomView.deal_room_id == DealRoom.id)
            .where(in_org)
            .group_by(DealRoomView.deal_room_id)
            .subquery()
        )
        click_counts = (
            select(
                DealRoomAsset.deal_room_id.label("deal_room_id"),
                func.count(AssetClick.id).label("clicks"),
            )
            .join(AssetClick, AssetClick.asset_id == DealRoomAsset.id)
            .join(DealRoom, DealRoomAsset.deal_room_id == DealRoom.id)
            .where(in_org)
            .group_by(DealRoomAsset.deal_room_id)
            .subquery()
        )
        views = func.coalesce(view_counts.c.views, 0)
        clicks = func.coalesce(click_counts.c.clicks, 0)

        rows = (
            await db.execute(
                select(DealRoom.id, DealRoom.name, views.label("views"), clicks.label("clicks"))
                .outerjoin(view_counts, view_counts.c.deal_room_id == DealRoom.id)
                .outerjoin(click_counts, click_counts.c.deal_room_id == DealRoom.id)
                .where(in_org)
                .order_by(views.desc(), DealRoom.created_at.desc())
                .limit(TOP_ROOMS_LIMIT)
            )
        ).all()
        return [
            TopRoom(id=row.id, name=row.name, views=row.views, clicks=row.clicks)
            for row in rows
        ]

    @staticmethod
    async def _views_by_day(db: AsyncSession, organization_id: str) -> list[DayViews]:
        day = func.date(DealRoomView.viewed_at)
        rows = (
            await db.execute(
                select(day.label("day"), func.count(DealRoomView.id).label("views"))
                .join(DealRoom, DealRoomView.deal_room_id == DealRoom.id)
                .where(DealRoom.organization_id == organization_id)
                .group_by(day)
                .order_by(day.desc())
                .limit(VIEWS_BY_DAY_LIMIT)
            )
        ).all()
        return [DayViews(date=_iso_day(row.day), views=row.views) for row in reversed(rows)]

    @staticmethod
    async def _device_breakdown(
        db: AsyncSession, organization_id: str
    ) -> list[DeviceCount]:
        rows = (
            await db.execute(
                select(DealRoomView.device, func.count(DealRoomView.id).label("total"))
                .join(DealRoom, DealRoomView.deal_room_id == DealRoom.id)
                .where(DealRoom.organization_id == organization_id)
                .group_by(DealRoomView.device)
            )
        ).all()
        # NULL and an explicit "unknown" are the same bucket
        counts: dict[str, int] = {}
        for row in rows:
            device = row.device or DeviceClass.unknown.value
            counts[device] = counts.get(device, 0) + row.total
        return [DeviceCount(device=device, count=count) for device, count in counts.items()]

    @staticmethod
    async def get_recent_activity(
        db: AsyncSession,
        organization_id: str,
        limit: int = RECENT_ACTIVITY_LIMIT,
        per_room: int = RECENT_ACTIVITY_PER_ROOM,
    ) -> list[RecentActivityItem]:
        """
        Latest views across the organization, newest first.
        Each room contributes at most `per_room` views before the global cut.
        """
        rank = (
            func.row_number()
            .over(
                partition_by=DealRoomView.deal_room_id,
                order_by=DealRoomView.viewed_at.desc(),
            )
            .label("view_rank")
        )
        ranked = (
            select(DealRoomView, DealRoom.name.label("deal_room_name"), rank)
            .join(DealRoom, DealRoomView.deal_room_id == DealRoom.id)
            .where(DealRoom.organization_id == organization_id)
            .subquery()
        )
        recent_view = aliased(DealRoomView, ranked)

        rows = (
            await db.execute(
                select(recent_view, ranked.c.deal_room_name)
                .where(ranked.c.view_rank <= per_room)
                .order_by(ranked.c.viewed_at.desc())
                .limit(limit)
            )
        ).all()
        return [
            RecentActivityItem(
                **ViewRead.model_validate(view).model_dump(),
                deal_room_name=deal_room_name,
            )
            for view, deal_room_name in rows
        ]
