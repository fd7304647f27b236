"""
schemas/analytics.py
--------------------
Response models for the analytics dashboard.
"""

from dealhub.schemas.common import CamelModel
from dealhub.schemas.tracking import ViewRead


class TopRoom(CamelModel):
    id: str
    name: str
    views: int
    clicks: int


class DayViews(CamelModel):
    date: str  # ISO calendar day, UTC
    views: int


class DeviceCount(CamelModel):
    device: str
    count: int


class AnalyticsOverview(CamelModel):
    total_rooms: int = 0
    total_views: int = 0
    total_clicks: int = 0
    views_this_week: int = 0
    top_rooms: list[TopRoom] = []
    views_by_day: list[DayViews] = []
    device_breakdown: list[DeviceCount] = []


class RecentActivityItem(ViewRead):
    deal_room_name: str
