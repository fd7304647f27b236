"""
schemas/tracking.py
-------------------
Pydantic models for view / click / duration tracking.

assetId and viewId on ClickRequest are declared optional so a missing value
reaches the route and is reported as "Missing assetId or viewId".
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dealhub.schemas.common import CamelModel, OptionalText


class TrackViewRequest(CamelModel):
    visitor_id: OptionalText = Field(default=None, max_length=255)
    viewer_email: OptionalText = Field(default=None, max_length=320)
    viewer_name: OptionalText = Field(default=None, max_length=255)
    viewer_company: OptionalText = Field(default=None, max_length=255)


class TrackViewResponse(CamelModel):
    view_id: str


class ClickRequest(CamelModel):
    asset_id: Optional[str] = None
    view_id: Optional[str] = None


class DurationRequest(CamelModel):
    view_id: Optional[str] = None
    duration: Optional[int] = Field(
        default=None, ge=0, description="Cumulative seconds on page (absolute)"
    )


class ViewRead(CamelModel):
    id: str
    deal_room_id: str
    visitor_id: str
    viewer_email: Optional[str] = None
    viewer_name: Optional[str] = None
    viewer_company: Optional[str] = None
    user_agent: Optional[str] = None
    device: Optional[str] = None
    referrer: Optional[str] = None
    duration: int
    viewed_at: datetime


class ClickRead(CamelModel):
    id: str
    asset_id: str
    view_id: str
    duration: int
    downloaded: bool
    clicked_at: datetime
