"""
schemas/deal_room.py
--------------------
Pydantic models for deal rooms and their assets (seller side).

The room password is write-only: requests may carry `password`, responses
only ever expose `hasPassword`.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dealhub.models.deal_room import DealRoomStatus
from dealhub.schemas.common import CamelModel, RequiredText, UtcDateTime
from dealhub.schemas.file import FileRead
from dealhub.schemas.tracking import ViewRead


# ── Assets ────────────────────────────────────────────────────────────────────

class AssetCreate(CamelModel):
    file_id: str
    title: str = Field(..., min_length=1, max_length=512)
    description: Optional[str] = None
    section: Optional[str] = Field(default=None, max_length=255)
    order: int = 0


class AssetUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=512)
    description: Optional[str] = None
    section: Optional[str] = Field(default=None, max_length=255)
    order: Optional[int] = None


class AssetReorder(CamelModel):
    ordered_ids: list[str]


class AssetRead(CamelModel):
    id: str
    deal_room_id: str
    file_id: str
    title: str
    description: Optional[str] = None
    section: Optional[str] = None
    order: int
    created_at: datetime


class AssetWithFileRead(AssetRead):
    file: FileRead


# ── Rooms ─────────────────────────────────────────────────────────────────────

class DealRoomCreate(CamelModel):
    name: RequiredText = Field(..., max_length=255, examples=["Acme renewal"])
    headline: Optional[str] = Field(default=None, max_length=512)
    welcome_message: Optional[str] = None
    brand_color: Optional[str] = Field(default=None, max_length=32)
    logo_url: Optional[str] = Field(default=None, max_length=2048)
    require_email: bool = False
    password: Optional[str] = Field(default=None, max_length=255)
    allow_download: bool = True
    expires_at: UtcDateTime = None
    assets: list[AssetCreate] = Field(default_factory=list)


class DealRoomUpdate(CamelModel):
    name: Optional[RequiredText] = Field(default=None, max_length=255)
    headline: Optional[str] = Field(default=None, max_length=512)
    welcome_message: Optional[str] = None
    brand_color: Optional[str] = Field(default=None, max_length=32)
    logo_url: Optional[str] = Field(default=None, max_length=2048)
    status: Optional[DealRoomStatus] = None
    require_email: Optional[bool] = None
    # "" or null clears the password
    password: Optional[str] = Field(default=None, max_length=255)
    allow_download: Optional[bool] = None
    expires_at: UtcDateTime = None


class DealRoomRead(CamelModel):
    id: str
    name: str
    headline: Optional[str] = None
    welcome_message: Optional[str] = None
    brand_color: Optional[str] = None
    logo_url: Optional[str] = None
    status: str
    share_token: str
    require_email: bool
    has_password: bool
    allow_download: bool
    expires_at: Optional[datetime] = None
    created_by_id: str
    organization_id: str
    created_at: datetime
    updated_at: datetime


class DealRoomDetail(DealRoomRead):
    assets: list[AssetWithFileRead]
    views: list[ViewRead]
    total_clicks: int
