"""
models/tracking.py
------------------
Prospect engagement records written by the public share routes.

DealRoomView: one row per tracked visit. duration holds the cumulative
seconds last reported by the viewer's beacon (absolute, overwritten).
AssetClick:   one row per asset opened during a view.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dealhub.db.base import Base, UUIDPrimaryKeyMixin, utcnow


class DeviceClass(str, PyEnum):
    mobile = "mobile"
    tablet = "tablet"
    desktop = "desktop"
    unknown = "unknown"


class DealRoomView(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "deal_room_views"

    deal_room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deal_rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    visitor_id: Mapped[str] = mapped_column(String(255), nullable=False)
    viewer_email: Mapped[Optional[str]] = mapped_column(String(320))
    viewer_name: Mapped[Optional[str]] = mapped_column(String(255))
    viewer_company: Mapped[Optional[str]] = mapped_column(String(255))
    user_agent: Mapped[Optional[str]] = mapped_column(Text)
    device: Mapped[Optional[str]] = mapped_column(String(20))
    referrer: Mapped[Optional[str]] = mapped_column(Text)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    viewed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    def __repr__(self) -> str:
        return f"<DealRoomView id={self.id} deal_room_id={self.deal_room_id}>"


class AssetClick(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "asset_clicks"

    asset_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deal_room_assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    view_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deal_room_views.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Recorded but never set: opens and downloads are not distinguished yet
    downloaded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    clicked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<AssetClick id={self.id} asset_id={self.asset_id} view_id={self.view_id}>"
