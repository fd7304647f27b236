"""
models/deal_room.py
-------------------
Deal rooms and the assets (files placed in a room) they display.

share_token is generated once at creation and is the only key the public
share routes accept. Deleting a room cascades at the database level to its
assets, views and comments, and from there to asset clicks.
"""

import secrets
from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealhub.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin


class DealRoomStatus(str, PyEnum):
    draft = "draft"
    published = "published"
    expired = "expired"
    archived = "archived"


def generate_share_token() -> str:
    return secrets.token_urlsafe(24)


class DealRoom(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "deal_rooms"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    headline: Mapped[Optional[str]] = mapped_column(String(512))
    welcome_message: Mapped[Optional[str]] = mapped_column(Text)
    brand_color: Mapped[Optional[str]] = mapped_column(String(32))
    logo_url: Mapped[Optional[str]] = mapped_column(String(2048))
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DealRoomStatus.draft.value
    )
    share_token: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True, default=generate_share_token
    )

    # Gate
    require_email: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255))
    allow_download: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    created_by_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=False
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships (children are removed by the database on delete)
    assets: Mapped[list["DealRoomAsset"]] = relationship(
        "DealRoomAsset", back_populates="deal_room", passive_deletes=True
    )

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def __repr__(self) -> str:
        return f"<DealRoom id={self.id} status={self.status}>"


class DealRoomAsset(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "deal_room_assets"

    deal_room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deal_rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("files.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    section: Mapped[Optional[str]] = mapped_column(String(255))
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    deal_room: Mapped["DealRoom"] = relationship("DealRoom", back_populates="assets")
    file: Mapped["File"] = relationship("File", lazy="raise")  # noqa: F821

    def __repr__(self) -> str:
        return f"<DealRoomAsset id={self.id} deal_room_id={self.deal_room_id} order={self.order}>"
