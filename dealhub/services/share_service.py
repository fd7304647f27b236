"""
services/share_service.py
-------------------------
Everything reachable through a public share token: availability lookup,
the email / password gate, and engagement tracking.

Availability is checked on every public call, so a room that is unpublished,
archived or expired stops accepting views, clicks, durations and comments
the moment it stops being viewable.

Tracking is best-effort telemetry from the viewer's browser:
  - one view per page load (track_view → viewId)
  - one click per asset open (needs a viewId)
  - the duration beacon sends the cumulative seconds on page; the stored
    value is overwritten, so a lost beacon undercounts and never doubles.
"""

import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dealhub.core.exceptions import (
    InvalidPasswordError,
    NotFoundError,
    RoomExpiredError,
    RoomUnavailableError,
    ValidationError,
)
from dealhub.core.logging import get_logger
from dealhub.core.security import verify_room_password
from dealhub.db.base import as_utc, utcnow
from dealhub.models.deal_room import DealRoom, DealRoomAsset, DealRoomStatus
from dealhub.models.tracking import AssetClick, DealRoomView, DeviceClass
from dealhub.schemas.share import VerifyRequest
from dealhub.schemas.tracking import TrackViewRequest

logger = get_logger(__name__)


def detect_device(user_agent: str | None) -> str:
    """Coarse device class from a User-Agent header."""
    if not user_agent:
        return DeviceClass.unknown.value
    ua = user_agent.lower()
    if "mobile" in ua:
        return DeviceClass.mobile.value
    if "tablet" in ua or "ipad" in ua:
        return DeviceClass.tablet.value
    return DeviceClass.desktop.value


def is_locked(room: DealRoom) -> bool:
    """A room starts locked when it asks for an email or a password."""
    return room.require_email or room.has_password


class ShareService:

    @staticmethod
    async def get_available_room(db: AsyncSession, token: str) -> DealRoom:
        """
        Resolve a share token to a viewable room.

        Raises:
            NotFoundError:        unknown token
            RoomUnavailableError: room is not published
            RoomExpiredError:     expires_at is in the past
        """
        result = await db.execute(select(DealRoom).where(DealRoom.share_token == token))
        room = result.scalar_one_or_none()
        if room is None:
            raise NotFoundError("Room not found")
        if room.status != DealRoomStatus.published.value:
            raise RoomUnavailableError()
        expires_at = as_utc(room.expires_at)
        if expires_at is not None and expires_at < utcnow():
            raise RoomExpiredError()
        return room

    @staticmethod
    def verify_gate(room: DealRoom, data: VerifyRequest) -> None:
        """
        locked → unlocked transition.
        The password must match exactly; a required email must be present.
        Nothing is remembered between attempts.
        """
        if room.has_password and not verify_room_password(data.password, room.password_hash):
            logger.info("Share gate rejected password", room_id=room.id)
            raise InvalidPasswordError()
        if room.require_email and not data.email:
            raise ValidationError("Email is required to view this room")

    @staticmethod
    async def track_view(
        db: AsyncSession,
        room: DealRoom,
        data: TrackViewRequest,
        user_agent: str | None,
        referrer: str | None,
    ) -> DealRoomView:
        view = DealRoomView(
            deal_room_id=room.id,
            visitor_id=data.visitor_id or str(uuid.uuid4()),
            viewer_email=data.viewer_email,
            viewer_name=data.viewer_name,
            viewer_company=data.viewer_company,
            user_agent=user_agent,
            device=detect_device(user_agent),
            referrer=referrer,
            duration=0,
        )
        db.add(view)
        await db.flush()
        logger.info("View tracked", room_id=room.id, view_id=view.id, device=view.device)
        return view

    @staticmethod
    async def track_click(
        db: AsyncSession,
        room: DealRoom,
        asset_id: str | None,
        view_id: str | None,
    ) -> AssetClick:
        if not asset_id or not view_id:
            raise ValidationError("Missing assetId or viewId")

        asset_found = await db.execute(
            select(DealRoomAsset.id).where(
                DealRoomAsset.id == asset_id, DealRoomAsset.deal_room_id == room.id
            )
        )
        if asset_found.first() is None:
            raise NotFoundError("Asset not found")
        view_found = await db.execute(
            select(DealRoomView.id).where(
                DealRoomView.id == view_id, DealRoomView.deal_room_id == room.id
            )
        )
        if view_found.first() is None:
            raise NotFoundError("View not found")

        click = AssetClick(asset_id=asset_id, view_id=view_id, duration=0, downloaded=False)
        db.add(click)
        await db.flush()
        return click

    @staticmethod
    async def record_duration(
        db: AsyncSession,
        room: DealRoom,
        view_id: str | None,
        duration: int | None,
    ) -> None:
        """Overwrite the view's duration with the absolute value reported."""
        if not view_id or duration is None:
            return
        await db.execute(
            update(DealRoomView)
            .where(DealRoomView.id == view_id, DealRoomView.deal_room_id == room.id)
            .values(duration=duration)
        )
