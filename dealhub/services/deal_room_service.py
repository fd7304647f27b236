"""
services/deal_room_service.py
-----------------------------
Seller-side deal room and asset management.

Critical security invariant:
  Every room lookup includes organization_id in the WHERE clause. A room that
  exists in another organization is indistinguishable from a missing one
  (NotFoundError), and every asset operation goes through the room lookup
  first.
"""

from typing import Any, Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dealhub.core.exceptions import NotFoundError
from dealhub.core.logging import get_logger
from dealhub.core.security import hash_room_password
from dealhub.db.base import utcnow
from dealhub.models.deal_room import DealRoom, DealRoomAsset, DealRoomStatus
from dealhub.models.file import File
from dealhub.models.tracking import AssetClick, DealRoomView
from dealhub.schemas.deal_room import (
    AssetCreate,
    AssetUpdate,
    DealRoomCreate,
    DealRoomUpdate,
)

logger = get_logger(__name__)


class DealRoomService:

    # ── Rooms ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def list_rooms(db: AsyncSession, organization_id: str) -> list[DealRoom]:
        result = await db.execute(
            select(DealRoom)
            .where(DealRoom.organization_id == organization_id)
            .order_by(DealRoom.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_room(db: AsyncSession, organization_id: str, room_id: str) -> DealRoom:
        result = await db.execute(
            select(DealRoom).where(
                DealRoom.id == room_id, DealRoom.organization_id == organization_id
            )
        )
        room = result.scalar_one_or_none()
        if room is None:
            raise NotFoundError()
        return room

    @staticmethod
    async def create_room(
        db: AsyncSession,
        organization_id: str,
        created_by_id: str,
        data: DealRoomCreate,
    ) -> DealRoom:
        """
        Create a draft room, optionally with its initial assets.
        Every referenced file must belong to the caller's organization.
        """
        fields = data.model_dump(exclude={"assets", "password"})
        room = DealRoom(
            **fields,
            password_hash=hash_room_password(data.password) if data.password else None,
            status=DealRoomStatus.draft.value,
            created_by_id=created_by_id,
            organization_id=organization_id,
        )
        db.add(room)
        await db.flush()

        if data.assets:
            await DealRoomService._ensure_files_owned(
                db, organization_id, (a.file_id for a in data.assets)
            )
            db.add_all(
                DealRoomAsset(deal_room_id=room.id, **asset.model_dump())
                for asset in data.assets
            )
            await db.flush()

        await db.refresh(room)
        logger.info(
            "Deal room created",
            room_id=room.id,
            organization_id=organization_id,
            assets=len(data.assets),
        )
        return room

    @staticmethod
    async def get_room_detail(
        db: AsyncSession, organization_id: str, room_id: str
    ) -> dict[str, Any]:
        """Room plus ordered assets, views (newest first) and total clicks."""
        room = await DealRoomService.get_room(db, organization_id, room_id)
        assets = await DealRoomService.list_assets(db, room.id)

        views_result = await db.execute(
            select(DealRoomView)
            .where(DealRoomView.deal_room_id == room.id)
            .order_by(DealRoomView.viewed_at.desc())
        )
        clicks_result = await db.execute(
            select(func.count(AssetClick.id))
            .join(DealRoomAsset, AssetClick.asset_id == DealRoomAsset.id)
            .where(DealRoomAsset.deal_room_id == room.id)
        )
        return {
            "room": room,
            "assets": assets,
            "views": list(views_result.scalars().all()),
            "total_clicks": clicks_result.scalar_one(),
        }

    @staticmethod
    async def update_room(
        db: AsyncSession,
        organization_id: str,
        room_id: str,
        data: DealRoomUpdate,
    ) -> DealRoom:
        room = await DealRoomService.get_room(db, organization_id, room_id)
        changes = data.model_dump(exclude_unset=True)

        if "password" in changes:
            password = changes.pop("password")
            room.password_hash = hash_room_password(password) if password else None
        if "status" in changes and changes["status"] is not None:
            changes["status"] = DealRoomStatus(changes["status"]).value

        for field, value in changes.items():
            if value is None and field in ("name", "status", "require_email", "allow_download"):
                continue
            setattr(room, field, value)

        room.updated_at = utcnow()
        await db.flush()
        await db.refresh(room)
        logger.info(
            "Deal room updated",
            room_id=room.id,
            fields=sorted(data.model_dump(exclude_unset=True)),
        )
        return room

    @staticmethod
    async def publish_room(
        db: AsyncSession, organization_id: str, room_id: str
    ) -> DealRoom:
        return await DealRoomService.update_room(
            db, organization_id, room_id, DealRoomUpdate(status=DealRoomStatus.published)
        )

    @staticmethod
    async def delete_room(db: AsyncSession, organization_id: str, room_id: str) -> None:
        """Delete a room; assets, views, comments and clicks go with it (FK cascade)."""
        room = await DealRoomService.get_room(db, organization_id, room_id)
        await db.execute(delete(DealRoom).where(DealRoom.id == room.id))
        await db.flush()
        logger.info("Deal room deleted", room_id=room_id, organization_id=organization_id)

    # ── Assets ────────────────────────────────────────────────────────────────

    @staticmethod
    async def _ensure_files_owned(
        db: AsyncSession, organization_id: str, file_ids: Iterable[str]
    ) -> None:
        wanted = set(file_ids)
        result = await db.execute(
            select(File.id).where(
                File.id.in_(wanted), File.organization_id == organization_id
            )
        )
        if set(result.scalars().all()) != wanted:
            raise NotFoundError("File not found")

    @staticmethod
    async def list_assets(db: AsyncSession, room_id: str) -> list[DealRoomAsset]:
        result = await db.execute(
            select(DealRoomAsset)
            .options(selectinload(DealRoomAsset.file))
            .where(DealRoomAsset.deal_room_id == room_id)
            .order_by(DealRoomAsset.order, DealRoomAsset.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _get_asset(db: AsyncSession, room_id: str, asset_id: str) -> DealRoomAsset:
        result = await db.execute(
            select(DealRoomAsset).where(
                DealRoomAsset.id == asset_id, DealRoomAsset.deal_room_id == room_id
            )
        )
        asset = result.scalar_one_or_none()
        if asset is None:
            raise NotFoundError("Asset not found")
        return asset

    @staticmethod
    async def add_asset(
        db: AsyncSession,
        organization_id: str,
        room_id: str,
        data: AssetCreate,
    ) -> DealRoomAsset:
        room = await DealRoomService.get_room(db, organization_id, room_id)
        await DealRoomService._ensure_files_owned(db, organization_id, [data.file_id])

        asset = DealRoomAsset(deal_room_id=room.id, **data.model_dump())
        db.add(asset)
        await db.flush()
        await db.refresh(asset)
        logger.info("Asset added", asset_id=asset.id, room_id=room.id, file_id=data.file_id)
        return asset

    @staticmethod
    async def update_asset(
        db: AsyncSession,
        organization_id: str,
        room_id: str,
        asset_id: str,
        data: AssetUpdate,
    ) -> DealRoomAsset:
        room = await DealRoomService.get_room(db, organization_id, room_id)
        asset = await DealRoomService._get_asset(db, room.id, asset_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("title", "order"):
                continue
            setattr(asset, field, value)
        await db.flush()
        await db.refresh(asset)
        return asset

    @staticmethod
    async def delete_asset(
        db: AsyncSession, organization_id: str, room_id: str, asset_id: str
    ) -> None:
        room = await DealRoomService.get_room(db, organization_id, room_id)
        asset = await DealRoomService._get_asset(db, room.id, asset_id)
        await db.execute(delete(DealRoomAsset).where(DealRoomAsset.id == asset.id))
        await db.flush()
        logger.info("Asset removed", asset_id=asset_id, room_id=room.id)

    @staticmethod
    async def reorder_assets(
        db: AsyncSession,
        organization_id: str,
        room_id: str,
        ordered_ids: list[str],
    ) -> list[DealRoomAsset]:
        """
        Rewrite `order` from the client's full ordered id list (order = index).
        Ids that are not assets of this room are ignored.
        """
        room = await DealRoomService.get_room(db, organization_id, room_id)
        assets = {a.id: a for a in await DealRoomService.list_assets(db, room.id)}
        for index, asset_id in enumerate(ordered_ids):
            asset = assets.get(asset_id)
            if asset is not None:
                asset.order = index
        await db.flush()
        logger.info("Assets reordered", room_id=room.id, count=len(ordered_ids))
        return await DealRoomService.list_assets(db, room.id)
