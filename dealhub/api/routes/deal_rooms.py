"""
api/routes/deal_rooms.py
------------------------
Seller-side deal room endpoints. All routes are scoped to the caller's
organization; rooms of other organizations answer 404.

GET    /api/deal-rooms                            — List rooms
POST   /api/deal-rooms                            — Create a draft room (+ assets)
GET    /api/deal-rooms/{id}                       — Room with assets, views, clicks
PUT    /api/deal-rooms/{id}                       — Update room fields
PUT    /api/deal-rooms/{id}/publish               — Publish
DELETE /api/deal-rooms/{id}                       — Delete (cascades)
POST   /api/deal-rooms/{id}/assets                — Add an asset
PUT    /api/deal-rooms/{id}/assets/reorder        — Rewrite asset order
PUT    /api/deal-rooms/{id}/assets/{assetId}      — Update an asset
DELETE /api/deal-rooms/{id}/assets/{assetId}      — Remove an asset
GET    /api/deal-rooms/{id}/comments              — Comment thread
POST   /api/deal-rooms/{id}/comments              — Post as seller
"""

from fastapi import APIRouter, status

from dealhub.dependencies import CurrentMember, CurrentUser, DbSession
from dealhub.schemas.comment import CommentRead, SellerCommentCreate
from dealhub.schemas.common import SuccessResponse
from dealhub.schemas.deal_room import (
    AssetCreate,
    AssetRead,
    AssetReorder,
    AssetUpdate,
    AssetWithFileRead,
    DealRoomCreate,
    DealRoomDetail,
    DealRoomRead,
    DealRoomUpdate,
)
from dealhub.schemas.tracking import ViewRead
from dealhub.services.comment_service import CommentService
from dealhub.services.deal_room_service import DealRoomService

router = APIRouter(prefix="/api/deal-rooms", tags=["Deal Rooms"])


@router.get("", response_model=list[DealRoomRead], summary="List deal rooms")
async def list_rooms(db: DbSession, member: CurrentMember) -> list[DealRoomRead]:
    rooms = await DealRoomService.list_rooms(db, member.organization_id)
    return [DealRoomRead.model_validate(r) for r in rooms]


@router.post(
    "",
    response_model=DealRoomRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a draft deal room",
)
async def create_room(
    body: DealRoomCreate, db: DbSession, member: CurrentMember
) -> DealRoomRead:
    """
    The room always starts as a draft with a fresh share token.
    `assets` may list files from the organization's library to place in it.
    """
    room = await DealRoomService.create_room(
        db, member.organization_id, member.user_id, body
    )
    return DealRoomRead.model_validate(room)


@router.get("/{room_id}", response_model=DealRoomDetail, summary="Get a deal room")
async def get_room(room_id: str, db: DbSession, member: CurrentMember) -> DealRoomDetail:
    detail = await DealRoomService.get_room_detail(db, member.organization_id, room_id)
    return DealRoomDetail(
        **DealRoomRead.model_validate(detail["room"]).model_dump(),
        assets=[AssetWithFileRead.model_validate(a) for a in detail["assets"]],
        views=[ViewRead.model_validate(v) for v in detail["views"]],
        total_clicks=detail["total_clicks"],
    )


@router.put("/{room_id}", response_model=DealRoomRead, summary="Update a deal room")
async def update_room(
    room_id: str, body: DealRoomUpdate, db: DbSession, member: CurrentMember
) -> DealRoomRead:
    room = await DealRoomService.update_room(db, member.organization_id, room_id, body)
    return DealRoomRead.model_validate(room)


@router.put("/{room_id}/publish", response_model=DealRoomRead, summary="Publish a deal room")
async def publish_room(room_id: str, db: DbSession, member: CurrentMember) -> DealRoomRead:
    room = await DealRoomService.publish_room(db, member.organization_id, room_id)
    return DealRoomRead.model_validate(room)


@router.delete("/{room_id}", response_model=SuccessResponse, summary="Delete a deal room")
async def delete_room(room_id: str, db: DbSession, member: CurrentMember) -> SuccessResponse:
    await DealRoomService.delete_room(db, member.organization_id, room_id)
    return SuccessResponse()


# ── Assets ────────────────────────────────────────────────────────────────────

@router.post(
    "/{room_id}/assets",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a file to a deal room",
)
async def add_asset(
    room_id: str, body: AssetCreate, db: DbSession, member: CurrentMember
) -> AssetRead:
    asset = await DealRoomService.add_asset(db, member.organization_id, room_id, body)
    return AssetRead.model_validate(asset)


# Registered before /{asset_id} so "reorder" is never read as an asset id
@router.put(
    "/{room_id}/assets/reorder",
    response_model=list[AssetWithFileRead],
    summary="Reorder the assets of a deal room",
)
async def reorder_assets(
    room_id: str, body: AssetReorder, db: DbSession, member: CurrentMember
) -> list[AssetWithFileRead]:
    assets = await DealRoomService.reorder_assets(
        db, member.organization_id, room_id, body.ordered_ids
    )
    return [AssetWithFileRead.model_validate(a) for a in assets]


@router.put(
    "/{room_id}/assets/{asset_id}",
    response_model=AssetRead,
    summary="Update an asset's display fields",
)
async def update_asset(
    room_id: str,
    asset_id: str,
    body: AssetUpdate,
    db: DbSession,
    member: CurrentMember,
) -> AssetRead:
    asset = await DealRoomService.update_asset(
        db, member.organization_id, room_id, asset_id, body
    )
    return AssetRead.model_validate(asset)


@router.delete(
    "/{room_id}/assets/{asset_id}",
    response_model=SuccessResponse,
    summary="Remove an asset from a deal room",
)
async def delete_asset(
    room_id: str, asset_id: str, db: DbSession, member: CurrentMember
) -> SuccessResponse:
    await DealRoomService.delete_asset(db, member.organization_id, room_id, asset_id)
    return SuccessResponse()


# ── Comments ──────────────────────────────────────────────────────────────────

@router.get(
    "/{room_id}/comments",
    response_model=list[CommentRead],
    summary="List the comment thread of a deal room",
)
async def list_comments(
    room_id: str, db: DbSession, member: CurrentMember
) -> list[CommentRead]:
    room = await DealRoomService.get_room(db, member.organization_id, room_id)
    comments = await CommentService.list_comments(db, room.id)
    return [CommentRead.model_validate(c) for c in comments]


@router.post(
    "/{room_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post a comment as the seller",
)
async def post_comment(
    room_id: str,
    body: SellerCommentCreate,
    db: DbSession,
    member: CurrentMember,
    current_user: CurrentUser,
) -> CommentRead:
    room = await DealRoomService.get_room(db, member.organization_id, room_id)
    comment = await CommentService.add_seller_comment(db, room, current_user, body.message)
    return CommentRead.model_validate(comment)
