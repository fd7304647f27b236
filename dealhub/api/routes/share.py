"""
api/routes/share.py
-------------------
Public (unauthenticated) endpoints reached through a room's share token.

GET  /api/share/{token}            — Room metadata + assets
POST /api/share/{token}/verify     — Email / password gate
POST /api/share/{token}/track      — Record a page view → viewId
POST /api/share/{token}/click      — Record an asset open
POST /api/share/{token}/duration   — Overwrite a view's time on page
GET  /api/share/{token}/comments   — Comment thread
POST /api/share/{token}/comments   — Post as prospect

Every route resolves the token through ShareService.get_available_room, so
unpublished and expired rooms answer 404 / 410 everywhere.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, status

from dealhub.core.config import settings
from dealhub.dependencies import DbSession
from dealhub.schemas.comment import CommentRead, ProspectCommentCreate
from dealhub.schemas.common import SuccessResponse
from dealhub.schemas.share import PublicAsset, PublicRoomRead, VerifyRequest
from dealhub.schemas.tracking import (
    ClickRead,
    ClickRequest,
    DurationRequest,
    TrackViewRequest,
    TrackViewResponse,
)
from dealhub.services.comment_service import CommentService
from dealhub.services.deal_room_service import DealRoomService
from dealhub.services.share_service import ShareService

router = APIRouter(prefix="/api/share/{token}", tags=["Share"])


@router.get("", response_model=PublicRoomRead, summary="Open a shared deal room")
async def get_shared_room(token: str, db: DbSession) -> PublicRoomRead:
    """
    Returns display fields and ordered assets of a published, unexpired room.
    The client shows the gate first when requireEmail or hasPassword is set.
    """
    room = await ShareService.get_available_room(db, token)
    assets = await DealRoomService.list_assets(db, room.id)
    return PublicRoomRead(
        id=room.id,
        name=room.name,
        headline=room.headline,
        welcome_message=room.welcome_message,
        brand_color=room.brand_color,
        logo_url=room.logo_url,
        allow_download=room.allow_download,
        require_email=room.require_email,
        has_password=room.has_password,
        duration_beacon_seconds=settings.DURATION_BEACON_SECONDS,
        comment_poll_seconds=settings.COMMENT_POLL_SECONDS,
        assets=[PublicAsset.model_validate(a) for a in assets],
    )


@router.post("/verify", response_model=SuccessResponse, summary="Pass the room gate")
async def verify(token: str, body: VerifyRequest, db: DbSession) -> SuccessResponse:
    room = await ShareService.get_available_room(db, token)
    ShareService.verify_gate(room, body)
    return SuccessResponse()


@router.post(
    "/track",
    response_model=TrackViewResponse,
    summary="Record a page view",
)
async def track_view(
    token: str,
    body: TrackViewRequest,
    db: DbSession,
    user_agent: Annotated[Optional[str], Header()] = None,
    referer: Annotated[Optional[str], Header()] = None,
) -> TrackViewResponse:
    room = await ShareService.get_available_room(db, token)
    view = await ShareService.track_view(db, room, body, user_agent, referer)
    return TrackViewResponse(view_id=view.id)


@router.post("/click", response_model=ClickRead, summary="Record an asset open")
async def track_click(token: str, body: ClickRequest, db: DbSession) -> ClickRead:
    room = await ShareService.get_available_room(db, token)
    click = await ShareService.track_click(db, room, body.asset_id, body.view_id)
    return ClickRead.model_validate(click)


@router.post(
    "/duration",
    response_model=SuccessResponse,
    summary="Report cumulative seconds on page",
)
async def record_duration(
    token: str, body: DurationRequest, db: DbSession
) -> SuccessResponse:
    room = await ShareService.get_available_room(db, token)
    await ShareService.record_duration(db, room, body.view_id, body.duration)
    return SuccessResponse()


@router.get(
    "/comments",
    response_model=list[CommentRead],
    summary="List the comment thread",
)
async def list_comments(token: str, db: DbSession) -> list[CommentRead]:
    room = await ShareService.get_available_room(db, token)
    comments = await CommentService.list_comments(db, room.id)
    return [CommentRead.model_validate(c) for c in comments]


@router.post(
    "/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post a comment as a prospect",
)
async def post_comment(
    token: str, body: ProspectCommentCreate, db: DbSession
) -> CommentRead:
    room = await ShareService.get_available_room(db, token)
    comment = await CommentService.add_prospect_comment(db, room, body)
    return CommentRead.model_validate(comment)
