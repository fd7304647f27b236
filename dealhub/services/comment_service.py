"""
services/comment_service.py
---------------------------
Append-only comment thread shared by a room's seller and its prospects.

The author role is an argument of the service call, chosen by the route:
the seller route always writes 'seller', the share route always 'prospect'.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dealhub.core.logging import get_logger
from dealhub.models.comment import CommentRole, DealRoomComment
from dealhub.models.deal_room import DealRoom
from dealhub.models.user import User
from dealhub.schemas.comment import ProspectCommentCreate

logger = get_logger(__name__)


class CommentService:

    @staticmethod
    async def list_comments(db: AsyncSession, room_id: str) -> list[DealRoomComment]:
        result = await db.execute(
            select(DealRoomComment)
            .where(DealRoomComment.deal_room_id == room_id)
            .order_by(DealRoomComment.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _append(db: AsyncSession, comment: DealRoomComment) -> DealRoomComment:
        db.add(comment)
        await db.flush()
        logger.info(
            "Comment posted",
            comment_id=comment.id,
            room_id=comment.deal_room_id,
            role=comment.author_role,
        )
        return comment

    @staticmethod
    async def add_seller_comment(
        db: AsyncSession, room: DealRoom, author: User, message: str
    ) -> DealRoomComment:
        return await CommentService._append(
            db,
            DealRoomComment(
                deal_room_id=room.id,
                author_name=author.display_name,
                author_email=author.email,
                author_role=CommentRole.seller.value,
                author_user_id=author.id,
                message=message,
            ),
        )

    @staticmethod
    async def add_prospect_comment(
        db: AsyncSession, room: DealRoom, data: ProspectCommentCreate
    ) -> DealRoomComment:
        return await CommentService._append(
            db,
            DealRoomComment(
                deal_room_id=room.id,
                author_name=data.author_name,
                author_email=data.author_email,
                author_role=CommentRole.prospect.value,
                message=data.message,
            ),
        )
