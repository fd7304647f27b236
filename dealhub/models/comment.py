"""
models/comment.py
-----------------
Append-only comment thread per deal room, shared by seller and prospect.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dealhub.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class CommentRole(str, PyEnum):
    seller = "seller"
    prospect = "prospect"


class DealRoomComment(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "deal_room_comments"

    deal_room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deal_rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_email: Mapped[Optional[str]] = mapped_column(String(320))
    author_role: Mapped[str] = mapped_column(String(20), nullable=False)
    # Set only for seller posts
    author_user_id: Mapped[Optional[str]] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<DealRoomComment id={self.id} role={self.author_role}>"
