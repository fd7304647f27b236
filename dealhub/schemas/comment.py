"""
schemas/comment.py
------------------
Pydantic models for the per-room comment thread.

There is no author_role field on any request model: the role is decided by
the route that receives the post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dealhub.schemas.common import CamelModel, OptionalText, RequiredText


class SellerCommentCreate(CamelModel):
    message: RequiredText = Field(..., max_length=5000)


class ProspectCommentCreate(CamelModel):
    author_name: RequiredText = Field(..., max_length=255)
    author_email: OptionalText = Field(default=None, max_length=320)
    message: RequiredText = Field(..., max_length=5000)


class CommentRead(CamelModel):
    id: str
    deal_room_id: str
    author_name: str
    author_email: Optional[str] = None
    author_role: str
    author_user_id: Optional[str] = None
    message: str
    created_at: datetime
