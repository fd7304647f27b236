"""
models/__init__.py
------------------
Re-export all models so create_tables.py (and any migration tool) can import
Base and discover all tables via a single import:

    from dealhub.models import Base
"""

from dealhub.db.base import Base
from dealhub.models.user import User
from dealhub.models.organization import MemberRole, Organization, OrganizationMember
from dealhub.models.file import File
from dealhub.models.deal_room import DealRoom, DealRoomAsset, DealRoomStatus
from dealhub.models.tracking import AssetClick, DealRoomView, DeviceClass
from dealhub.models.comment import CommentRole, DealRoomComment

__all__ = [
    "Base",
    "User",
    "MemberRole",
    "Organization",
    "OrganizationMember",
    "File",
    "DealRoom",
    "DealRoomAsset",
    "DealRoomStatus",
    "AssetClick",
    "DealRoomView",
    "DeviceClass",
    "CommentRole",
    "DealRoomComment",
]
