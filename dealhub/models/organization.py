"""
models/organization.py
----------------------
Organization (tenant) and membership models.

Each organization is an isolated unit: files and deal rooms carry
organization_id and every seller-side query filters on it.

Role design:
  - 'owner':  the creator; exactly one per organization, immutable.
  - 'admin':  can manage team roles and organization settings.
  - 'member': can manage files and deal rooms.

organization_members.user_id is unique: a user belongs to exactly one
organization, which lets get-or-create resolve races with the constraint
instead of a lock.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealhub.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin

DEFAULT_BRAND_COLOR = "#2563EB"


class MemberRole(str, PyEnum):
    owner = "owner"
    admin = "admin"
    member = "member"


class Organization(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(2048))
    brand_color: Mapped[Optional[str]] = mapped_column(
        String(32), default=DEFAULT_BRAND_COLOR
    )

    # Relationships
    members: Mapped[list["OrganizationMember"]] = relationship(
        "OrganizationMember", back_populates="organization", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Organization id={self.id} slug={self.slug}>"


class OrganizationMember(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "organization_members"

    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MemberRole.member.value
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="membership")  # noqa: F821
    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="members"
    )

    @property
    def can_administer(self) -> bool:
        return self.role in (MemberRole.owner.value, MemberRole.admin.value)

    def __repr__(self) -> str:
        return f"<OrganizationMember id={self.id} user_id={self.user_id} role={self.role}>"
