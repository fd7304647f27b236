"""
models/user.py
--------------
Local mirror of identity-provider users.

Rows are upserted from session token claims on every authenticated request;
the id is the provider's subject and is never generated here. No credential
material is stored.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealhub.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), index=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(255))
    last_name: Mapped[Optional[str]] = mapped_column(String(255))
    profile_image_url: Mapped[Optional[str]] = mapped_column(String(2048))

    # Relationships
    membership: Mapped[Optional["OrganizationMember"]] = relationship(  # noqa: F821
        "OrganizationMember", back_populates="user", uselist=False
    )

    @property
    def display_name(self) -> str:
        full_name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full_name or self.email or "Seller"

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
