"""
schemas/organization.py
-----------------------
Pydantic models for organization settings and team membership.

Naming convention:
  OrganizationUpdate → inbound request body
  OrganizationRead   → outbound response body
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from dealhub.models.organization import MemberRole
from dealhub.schemas.common import CamelModel
from dealhub.schemas.user import UserRead


class OrganizationRead(CamelModel):
    id: str
    name: str
    slug: str
    logo_url: Optional[str] = None
    brand_color: Optional[str] = None
    created_at: datetime


class OrganizationUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    brand_color: Optional[str] = Field(default=None, max_length=32)
    logo_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class MemberRead(CamelModel):
    id: str
    user_id: str
    organization_id: str
    role: str
    created_at: datetime
    user: Optional[UserRead] = None


class MemberRoleUpdate(CamelModel):
    role: MemberRole
