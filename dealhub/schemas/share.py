"""
schemas/share.py
----------------
Public payloads served under /api/share/{token}.

Only display fields leave the server: no organization ids, no creator,
no password material.
"""

from typing import Optional

from pydantic import Field

from dealhub.schemas.common import CamelModel, OptionalText


class PublicFile(CamelModel):
    file_name: str
    file_type: str
    file_size: int
    file_url: str


class PublicAsset(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    section: Optional[str] = None
    order: int
    file: PublicFile


class PublicRoomRead(CamelModel):
    id: str
    name: str
    headline: Optional[str] = None
    welcome_message: Optional[str] = None
    brand_color: Optional[str] = None
    logo_url: Optional[str] = None
    allow_download: bool
    require_email: bool
    has_password: bool
    duration_beacon_seconds: int
    comment_poll_seconds: int
    assets: list[PublicAsset]


class VerifyRequest(CamelModel):
    email: OptionalText = Field(default=None, max_length=320)
    name: OptionalText = Field(default=None, max_length=255)
    company: OptionalText = Field(default=None, max_length=255)
    password: Optional[str] = None
