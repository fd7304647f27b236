"""
schemas/file.py
---------------
Pydantic models for the file library and direct uploads.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dealhub.schemas.common import CamelModel


class FileCreate(CamelModel):
    file_name: str = Field(..., min_length=1, max_length=1024)
    file_url: str = Field(..., min_length=1, max_length=2048)
    file_type: str = Field(..., min_length=1, max_length=50, examples=["pdf"])
    file_size: int = Field(..., ge=0, description="Size in bytes")


class FileRead(CamelModel):
    id: str
    file_name: str
    file_url: str
    file_type: str
    file_size: int
    uploaded_by_id: str
    organization_id: str
    created_at: datetime


class UploadMetadata(CamelModel):
    name: str
    size: Optional[int] = None
    content_type: Optional[str] = None


class UploadResponse(CamelModel):
    object_path: str
    metadata: UploadMetadata


class UploadUrlRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=1024)
    size: Optional[int] = Field(default=None, ge=0)
    content_type: Optional[str] = Field(default=None, max_length=255)


class UploadUrlResponse(UploadResponse):
    upload_url: str = Field(..., alias="uploadURL")
