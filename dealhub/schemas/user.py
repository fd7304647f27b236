"""
schemas/user.py
---------------
Pydantic models for the authenticated user profile.
"""

from datetime import datetime
from typing import Optional

from dealhub.schemas.common import CamelModel


class UserRead(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime
