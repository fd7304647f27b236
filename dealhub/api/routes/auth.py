"""
api/routes/auth.py
------------------
Authentication endpoints.

Sessions are issued by the external identity provider; this service only
validates them (see dependencies.py).

GET /api/auth/user  — Return the authenticated user's profile.
"""

from fastapi import APIRouter

from dealhub.dependencies import CurrentUser
from dealhub.schemas.user import UserRead

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.get(
    "/user",
    response_model=UserRead,
    summary="Get the currently authenticated user",
)
async def get_user(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)
