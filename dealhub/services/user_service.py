"""
services/user_service.py
------------------------
Mirror identity-provider users into the local users table.

The session token is the source of truth for profile fields; every
authenticated request refreshes them so names shown in the team list and on
seller comments stay current.
"""

from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dealhub.core.logging import get_logger
from dealhub.models.user import User

logger = get_logger(__name__)

PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


class UserService:

    @staticmethod
    async def upsert_from_claims(db: AsyncSession, claims: Mapping[str, Any]) -> User:
        """
        Insert or refresh the User identified by claims["sub"].
        Claims that are absent or empty leave the stored value untouched.
        """
        user_id = claims["sub"]
        user = await db.get(User, user_id)
        created = user is None
        if created:
            user = User(id=user_id)
            db.add(user)

        for field in PROFILE_CLAIMS:
            value = claims.get(field)
            if value:
                setattr(user, field, value)

        try:
            await db.flush()
        except IntegrityError:
            # Another request inserted the same subject first
            await db.rollback()
            user = await db.get(User, user_id)
            if user is None:
                raise
            return user

        if created:
            logger.info("User registered from identity provider", user_id=user_id)
        return user
