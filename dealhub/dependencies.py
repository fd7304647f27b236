"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and authorisation.

Flow:
  1. The session token is read from the Authorization: Bearer header or,
     for browser sessions, from the session cookie.
  2. decode_access_token validates the identity provider's signature.
  3. get_current_user upserts the User row from the token claims.
  4. get_current_member resolves (or bootstraps) the caller's organization.
     Every seller-side query is scoped by member.organization_id.
  5. get_current_admin_member layers a role check on top for team settings.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from dealhub.core.config import settings
from dealhub.core.exceptions import PermissionDeniedError
from dealhub.core.logging import get_logger
from dealhub.core.security import decode_access_token
from dealhub.db.session import get_db
from dealhub.models.organization import OrganizationMember
from dealhub.models.user import User
from dealhub.services.organization_service import OrganizationService
from dealhub.services.user_service import UserService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Unauthorized",
    headers={"WWW-Authenticate": "Bearer"},
)


def _session_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)
    ] = None,
) -> User:
    """
    Validate the session token and return the matching local User.
    Raises 401 if the token is missing, invalid or expired.
    """
    token = _session_token(request, credentials)
    if not token:
        raise _CREDENTIALS_EXCEPTION

    try:
        claims = decode_access_token(token)
    except JWTError as exc:
        logger.warning("Session token rejected", error=str(exc))
        raise _CREDENTIALS_EXCEPTION

    if not claims.get("sub"):
        raise _CREDENTIALS_EXCEPTION

    return await UserService.upsert_from_claims(db, claims)


async def get_current_member(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrganizationMember:
    """The caller's organization membership, created on first use."""
    return await OrganizationService.get_or_create_for_user(db, current_user.id)


async def get_current_admin_member(
    member: Annotated[OrganizationMember, Depends(get_current_member)],
) -> OrganizationMember:
    """
    Extends get_current_member with a role check.
    Raises 403 unless the caller is the owner or an admin.
    """
    if not member.can_administer:
        raise PermissionDeniedError()
    return member


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentMember = Annotated[OrganizationMember, Depends(get_current_member)]
AdminMember = Annotated[OrganizationMember, Depends(get_current_admin_member)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
