"""
api/routes/admin.py
-------------------
Team and organization settings.

GET /api/admin/users              — Members of the caller's organization
PUT /api/admin/users/{id}/role    — Owner / admin: change a member's role
GET /api/admin/settings           — Organization settings
PUT /api/admin/settings           — Owner / admin: update name, brand, logo
"""

from fastapi import APIRouter

from dealhub.dependencies import AdminMember, CurrentMember, DbSession
from dealhub.schemas.organization import (
    MemberRead,
    MemberRoleUpdate,
    OrganizationRead,
    OrganizationUpdate,
)
from dealhub.services.organization_service import OrganizationService

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/users", response_model=list[MemberRead], summary="List team members")
async def list_members(db: DbSession, member: CurrentMember) -> list[MemberRead]:
    members = await OrganizationService.list_members(db, member.organization_id)
    return [MemberRead.model_validate(m) for m in members]


@router.put(
    "/users/{member_id}/role",
    response_model=MemberRead,
    summary="Change a team member's role",
)
async def update_member_role(
    member_id: str,
    body: MemberRoleUpdate,
    db: DbSession,
    admin: AdminMember,
) -> MemberRead:
    """
    Only 'admin' and 'member' can be assigned. The owner's role is fixed,
    and members of other organizations answer 404.
    """
    updated = await OrganizationService.update_member_role(
        db, admin.organization_id, member_id, body.role
    )
    return MemberRead.model_validate(updated)


@router.get("/settings", response_model=OrganizationRead, summary="Organization settings")
async def get_settings(db: DbSession, member: CurrentMember) -> OrganizationRead:
    org = await OrganizationService.get_organization(db, member.organization_id)
    return OrganizationRead.model_validate(org)


@router.put(
    "/settings",
    response_model=OrganizationRead,
    summary="Update organization settings",
)
async def update_settings(
    body: OrganizationUpdate, db: DbSession, admin: AdminMember
) -> OrganizationRead:
    org = await OrganizationService.update_organization(db, admin.organization_id, body)
    return OrganizationRead.model_validate(org)
