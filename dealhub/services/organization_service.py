"""
services/organization_service.py
--------------------------------
Organization resolution, settings and team roles.

get_or_create_for_user is the entry point for every seller request: it
returns the caller's membership, creating a personal organization on first
use. organization_members.user_id is unique, so two concurrent first
requests cannot both succeed; the loser rolls back its savepoint and reads
the winner's membership.
"""

import secrets

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dealhub.core.exceptions import NotFoundError, ValidationError
from dealhub.core.logging import get_logger
from dealhub.models.organization import (
    DEFAULT_BRAND_COLOR,
    MemberRole,
    Organization,
    OrganizationMember,
)
from dealhub.schemas.organization import OrganizationUpdate

logger = get_logger(__name__)

DEFAULT_ORGANIZATION_NAME = "My Organization"


class OrganizationService:

    @staticmethod
    async def get_member_by_user_id(
        db: AsyncSession, user_id: str
    ) -> OrganizationMember | None:
        result = await db.execute(
            select(OrganizationMember).where(OrganizationMember.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _available_slug(db: AsyncSession, base: str) -> str:
        slug = base
        while (
            await db.execute(select(Organization.id).where(Organization.slug == slug))
        ).first() is not None:
            slug = f"{base}-{secrets.token_hex(3)}"
        return slug

    @staticmethod
    async def get_or_create_for_user(
        db: AsyncSession, user_id: str
    ) -> OrganizationMember:
        """
        Return the caller's membership, creating "My Organization" with the
        caller as owner when none exists yet. Idempotent per user.
        """
        member = await OrganizationService.get_member_by_user_id(db, user_id)
        if member is not None:
            return member

        slug = await OrganizationService._available_slug(db, f"org-{user_id[:8]}")
        try:
            async with db.begin_nested():
                org = Organization(
                    name=DEFAULT_ORGANIZATION_NAME,
                    slug=slug,
                    brand_color=DEFAULT_BRAND_COLOR,
                )
                db.add(org)
                await db.flush()
                member = OrganizationMember(
                    user_id=user_id,
                    organization_id=org.id,
                    role=MemberRole.owner.value,
                )
                db.add(member)
                await db.flush()
        except IntegrityError:
            member = await OrganizationService.get_member_by_user_id(db, user_id)
            if member is None:
                raise
            logger.info(
                "Concurrent organization bootstrap resolved",
                user_id=user_id,
                organization_id=member.organization_id,
            )
            return member

        logger.info(
            "Organization created", organization_id=org.id, slug=slug, owner_id=user_id
        )
        return member

    @staticmethod
    async def get_organization(db: AsyncSession, organization_id: str) -> Organization:
        org = await db.get(Organization, organization_id)
        if org is None:
            raise NotFoundError("Organization not found")
        return org

    @staticmethod
    async def update_organization(
        db: AsyncSession, organization_id: str, data: OrganizationUpdate
    ) -> Organization:
        org = await OrganizationService.get_organization(db, organization_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "name" and not value:
                raise ValidationError("Organization name is required")
            setattr(org, field, value)
        await db.flush()
        await db.refresh(org)
        logger.info("Organization settings updated", organization_id=organization_id)
        return org

    @staticmethod
    async def list_members(
        db: AsyncSession, organization_id: str
    ) -> list[OrganizationMember]:
        result = await db.execute(
            select(OrganizationMember)
            .options(selectinload(OrganizationMember.user))
            .where(OrganizationMember.organization_id == organization_id)
            .order_by(OrganizationMember.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def update_member_role(
        db: AsyncSession,
        organization_id: str,
        member_id: str,
        role: MemberRole,
    ) -> OrganizationMember:
        """
        Change a member's role within the caller's organization.
        The owner's role cannot be changed and ownership cannot be granted.
        """
        result = await db.execute(
            select(OrganizationMember)
            .options(selectinload(OrganizationMember.user))
            .where(
                OrganizationMember.id == member_id,
                OrganizationMember.organization_id == organization_id,
            )
        )
        member = result.scalar_one_or_none()
        if member is None:
            raise NotFoundError("Member not found")
        if member.role == MemberRole.owner.value:
            raise ValidationError("The owner's role cannot be changed")
        if role == MemberRole.owner:
            raise ValidationError("Ownership cannot be assigned")

        member.role = role.value
        await db.flush()
        logger.info(
            "Member role updated",
            member_id=member_id,
            organization_id=organization_id,
            role=member.role,
        )
        return member
