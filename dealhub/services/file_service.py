"""
services/file_service.py
------------------------
File library CRUD, scoped by organization_id.

The delete guard looks for asset rows by file id across every room and every
organization, not only the caller's.
"""

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from dealhub.core.exceptions import ConflictError, NotFoundError
from dealhub.core.logging import get_logger
from dealhub.models.deal_room import DealRoomAsset
from dealhub.models.file import File
from dealhub.schemas.file import FileCreate

logger = get_logger(__name__)


class FileService:

    @staticmethod
    async def list_files(db: AsyncSession, organization_id: str) -> list[File]:
        result = await db.execute(
            select(File)
            .where(File.organization_id == organization_id)
            .order_by(File.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_file(db: AsyncSession, organization_id: str, file_id: str) -> File:
        result = await db.execute(
            select(File).where(
                File.id == file_id, File.organization_id == organization_id
            )
        )
        file = result.scalar_one_or_none()
        if file is None:
            raise NotFoundError("File not found")
        return file

    @staticmethod
    async def create_file(
        db: AsyncSession,
        organization_id: str,
        uploaded_by_id: str,
        data: FileCreate,
    ) -> File:
        file = File(
            **data.model_dump(),
            uploaded_by_id=uploaded_by_id,
            organization_id=organization_id,
        )
        db.add(file)
        await db.flush()
        await db.refresh(file)
        logger.info(
            "File registered",
            file_id=file.id,
            organization_id=organization_id,
            file_type=file.file_type,
            file_size=file.file_size,
        )
        return file

    @staticmethod
    async def is_in_use(db: AsyncSession, file_id: str) -> bool:
        result = await db.execute(
            select(exists().where(DealRoomAsset.file_id == file_id))
        )
        return bool(result.scalar())

    @staticmethod
    async def delete_file(db: AsyncSession, organization_id: str, file_id: str) -> None:
        """
        Delete a file record.
        Raises ConflictError while any deal room asset still references it.
        """
        file = await FileService.get_file(db, organization_id, file_id)
        if await FileService.is_in_use(db, file.id):
            raise ConflictError("File is used in active deal hubs")

        await db.execute(delete(File).where(File.id == file.id))
        await db.flush()
        logger.info("File deleted", file_id=file.id, organization_id=organization_id)
