"""
api/routes/files.py
-------------------
The organization's file library. A file row points at bytes already stored
in the object store (see uploads.py) or at any external URL.

GET    /api/files        — List files, newest first
GET    /api/files/{id}   — Get one file
POST   /api/files        — Register a file
DELETE /api/files/{id}   — Delete (refused while a room uses it)
"""

from fastapi import APIRouter, status

from dealhub.dependencies import CurrentMember, DbSession
from dealhub.schemas.common import SuccessResponse
from dealhub.schemas.file import FileCreate, FileRead
from dealhub.services.file_service import FileService

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.get("", response_model=list[FileRead], summary="List files")
async def list_files(db: DbSession, member: CurrentMember) -> list[FileRead]:
    files = await FileService.list_files(db, member.organization_id)
    return [FileRead.model_validate(f) for f in files]


@router.get("/{file_id}", response_model=FileRead, summary="Get a file")
async def get_file(file_id: str, db: DbSession, member: CurrentMember) -> FileRead:
    file = await FileService.get_file(db, member.organization_id, file_id)
    return FileRead.model_validate(file)


@router.post(
    "",
    response_model=FileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a file in the library",
)
async def create_file(body: FileCreate, db: DbSession, member: CurrentMember) -> FileRead:
    file = await FileService.create_file(
        db, member.organization_id, member.user_id, body
    )
    return FileRead.model_validate(file)


@router.delete("/{file_id}", response_model=SuccessResponse, summary="Delete a file")
async def delete_file(file_id: str, db: DbSession, member: CurrentMember) -> SuccessResponse:
    """Returns 400 while any deal room still lists the file as an asset."""
    await FileService.delete_file(db, member.organization_id, file_id)
    return SuccessResponse()
