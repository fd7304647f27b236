"""
api/routes/uploads.py
---------------------
Object store endpoints.

POST /api/uploads/direct        — Multipart upload, buffered and forwarded
POST /api/uploads/request-url   — Presigned PUT URL for browser uploads
GET  /objects/{path}            — Stream a stored object back (public)

Object paths returned here are what the file library stores in file_url.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from dealhub.core.config import settings
from dealhub.core.exceptions import PayloadTooLargeError, ValidationError
from dealhub.core.logging import get_logger
from dealhub.dependencies import CurrentUser
from dealhub.schemas.file import (
    UploadMetadata,
    UploadResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)
from dealhub.services.object_storage import ObjectStorageService, get_object_storage

logger = get_logger(__name__)

router = APIRouter(tags=["Uploads"])

READ_CHUNK_BYTES = 1024 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

ObjectStorage = Annotated[ObjectStorageService, Depends(get_object_storage)]


async def _read_limited(upload: UploadFile, limit: int) -> bytes:
    buffer = bytearray()
    while True:
        chunk = await upload.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise PayloadTooLargeError(
                f"File exceeds the {limit // (1024 * 1024)}MB upload limit"
            )
    return bytes(buffer)


@router.post(
    "/api/uploads/direct",
    response_model=UploadResponse,
    summary="Upload a file to the object store",
)
async def upload_direct(
    current_user: CurrentUser,
    storage: ObjectStorage,
    file: Optional[UploadFile] = File(default=None),
) -> UploadResponse:
    """
    The whole file is held in memory (up to MAX_UPLOAD_BYTES) and then
    written to the bucket under a fresh uploads/<uuid> key.
    """
    if file is None:
        raise ValidationError("No file provided")

    try:
        data = await _read_limited(file, settings.MAX_UPLOAD_BYTES)
    finally:
        await file.close()

    content_type = file.content_type or DEFAULT_CONTENT_TYPE
    object_path = await run_in_threadpool(storage.upload_bytes, data, content_type)
    logger.info(
        "Direct upload stored",
        user_id=current_user.id,
        object_path=object_path,
        size=len(data),
    )
    return UploadResponse(
        object_path=object_path,
        metadata=UploadMetadata(
            name=file.filename or "file",
            size=len(data),
            content_type=content_type,
        ),
    )


@router.post(
    "/api/uploads/request-url",
    response_model=UploadUrlResponse,
    summary="Get a presigned URL for a browser upload",
)
async def request_upload_url(
    body: UploadUrlRequest,
    current_user: CurrentUser,
    storage: ObjectStorage,
) -> UploadUrlResponse:
    if body.size is not None and body.size > settings.MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(
            f"File exceeds the {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB upload limit"
        )
    upload_url, object_path = await run_in_threadpool(
        storage.presign_upload, body.content_type, settings.UPLOAD_URL_EXPIRE_SECONDS
    )
    return UploadUrlResponse(
        upload_url=upload_url,
        object_path=object_path,
        metadata=UploadMetadata(
            name=body.name, size=body.size, content_type=body.content_type
        ),
    )


@router.get("/objects/{object_path:path}", summary="Download a stored object")
async def download_object(object_path: str, storage: ObjectStorage) -> StreamingResponse:
    """Unauthenticated so shared rooms can render their files; 404 when missing."""
    stored = await run_in_threadpool(storage.open_object, object_path)
    headers = {"Cache-Control": "private, max-age=3600"}
    if stored.content_length is not None:
        headers["Content-Length"] = str(stored.content_length)
    return StreamingResponse(
        stored.iter_chunks(),
        media_type=stored.content_type,
        headers=headers,
    )
