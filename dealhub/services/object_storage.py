"""
services/object_storage.py
--------------------------
S3-compatible object store used for uploaded file bytes.

Public object paths look like "/objects/uploads/<uuid>"; they map to the key
"<OBJECT_STORE_PREFIX>/uploads/<uuid>" in OBJECT_STORE_BUCKET. The database
only ever stores the public path.

boto3 is synchronous: routes call these methods through run_in_threadpool.
"""

import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator, Optional

import boto3
from botocore.exceptions import ClientError

from dealhub.core.config import settings
from dealhub.core.exceptions import ObjectNotFoundError
from dealhub.core.logging import get_logger

logger = get_logger(__name__)

OBJECTS_ROUTE_PREFIX = "/objects/"
DOWNLOAD_CHUNK_BYTES = 64 * 1024
_MISSING_CODES = ("404", "NoSuchKey", "NotFound")


@dataclass
class StoredObject:
    body: Any  # botocore StreamingBody
    content_type: str
    content_length: Optional[int] = None

    def iter_chunks(self) -> Iterator[bytes]:
        try:
            yield from self.body.iter_chunks(chunk_size=DOWNLOAD_CHUNK_BYTES)
        finally:
            self.body.close()


def _s3_client():
    return boto3.client(
        "s3",
        region_name=settings.AWS_REGION,
        endpoint_url=settings.OBJECT_STORE_ENDPOINT_URL or None,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
    )


class ObjectStorageService:

    def __init__(
        self,
        client: Any = None,
        bucket: Optional[str] = None,
        prefix: Optional[str] = None,
    ) -> None:
        self._client = client or _s3_client()
        self._bucket = bucket or settings.OBJECT_STORE_BUCKET
        self._prefix = (settings.OBJECT_STORE_PREFIX if prefix is None else prefix).strip("/")

    def _key_for(self, object_path: str) -> str:
        relative = object_path
        if relative.startswith(OBJECTS_ROUTE_PREFIX):
            relative = relative[len(OBJECTS_ROUTE_PREFIX):]
        relative = relative.strip("/")
        if not relative or ".." in relative.split("/"):
            raise ObjectNotFoundError()
        return f"{self._prefix}/{relative}" if self._prefix else relative

    @staticmethod
    def _new_object_path() -> str:
        return f"{OBJECTS_ROUTE_PREFIX}uploads/{uuid.uuid4()}"

    def upload_bytes(self, data: bytes, content_type: str) -> str:
        """Store a buffer under a fresh id and return its public object path."""
        object_path = self._new_object_path()
        key = self._key_for(object_path)
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        logger.info("Object uploaded", key=key, size=len(data), content_type=content_type)
        return object_path

    def presign_upload(self, content_type: Optional[str], expires_in: int) -> tuple[str, str]:
        """
        Reserve a fresh object path and sign a PUT URL for it, so the browser
        can send large files straight to the bucket.
        Returns (upload_url, object_path).
        """
        object_path = self._new_object_path()
        params = {"Bucket": self._bucket, "Key": self._key_for(object_path)}
        if content_type:
            params["ContentType"] = content_type
        upload_url = self._client.generate_presigned_url(
            "put_object", Params=params, ExpiresIn=expires_in
        )
        logger.info("Upload URL issued", object_path=object_path, expires_in=expires_in)
        return upload_url, object_path

    def open_object(self, object_path: str) -> StoredObject:
        """
        Open an object for streaming.
        Raises ObjectNotFoundError when the key does not exist.
        """
        key = self._key_for(object_path)
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in _MISSING_CODES:
                raise ObjectNotFoundError() from exc
            logger.error("Object store read failed", key=key, error=str(exc))
            raise
        return StoredObject(
            body=response["Body"],
            content_type=response.get("ContentType") or "application/octet-stream",
            content_length=response.get("ContentLength"),
        )


@lru_cache()
def get_object_storage() -> ObjectStorageService:
    """FastAPI dependency: one client per process."""
    return ObjectStorageService()
