"""MinIO implementation of the ObjectStore interface."""

import asyncio
from collections.abc import Callable
from threading import Thread
from typing import BinaryIO
from urllib.parse import quote

from minio import Minio
from minio.error import S3Error

from blob_uploader.exceptions import ContainerAccessError, TransferError
from blob_uploader.interfaces import ObjectStore
from blob_uploader.logging import setup_logging

logger = setup_logging()

BUCKET_RACE_CODES = frozenset({"BucketAlreadyOwnedByYou", "BucketAlreadyExists"})
MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchObject", "NotFound"})


class _TransferProgress(Thread):
    """
    Progress hook handed to ``put_object``.

    The SDK only calls ``set_meta`` and ``update`` on it; the thread itself
    is never started.
    """

    def __init__(self, on_bytes: Callable[[int], None]):
        super().__init__(daemon=True)
        self._on_bytes = on_bytes

    def set_meta(self, object_name: str, total_length: int) -> None:
        pass

    def update(self, size: int) -> None:
        self._on_bytes(size)


class MinioObjectStore(ObjectStore):
    """Stores objects in a single MinIO bucket."""

    def __init__(self, client: Minio, bucket_name: str, endpoint_url: str):
        self._client = client
        self._bucket_name = bucket_name
        self._endpoint_url = endpoint_url.rstrip("/")

    @property
    def container_name(self) -> str:
        return self._bucket_name

    async def ensure_container(self) -> None:
        try:
            exists = await asyncio.to_thread(self._client.bucket_exists, self._bucket_name)
        except Exception as e:
            logger.exception("MinIO bucket probe failed", extra={"bucket_name": self._bucket_name})
            raise ContainerAccessError(self._bucket_name, e) from e

        if exists:
            return

        try:
            await asyncio.to_thread(self._client.make_bucket, self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        except S3Error as e:
            if e.code not in BUCKET_RACE_CODES:
                logger.exception("MinIO bucket creation failed", extra={"bucket_name": self._bucket_name})
                raise ContainerAccessError(self._bucket_name, e) from e
            logger.info("Bucket already exists", extra={"bucket_name": self._bucket_name})
        except Exception as e:
            logger.exception("MinIO bucket creation failed", extra={"bucket_name": self._bucket_name})
            raise ContainerAccessError(self._bucket_name, e) from e

    async def exists(self, path: str) -> bool:
        try:
            await asyncio.to_thread(self._client.stat_object, self._bucket_name, path)
            return True
        except S3Error as e:
            if e.code in MISSING_OBJECT_CODES:
                return False
            logger.exception(
                "MinIO object probe failed",
                extra={"bucket_name": self._bucket_name, "object_name": path},
            )
            raise ContainerAccessError(self._bucket_name, e) from e
        except Exception as e:
            logger.exception(
                "MinIO object probe failed",
                extra={"bucket_name": self._bucket_name, "object_name": path},
            )
            raise ContainerAccessError(self._bucket_name, e) from e

    async def put(
        self,
        path: str,
        data: BinaryIO,
        size: int,
        content_type: str,
        on_bytes: Callable[[int], None] | None = None,
    ) -> None:
        progress = _TransferProgress(on_bytes) if on_bytes else None
        try:
            await asyncio.to_thread(
                self._client.put_object,
                bucket_name=self._bucket_name,
                object_name=path,
                data=data,
                length=size,
                content_type=content_type,
                progress=progress,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": path,
                    "size": size,
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._bucket_name, "object_name": path},
            )
            raise TransferError(path, e) from e

    def object_url(self, path: str) -> str:
        return f"{self._endpoint_url}/{self._bucket_name}/{quote(path)}"
