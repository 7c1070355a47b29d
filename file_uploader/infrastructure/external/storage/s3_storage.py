"""S3-compatible object storage (AWS S3, MinIO, etc.) with content-type metadata and ACLs."""

from __future__ import annotations

import asyncio
import posixpath
import threading
from collections.abc import Mapping
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from file_uploader.application.dtos.upload import StoredFile
from file_uploader.domain.enums import BackendKind
from file_uploader.infrastructure.exceptions import (
    StorageDeleteError,
    StorageListError,
    StorageNotFoundError,
    StorageReadError,
    StorageUnavailableError,
    StorageWriteError,
)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound", "NoSuchBucket"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3StorageBackend:
    """S3-compatible storage. Uses boto3 (sync) via asyncio.to_thread for async API.

    Keys are stored under the optional directory prefix. The declared
    content type is attached to every object as ContentType; user metadata
    goes into the object's Metadata map.
    """

    kind = BackendKind.AWS_S3

    def __init__(
        self,
        client: Any,
        bucket: str,
        directory: str = "",
        acl: str | None = None,
        create: bool = False,
    ) -> None:
        """Initialize the backend.

        Args:
            client: boto3 S3 client (shared per service_id).
            bucket: Bucket name.
            directory: Key prefix inside the bucket.
            acl: Canned ACL applied to written objects (e.g. public-read).
            create: Create the bucket on first use when it does not exist.
        """
        self._client = client
        self.bucket = bucket
        self.directory = directory.strip("/")
        self.acl = acl
        self.create = create
        self._bucket_ready = False
        self._bucket_lock = threading.Lock()

    def _object_key(self, key: str) -> str:
        return f"{self.directory}/{key}" if self.directory else key

    def _list_prefix(self) -> str:
        return f"{self.directory}/" if self.directory else ""

    def _ensure_bucket_sync(self) -> None:
        """Check the bucket once; create it when allowed, else raise StorageUnavailableError."""
        if self._bucket_ready:
            return
        with self._bucket_lock:
            if self._bucket_ready:
                return
            try:
                self._client.head_bucket(Bucket=self.bucket)
            except BotoCoreError as e:
                raise StorageUnavailableError(self.bucket, str(e)) from e
            except ClientError as e:
                if _error_code(e) not in _NOT_FOUND_CODES:
                    raise StorageUnavailableError(self.bucket, str(e)) from e
                if not self.create:
                    raise StorageUnavailableError(
                        self.bucket, "bucket does not exist and create is disabled"
                    ) from e
                try:
                    self._client.create_bucket(**self._create_bucket_params())
                except (BotoCoreError, ClientError) as create_error:
                    raise StorageUnavailableError(self.bucket, str(create_error)) from create_error
            self._bucket_ready = True

    def _create_bucket_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"Bucket": self.bucket}
        region = getattr(getattr(self._client, "meta", None), "region_name", None)
        if region and region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        return params

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> StoredFile:
        """Put object with ContentType, optional ACL and user metadata."""
        def _put() -> StoredFile:
            self._ensure_bucket_sync()
            params: dict[str, Any] = {
                "Bucket": self.bucket,
                "Key": self._object_key(key),
                "Body": data,
            }
            if content_type:
                params["ContentType"] = content_type
            if self.acl:
                params["ACL"] = self.acl
            if metadata:
                params["Metadata"] = {
                    k.lower().replace("_", "-"): v for k, v in metadata.items()
                }
            try:
                self._client.put_object(**params)
            except (BotoCoreError, ClientError) as e:
                raise StorageWriteError(key, str(e)) from e
            return StoredFile(key=key, size=len(data), content_type=content_type)

        return await asyncio.to_thread(_put)

    async def read(self, key: str) -> tuple[StoredFile, bytes]:
        """Return object info and body."""
        def _get() -> tuple[StoredFile, bytes]:
            self._ensure_bucket_sync()
            try:
                resp = self._client.get_object(Bucket=self.bucket, Key=self._object_key(key))
                body = resp["Body"].read()
            except ClientError as e:
                if _error_code(e) in _NOT_FOUND_CODES:
                    raise StorageNotFoundError(key) from e
                raise StorageReadError(key, str(e)) from e
            except BotoCoreError as e:
                raise StorageReadError(key, str(e)) from e
            stored = StoredFile(
                key=key,
                size=resp.get("ContentLength", len(body)),
                content_type=resp.get("ContentType"),
            )
            return stored, body

        return await asyncio.to_thread(_get)

    async def exists(self, key: str) -> bool:
        """Return True if object exists."""
        def _exists() -> bool:
            self._ensure_bucket_sync()
            try:
                self._client.head_object(Bucket=self.bucket, Key=self._object_key(key))
                return True
            except ClientError as e:
                if _error_code(e) in _NOT_FOUND_CODES:
                    return False
                raise StorageReadError(key, str(e)) from e
            except BotoCoreError as e:
                raise StorageReadError(key, str(e)) from e

        return await asyncio.to_thread(_exists)

    async def delete(self, key: str) -> bool:
        """Delete object. Returns True if deleted, False if it did not exist."""
        def _delete() -> bool:
            self._ensure_bucket_sync()
            object_key = self._object_key(key)
            try:
                self._client.head_object(Bucket=self.bucket, Key=object_key)
            except ClientError as e:
                if _error_code(e) in _NOT_FOUND_CODES:
                    return False
                raise StorageDeleteError(key, str(e)) from e
            except BotoCoreError as e:
                raise StorageDeleteError(key, str(e)) from e
            try:
                self._client.delete_object(Bucket=self.bucket, Key=object_key)
            except (BotoCoreError, ClientError) as e:
                raise StorageDeleteError(key, str(e)) from e
            return True

        return await asyncio.to_thread(_delete)

    async def list_keys(self) -> list[str]:
        """Return full object keys under the directory prefix (native listing)."""
        def _list() -> list[str]:
            self._ensure_bucket_sync()
            keys: list[str] = []
            try:
                paginator = self._client.get_paginator("list_objects_v2")
                for page in paginator.paginate(Bucket=self.bucket, Prefix=self._list_prefix()):
                    keys.extend(obj["Key"] for obj in page.get("Contents", []))
            except (BotoCoreError, ClientError) as e:
                raise StorageListError(f"{self.bucket}/{self._list_prefix()}", str(e)) from e
            return keys

        return await asyncio.to_thread(_list)

    async def list_stored_keys(self) -> list[str]:
        """Return object basenames; directory markers (trailing slash) are skipped."""
        keys = await self.list_keys()
        return [name for name in (posixpath.basename(k) for k in keys) if name]

