"""
Object store client.

Thin contract over an S3-compatible bucket with three operations: put a
local file under a key, read a key's metadata, delete a key. There is no
automatic retry: botocore's retry loop is switched off and every failure
reaches the caller, which decides the compensating action.

Note: Requires boto3. The client is created lazily on first use so that
importing this module never opens a connection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from media.exceptions import ObjectNotFoundError, ObjectStoreError
from media.types import ObjectMetadata

if TYPE_CHECKING:
    from media.conf import IngestionConfig

logger = logging.getLogger(__name__)

# Error codes S3 (and S3-compatible stores) use for a missing key
NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


@runtime_checkable
class ObjectStore(Protocol):
    """
    Protocol for object stores used by the media pipeline.

    Implementations must make ``delete`` idempotent: deleting a key that
    does not exist is not an error.
    """

    def put(self, key: str, file_path: str, mime_type: str) -> str:
        """Upload a local file under ``key``; return the key."""
        ...

    def get_metadata(self, key: str) -> ObjectMetadata:
        """Return metadata for ``key``; raise ObjectNotFoundError if absent."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...


class S3ObjectStore:
    """
    ObjectStore backed by boto3.

    Example:
        store = S3ObjectStore.from_config(config)
        store.put("pics/1/123-abc.jpg", "/tmp/upload", "image/jpeg")
        meta = store.get_metadata("pics/1/123-abc.jpg")
    """

    def __init__(
        self,
        bucket_name: str,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client=None,
    ) -> None:
        self.bucket_name = bucket_name
        self.region_name = region_name or None
        self.endpoint_url = endpoint_url or None
        self._access_key_id = access_key_id or None
        self._secret_access_key = secret_access_key or None
        self._s3_client = client

    @classmethod
    def from_config(cls, config: IngestionConfig) -> S3ObjectStore:
        return cls(
            bucket_name=config.bucket_name,
            region_name=config.region_name,
            endpoint_url=config.endpoint_url,
            access_key_id=config.access_key_id,
            secret_access_key=config.secret_access_key,
        )

    @property
    def s3_client(self):
        """Get or create the S3 client."""
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3",
                region_name=self.region_name,
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self._access_key_id,
                aws_secret_access_key=self._secret_access_key,
                config=Config(retries={"max_attempts": 1, "mode": "standard"}),
            )
        return self._s3_client

    def put(self, key: str, file_path: str, mime_type: str) -> str:
        """
        Upload a local file.

        Raises:
            ObjectStoreError: The upload failed for any reason.
        """
        try:
            self.s3_client.upload_file(
                Filename=file_path,
                Bucket=self.bucket_name,
                Key=key,
                ExtraArgs={"ContentType": mime_type},
            )
        except (BotoCoreError, ClientError, S3UploadFailedError, OSError) as e:
            logger.error(
                "Object upload failed",
                extra={"key": key, "bucket": self.bucket_name, "error": str(e)},
            )
            raise ObjectStoreError(
                "Could not store file", details={"key": key}
            ) from e

        logger.debug("Object uploaded", extra={"key": key, "bucket": self.bucket_name})
        return key

    def get_metadata(self, key: str) -> ObjectMetadata:
        """
        Fetch the store's view of a key.

        Raises:
            ObjectNotFoundError: The key does not exist.
            ObjectStoreError: Any other failure.
        """
        try:
            response = self.s3_client.head_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES:
                raise ObjectNotFoundError(
                    "File not found", details={"key": key}
                ) from e
            logger.error(
                "Could not read object metadata",
                extra={"key": key, "bucket": self.bucket_name, "error_code": code},
            )
            raise ObjectStoreError(
                "Could not read file metadata", details={"key": key}
            ) from e
        except BotoCoreError as e:
            logger.error(
                "Could not read object metadata",
                extra={"key": key, "bucket": self.bucket_name, "error": str(e)},
            )
            raise ObjectStoreError(
                "Could not read file metadata", details={"key": key}
            ) from e

        return ObjectMetadata(
            key=key,
            mime_type=response.get("ContentType") or "",
            size_bytes=int(response.get("ContentLength") or 0),
        )

    def delete(self, key: str) -> None:
        """
        Delete a key. S3 treats deleting a missing key as success.

        Raises:
            ObjectStoreError: The delete request failed.
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES:
                return
            raise ObjectStoreError(
                "Could not delete file", details={"key": key}
            ) from e
        except BotoCoreError as e:
            raise ObjectStoreError(
                "Could not delete file", details={"key": key}
            ) from e

        logger.debug("Object deleted", extra={"key": key, "bucket": self.bucket_name})


def get_object_store(config: IngestionConfig) -> ObjectStore:
    return S3ObjectStore.from_config(config)
