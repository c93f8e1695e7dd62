"""MinIO implementation of the StorageBucket and BucketResolver interfaces."""

import io
from datetime import timedelta
from urllib.parse import urlparse

from minio import Minio

from video_transcriber.domain.models import BucketRef
from video_transcriber.exceptions import (
    StorageDeleteError,
    StorageUploadError,
    StorageUrlError,
)
from video_transcriber.logging import setup_logging

from .interfaces import BucketResolver, StorageBucket

logger = setup_logging()


class MinioStorageBucket(StorageBucket):
    """Handles object operations on one bucket using MinIO."""

    def __init__(self, client: Minio, bucket_name: str, url_expiry_seconds: int):
        self._client = client
        self._bucket_name = bucket_name
        self._url_expiry = timedelta(seconds=url_expiry_seconds)

    @property
    def name(self) -> str:
        return self._bucket_name

    def get_signed_url(self, object_name: str) -> str:
        try:
            return self._client.presigned_get_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                expires=self._url_expiry,
            )
        except Exception as e:
            logger.exception(
                "MinIO presign failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise StorageUrlError(object_name, e) from e

    def put_object(self, object_name: str, data: bytes, content_type: str) -> None:
        try:
            self._client.put_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": object_name,
                    "size": len(data),
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def delete_object(self, object_name: str) -> None:
        try:
            self._client.remove_object(self._bucket_name, object_name)
            logger.info(
                "File deleted from MinIO",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
        except Exception as e:
            raise StorageDeleteError(object_name, e) from e

    def ensure_bucket_exists(self) -> None:
        if not self._client.bucket_exists(self._bucket_name):
            self._client.make_bucket(self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info(
                "Bucket already exists", extra={"bucket_name": self._bucket_name}
            )


class MinioBucketResolver(BucketResolver):
    """Builds MinIO bucket handles for custom buckets, falling back to the default."""

    def __init__(self, default_bucket: StorageBucket, url_expiry_seconds: int):
        self._default_bucket = default_bucket
        self._url_expiry_seconds = url_expiry_seconds

    def resolve(self, bucket: BucketRef | None) -> StorageBucket:
        if bucket is None:
            return self._default_bucket

        endpoint, secure = _split_endpoint(bucket.endpoint, bucket.secure)
        client = Minio(
            endpoint=endpoint,
            access_key=bucket.access_key_id,
            secret_key=bucket.secret_access_key,
            region=bucket.region,
            secure=secure,
        )
        logger.info(
            "Using custom bucket",
            extra={"bucket_id": bucket.id, "bucket_name": bucket.bucket_name},
        )
        return MinioStorageBucket(client, bucket.bucket_name, self._url_expiry_seconds)


def _split_endpoint(endpoint: str, secure: bool) -> tuple[str, bool]:
    """MinIO wants host[:port]; bucket rows may store a full URL."""
    if "://" not in endpoint:
        return endpoint, secure
    parsed = urlparse(endpoint)
    return parsed.netloc, parsed.scheme == "https"
