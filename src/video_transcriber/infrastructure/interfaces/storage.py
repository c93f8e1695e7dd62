"""Abstract interfaces for object storage operations."""

from abc import ABC, abstractmethod

from video_transcriber.domain.models import BucketRef


class StorageBucket(ABC):
    """A single object storage bucket."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The bucket name."""

    @abstractmethod
    def get_signed_url(self, object_name: str) -> str:
        """
        Returns a time-limited GET URL for an object.

        Args:
            object_name: The object path/name in storage.

        Raises:
            StorageUrlError: If the URL cannot be generated.
        """

    @abstractmethod
    def put_object(self, object_name: str, data: bytes, content_type: str) -> None:
        """
        Uploads an object.

        Args:
            object_name: The destination path/name in storage.
            data: Object contents.
            content_type: MIME type of the object.

        Raises:
            StorageUploadError: If the upload fails.
        """

    @abstractmethod
    def delete_object(self, object_name: str) -> None:
        """
        Deletes an object.

        Raises:
            StorageDeleteError: If the deletion fails.
        """


class BucketResolver(ABC):
    """Maps a video's bucket assignment to a usable bucket handle."""

    @abstractmethod
    def resolve(self, bucket: BucketRef | None) -> StorageBucket:
        """
        Returns the video's custom bucket, or the default bucket for None.
        """
