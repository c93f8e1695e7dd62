"""Repository for video transcription state."""

from sqlmodel import Session, select

from video_transcriber.db_models import (
    Organization,
    S3Bucket,
    TranscriptionStatus,
    User,
    Video,
)
from video_transcriber.domain.models import BucketRef, VideoContext
from video_transcriber.exceptions import (
    VideoMetadataError,
    VideoNotFoundError,
    VideoPersistenceError,
)
from video_transcriber.logging import setup_logging

logger = setup_logging()

DISABLE_TRANSCRIPT_KEY = "disableTranscript"


class VideoRepository:
    """
    Handles database operations for videos and their transcription status.

    Encapsulates SQL queries and transaction management,
    keeping the pipeline free of database concerns.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def get_video_context(self, video_id: str) -> VideoContext:
        """
        Loads the video with its bucket, owner and organization settings.

        Raises:
            VideoNotFoundError: If the video (or its owner) does not exist.
            VideoMetadataError: If an assigned bucket cannot be found.
            VideoPersistenceError: If the query fails.
        """
        statement = (
            select(Video, S3Bucket, Organization)
            .join(User, Video.owner_id == User.id)
            .outerjoin(S3Bucket, Video.bucket == S3Bucket.id)
            .outerjoin(Organization, Video.org_id == Organization.id)
            .where(Video.id == video_id)
        )
        try:
            with self._session_factory() as db_session:
                row = db_session.exec(statement).first()
        except Exception as e:
            logger.exception("Failed to load video", extra={"video_id": video_id})
            raise VideoPersistenceError(video_id, cause=e) from e

        if row is None:
            raise VideoNotFoundError(video_id)

        video, bucket, organization = row
        if video.bucket is not None and bucket is None:
            raise VideoMetadataError(video_id, f"bucket '{video.bucket}' not found")

        return VideoContext(
            video_id=video.id,
            owner_id=video.owner_id,
            bucket=self._to_bucket_ref(bucket) if bucket else None,
            settings=video.settings,
            org_settings=organization.settings if organization else None,
            transcription_status=video.transcription_status,
        )

    def update_status(
        self, video_id: str, status: TranscriptionStatus | None
    ) -> None:
        """
        Writes the transcription status; None resets it to unset.

        Raises:
            VideoNotFoundError: If the video does not exist.
            VideoPersistenceError: If the update fails.
        """
        value = status.value if status else None
        self._update_video(video_id, transcription_status=value)
        logger.info(
            "Transcription status updated",
            extra={"video_id": video_id, "status": value},
        )

    def set_video_transcript_disabled(
        self, video_id: str, disabled: bool | None
    ) -> None:
        """Sets or clears (None) the video-level disable flag."""
        try:
            with self._session_factory() as db_session:
                video = db_session.get(Video, video_id)
                if video is None:
                    raise VideoNotFoundError(video_id)
                video.settings = _with_flag(video.settings, disabled)
                db_session.add(video)
                db_session.commit()
        except VideoNotFoundError:
            raise
        except Exception as e:
            logger.exception("Failed to update video settings", extra={"video_id": video_id})
            raise VideoPersistenceError(video_id, cause=e) from e

    def set_organization_transcript_disabled(
        self, org_id: str, disabled: bool | None
    ) -> None:
        """Sets or clears (None) the organization-level disable flag."""
        try:
            with self._session_factory() as db_session:
                organization = db_session.get(Organization, org_id)
                if organization is None:
                    raise LookupError(f"Organization '{org_id}' not found")
                organization.settings = _with_flag(organization.settings, disabled)
                db_session.add(organization)
                db_session.commit()
        except Exception as e:
            logger.exception(
                "Failed to update organization settings", extra={"org_id": org_id}
            )
            raise VideoPersistenceError(org_id, cause=e) from e

    def _update_video(self, video_id: str, **fields) -> None:
        try:
            with self._session_factory() as db_session:
                video = db_session.get(Video, video_id)
                if video is None:
                    raise VideoNotFoundError(video_id)
                for name, value in fields.items():
                    setattr(video, name, value)
                db_session.add(video)
                db_session.commit()
        except VideoNotFoundError:
            raise
        except Exception as e:
            logger.exception("Failed to update video", extra={"video_id": video_id})
            raise VideoPersistenceError(video_id, cause=e) from e

    def _to_bucket_ref(self, bucket: S3Bucket) -> BucketRef:
        return BucketRef(
            id=bucket.id,
            endpoint=bucket.endpoint,
            access_key_id=bucket.access_key_id,
            secret_access_key=bucket.secret_access_key,
            bucket_name=bucket.bucket_name,
            region=bucket.region,
            secure=bucket.secure,
        )


def _with_flag(settings: dict | None, disabled: bool | None) -> dict:
    # JSON columns only see reassignment, never in-place mutation
    updated = dict(settings or {})
    if disabled is None:
        updated.pop(DISABLE_TRANSCRIPT_KEY, None)
    else:
        updated[DISABLE_TRANSCRIPT_KEY] = disabled
    return updated
