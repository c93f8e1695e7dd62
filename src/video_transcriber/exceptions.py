"""Custom exceptions for the video-transcriber service."""


class VideoNotFoundError(Exception):
    """Raised when the requested video does not exist."""

    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__("Video does not exist")


class VideoMetadataError(Exception):
    """Raised when the video row is missing fields the pipeline needs."""

    def __init__(self, video_id: str, reason: str):
        self.video_id = video_id
        self.reason = reason
        super().__init__(f"Video information is missing: {reason}")


class ConfigError(Exception):
    """Raised when a required setting or credential is absent."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Missing {setting}")


class SourceUnreachableError(Exception):
    """Raised when the source video object cannot be read."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__("Video file not accessible")


class AudioExtractionError(Exception):
    """Raised when audio extraction from video fails."""

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to extract audio from '{source}'")


class ProviderError(Exception):
    """Raised when the transcription provider rejects or fails a job."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class ProviderUnreachableError(ProviderError):
    """Raised when the transcription provider endpoint cannot be reached."""


class TranscriptionTimeoutError(ProviderError):
    """Raised when a transcription job does not finish within the poll budget."""

    def __init__(self, job_id: str, attempts: int):
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(
            f"AssemblyAI job '{job_id}' did not complete after {attempts} polls"
        )


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class StorageDeleteError(Exception):
    """Raised when deleting a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to delete '{object_name}' from storage")


class StorageUrlError(Exception):
    """Raised when a presigned URL cannot be generated."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to sign URL for '{object_name}'")


class VideoPersistenceError(Exception):
    """Raised when reading or writing the video row fails."""

    def __init__(self, video_id: str, cause: Exception | None = None):
        self.video_id = video_id
        self.cause = cause
        super().__init__(f"Failed to persist video '{video_id}' to database")


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
