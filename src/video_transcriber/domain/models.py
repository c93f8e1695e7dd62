"""Domain models for the video transcription pipeline."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from video_transcriber.db_models import TranscriptionStatus


class TranscriptionRequest(BaseModel, frozen=True):
    """Represents an incoming transcription request message."""

    video_id: str
    user_id: str
    ai_generation_enabled: bool = False


class Utterance(BaseModel, frozen=True):
    """A single speaker utterance with millisecond timestamps."""

    speaker: str
    text: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)


class Transcript(BaseModel, frozen=True):
    """Normalized transcription output."""

    utterances: tuple[Utterance, ...] = ()
    text: str = ""


class TranscriptJob(BaseModel, frozen=True):
    """State of one AssemblyAI transcript job as returned by the provider."""

    id: str
    status: Literal["queued", "processing", "completed", "error"]
    text: str | None = None
    utterances: list[Utterance] | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in ("completed", "error")


class BucketRef(BaseModel, frozen=True):
    """Connection details of a custom storage bucket assigned to a video."""

    id: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    region: str | None = None
    secure: bool = True


class VideoContext(BaseModel, frozen=True):
    """Everything the pipeline reads about a video in a single query."""

    video_id: str
    owner_id: str
    bucket: BucketRef | None = None
    settings: dict[str, Any] | None = None
    org_settings: dict[str, Any] | None = None
    transcription_status: TranscriptionStatus | None = None

    @property
    def transcription_disabled(self) -> bool:
        """Video-level setting wins over the organization-level one."""
        video_flag = (self.settings or {}).get("disableTranscript")
        if video_flag is not None:
            return bool(video_flag)
        org_flag = (self.org_settings or {}).get("disableTranscript")
        if org_flag is not None:
            return bool(org_flag)
        return False


class PipelineResult(BaseModel, frozen=True):
    """Outcome reported to the caller of a pipeline run."""

    success: bool
    message: str
    status: TranscriptionStatus | None = None
