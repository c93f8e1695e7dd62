"""Domain layer exports."""

from .models import (
    BucketRef,
    PipelineResult,
    Transcript,
    TranscriptionRequest,
    TranscriptJob,
    Utterance,
    VideoContext,
)
from .subtitle_formatter import format_time, format_webvtt, parse_webvtt

__all__ = [
    "BucketRef",
    "PipelineResult",
    "Transcript",
    "TranscriptionRequest",
    "TranscriptJob",
    "Utterance",
    "VideoContext",
    "format_time",
    "format_webvtt",
    "parse_webvtt",
]
