from video_transcriber.config import AppConfig, load_config
from video_transcriber.db_models import TranscriptionStatus
from video_transcriber.exceptions import (
    AudioExtractionError,
    ConfigError,
    ProviderError,
    SourceUnreachableError,
    TranscriptionTimeoutError,
    VideoNotFoundError,
)
from video_transcriber.logging import setup_logging

__all__ = [
    "setup_logging",
    "AppConfig",
    "load_config",
    "TranscriptionStatus",
    "AudioExtractionError",
    "ConfigError",
    "ProviderError",
    "SourceUnreachableError",
    "TranscriptionTimeoutError",
    "VideoNotFoundError",
]
