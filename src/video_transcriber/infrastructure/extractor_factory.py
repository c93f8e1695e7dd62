"""Selection of the audio extraction strategy."""

from video_transcriber.config import MediaServerConfig
from video_transcriber.logging import setup_logging

from .interfaces import AudioExtractor
from .local_audio_extractor import LocalAudioExtractor
from .media_server_extractor import MediaServerAudioExtractor

logger = setup_logging()


def build_audio_extractor(config: MediaServerConfig) -> AudioExtractor:
    """Uses the media server when one is configured, local ffmpeg otherwise."""
    if config.is_configured:
        logger.info("Using media server for audio extraction", extra={"url": config.url})
        return MediaServerAudioExtractor(config)
    logger.info("Using local ffmpeg for audio extraction")
    return LocalAudioExtractor()
