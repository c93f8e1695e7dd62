"""Remote media server implementation of the AudioExtractor interface."""

import asyncio

import aiohttp

from video_transcriber.config import MediaServerConfig
from video_transcriber.exceptions import AudioExtractionError, ConfigError
from video_transcriber.logging import setup_logging

from .interfaces import AudioExtractor

logger = setup_logging()


class MediaServerAudioExtractor(AudioExtractor):
    """Delegates audio probing and extraction to the media server over HTTP."""

    def __init__(self, config: MediaServerConfig):
        if not config.url:
            raise ConfigError("MEDIA_SERVER_URL")
        self._base_url = config.url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)

    async def has_audio_track(self, video_url: str) -> bool:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as client:
                async with client.post(
                    f"{self._base_url}/audio/check", json={"videoUrl": video_url}
                ) as response:
                    response.raise_for_status()
                    body = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.exception("Media server audio check failed")
            raise AudioExtractionError(video_url, e) from e

        has_audio = bool(body.get("hasAudio"))
        logger.info("Audio track probed via media server", extra={"has_audio": has_audio})
        return has_audio

    async def extract(self, video_url: str) -> bytes:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as client:
                async with client.post(
                    f"{self._base_url}/audio/extract", json={"videoUrl": video_url}
                ) as response:
                    response.raise_for_status()
                    audio_bytes = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.exception("Media server audio extraction failed")
            raise AudioExtractionError(video_url, e) from e

        if not audio_bytes:
            raise AudioExtractionError(video_url, ValueError("Media server returned no audio"))

        logger.info(
            "Audio extracted via media server", extra={"size": len(audio_bytes)}
        )
        return audio_bytes
