"""Local ffmpeg (moviepy) implementation of the AudioExtractor interface."""

import asyncio
import os
import tempfile

from moviepy import AudioFileClip
from moviepy.video.io.ffmpeg_reader import ffmpeg_parse_infos

from video_transcriber.exceptions import AudioExtractionError
from video_transcriber.logging import setup_logging

from .interfaces import AudioExtractor

logger = setup_logging()


class LocalAudioExtractor(AudioExtractor):
    """Extracts audio with a local ffmpeg binary, reading the video from its URL."""

    def __init__(self, audio_bitrate: str = "64k"):
        self._audio_bitrate = audio_bitrate

    async def has_audio_track(self, video_url: str) -> bool:
        try:
            infos = await asyncio.to_thread(ffmpeg_parse_infos, video_url)
        except Exception as e:
            logger.exception("Audio track probe failed")
            raise AudioExtractionError(video_url, e) from e

        has_audio = bool(infos.get("audio_found"))
        logger.info("Audio track probed", extra={"has_audio": has_audio})
        return has_audio

    async def extract(self, video_url: str) -> bytes:
        try:
            audio_bytes = await asyncio.to_thread(self._extract_audio_bytes, video_url)
        except Exception as e:
            logger.exception("Audio extraction failed")
            raise AudioExtractionError(video_url, e) from e

        logger.info("Audio extracted successfully", extra={"size": len(audio_bytes)})
        return audio_bytes

    def _extract_audio_bytes(self, video_url: str) -> bytes:
        """Decodes to a temporary MP3 that never outlives this call."""
        with tempfile.TemporaryDirectory(prefix="audio-extract-") as temp_dir:
            temp_audio_path = os.path.join(temp_dir, "audio.mp3")

            clip = AudioFileClip(video_url)
            try:
                clip.write_audiofile(
                    temp_audio_path,
                    codec="libmp3lame",
                    bitrate=self._audio_bitrate,
                    logger=None,
                )
            finally:
                clip.close()

            with open(temp_audio_path, "rb") as f:
                return f.read()
