"""Abstract interface for audio extraction strategies."""

from abc import ABC, abstractmethod


class AudioExtractor(ABC):
    """Obtains a decoded audio track from a video URL."""

    @abstractmethod
    async def has_audio_track(self, video_url: str) -> bool:
        """
        Checks whether the video carries an audio stream.

        Raises:
            AudioExtractionError: If the check itself fails.
        """

    @abstractmethod
    async def extract(self, video_url: str) -> bytes:
        """
        Extracts the audio track as MP3 bytes.

        Raises:
            AudioExtractionError: If extraction fails.
        """
