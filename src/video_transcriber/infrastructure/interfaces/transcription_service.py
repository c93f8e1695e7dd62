"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from video_transcriber.domain.models import Transcript


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    async def transcribe(self, audio_url: str) -> Transcript:
        """
        Transcribes the audio behind a URL and returns speaker-labeled utterances.

        Args:
            audio_url: A URL the provider can fetch the audio from.

        Returns:
            The normalized transcript.

        Raises:
            ProviderError: If submission, polling or the job itself fails.
            TranscriptionTimeoutError: If the job never reaches a final state.
        """
