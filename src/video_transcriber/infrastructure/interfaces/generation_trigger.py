"""Abstract interface for the downstream AI generation step."""

from abc import ABC, abstractmethod


class GenerationTrigger(ABC):
    """Starts AI generation (summaries, titles) for a transcribed video."""

    @abstractmethod
    def start_generation(self, video_id: str, user_id: str) -> None:
        """
        Requests generation without waiting for it to finish.

        Raises:
            EventPublishError: If the request cannot be handed off.
        """
