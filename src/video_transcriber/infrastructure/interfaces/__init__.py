"""Infrastructure interface exports."""

from .audio_extractor import AudioExtractor
from .generation_trigger import GenerationTrigger
from .message_broker import MessageBroker
from .source_probe import SourceProbe
from .storage import BucketResolver, StorageBucket
from .transcription_service import TranscriptionService

__all__ = [
    "AudioExtractor",
    "BucketResolver",
    "GenerationTrigger",
    "MessageBroker",
    "SourceProbe",
    "StorageBucket",
    "TranscriptionService",
]
