"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .extractor_factory import build_audio_extractor
from .http_probe import HttpRangeProbe
from .local_audio_extractor import LocalAudioExtractor
from .media_server_extractor import MediaServerAudioExtractor
from .minio_storage import MinioBucketResolver, MinioStorageBucket
from .rabbitmq_broker import RabbitMQBroker, RabbitMQGenerationTrigger

__all__ = [
    "AssemblyAITranscriber",
    "HttpRangeProbe",
    "LocalAudioExtractor",
    "MediaServerAudioExtractor",
    "MinioBucketResolver",
    "MinioStorageBucket",
    "RabbitMQBroker",
    "RabbitMQGenerationTrigger",
    "build_audio_extractor",
]
