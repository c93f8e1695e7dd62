"""Dependency injection configuration for the video-transcriber service."""

from contextlib import contextmanager

import pika
from minio import Minio
from sqlmodel import Session, create_engine

from video_transcriber.config import load_config
from video_transcriber.handlers import TranscriptionHandler
from video_transcriber.infrastructure import (
    AssemblyAITranscriber,
    HttpRangeProbe,
    MinioBucketResolver,
    MinioStorageBucket,
    RabbitMQBroker,
    RabbitMQGenerationTrigger,
    build_audio_extractor,
)
from video_transcriber.logging import setup_logging
from video_transcriber.repositories import VideoRepository
from video_transcriber.worker import Worker

logger = setup_logging()

_config = load_config()

# MinIO default bucket
_minio_client = Minio(
    endpoint=_config.minio.endpoint,
    access_key=_config.minio.user,
    secret_key=_config.minio.password,
    secure=_config.minio.secure,
)
_default_bucket = MinioStorageBucket(
    _minio_client,
    _config.minio.bucket_name,
    _config.minio.presigned_url_expiry_seconds,
)
_default_bucket.ensure_bucket_exists()
_bucket_resolver = MinioBucketResolver(
    _default_bucket, _config.minio.presigned_url_expiry_seconds
)

# PostgreSQL database
_db_engine = create_engine(_config.postgres.url)
logger.info("Database engine created", extra={"host": _config.postgres.host})


@contextmanager
def _session_factory():
    """Creates a database session context manager."""
    with Session(_db_engine) as session:
        yield session


_repository = VideoRepository(_session_factory)

# RabbitMQ broker
_credentials = pika.PlainCredentials(_config.rabbitmq.user, _config.rabbitmq.password)
_parameters = pika.ConnectionParameters(
    host=_config.rabbitmq.host,
    credentials=_credentials,
    heartbeat=0,
)
_rabbit_connection = pika.BlockingConnection(_parameters)
_rabbit_channel = _rabbit_connection.channel()
_broker = RabbitMQBroker(
    _rabbit_channel, _config.rabbitmq.exchange_name, _config.rabbitmq.queue_config
)
_broker.setup()

_generation_trigger = RabbitMQGenerationTrigger(
    _parameters,
    _config.rabbitmq.exchange_name,
    _config.rabbitmq.queue_config.generation_routing_key,
)

# Service composition
_handler = TranscriptionHandler(
    repository=_repository,
    bucket_resolver=_bucket_resolver,
    probe=HttpRangeProbe(),
    extractor=build_audio_extractor(_config.media_server),
    transcription_service=AssemblyAITranscriber(_config.assemblyai),
    generation_trigger=_generation_trigger,
    config=_config.assemblyai,
)


def get_handler() -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    return _handler


def get_worker() -> Worker:
    """Returns the configured worker instance."""
    return Worker(_broker, _handler, _config.rabbitmq)
