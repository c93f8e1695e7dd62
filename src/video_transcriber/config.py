"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration for the default bucket."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "videos"
    secure: bool = False
    presigned_url_expiry_seconds: int = 3600


class QueueConfig(BaseModel, frozen=True):
    """RabbitMQ queue configuration."""

    name: str = "video_transcription_queue"
    queue_type: str = "quorum"
    max_delivery_count: int = 3
    expected_routing_key: str = "video.transcription.requested"
    success_routing_key: str = "video.transcription.completed"
    generation_routing_key: str = "ai.generation.requested"
    dlq_name: str = "dlq_video_transcriber"
    dlq_exchange_name: str = "dead_letter_exchange"
    dlq_routing_key: str = "video.transcription.failed"


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection configuration."""

    host: str
    user: str
    password: str
    exchange_name: str = "events"
    queue_config: QueueConfig = QueueConfig()


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speaker_labels: bool = True
    base_url: str = "https://api.assemblyai.com"
    poll_interval_seconds: float = 3.0
    max_poll_attempts: int = 1200


class MediaServerConfig(BaseModel, frozen=True):
    """Remote media service used for audio extraction when configured."""

    url: str | None = None
    timeout_seconds: float = 600.0

    @computed_field
    @property
    def is_configured(self) -> bool:
        """Whether extraction should be delegated to the media server."""
        return bool(self.url)


class PostgresConfig(BaseModel, frozen=True):
    """PostgreSQL connection configuration."""

    host: str
    port: int
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    rabbitmq: RabbitMQConfig
    assemblyai: AssemblyAIConfig
    media_server: MediaServerConfig
    postgres: PostgresConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "videos"),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", "rabbitmq"),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            base_url=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com"),
            poll_interval_seconds=float(
                os.getenv("ASSEMBLYAI_POLL_INTERVAL_SECONDS", "3")
            ),
            max_poll_attempts=int(os.getenv("ASSEMBLYAI_MAX_POLL_ATTEMPTS", "1200")),
        ),
        media_server=MediaServerConfig(
            url=os.getenv("MEDIA_SERVER_URL") or None,
        ),
        postgres=PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "videos"),
        ),
    )
