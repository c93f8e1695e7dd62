"""Worker that handles queue message consumption and orchestration."""

import asyncio
from typing import Any

from pydantic import ValidationError

from video_transcriber.config import RabbitMQConfig
from video_transcriber.domain import PipelineResult, TranscriptionRequest
from video_transcriber.handlers import TranscriptionHandler
from video_transcriber.infrastructure.interfaces import MessageBroker
from video_transcriber.logging import setup_logging

logger = setup_logging()


class Worker:
    """Consumes transcription requests and runs the pipeline for each one."""

    def __init__(
        self,
        broker: MessageBroker,
        handler: TranscriptionHandler,
        config: RabbitMQConfig,
    ):
        self._broker = broker
        self._handler = handler
        self._config = config

    def start(self) -> None:
        """Starts consuming messages from the queue."""
        logger.info("Worker initialized, starting message consumption")
        self._broker.consume(self._on_message)

    def _on_message(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        """Callback for each received message."""
        delivery_count = headers.get("x-delivery-count", 1) if headers else 1

        logger.info(
            "Message received",
            extra={
                "attempt": delivery_count,
                "max_attempts": self._config.queue_config.max_delivery_count,
            },
        )

        try:
            request = TranscriptionRequest.model_validate_json(body)
        except (ValidationError, ValueError) as e:
            logger.exception("Invalid message format", extra={"error": str(e)})
            self._broker.reject(delivery_tag)
            return

        result = asyncio.run(self._process(request))

        if not result.success:
            logger.error(
                "Message processing failed",
                extra={"video_id": request.video_id, "reason": result.message},
            )
            self._broker.reject(delivery_tag)
            return

        self._broker.acknowledge(delivery_tag)

        try:
            self._broker.publish(
                routing_key=self._config.queue_config.success_routing_key,
                payload={
                    "video_id": request.video_id,
                    "user_id": request.user_id,
                    "status": result.status.value if result.status else None,
                },
            )
        except Exception:
            logger.exception(
                "Completion event not published", extra={"video_id": request.video_id}
            )

        logger.info(
            "Message processed successfully",
            extra={"video_id": request.video_id, "reason": result.message},
        )

    async def _process(self, request: TranscriptionRequest) -> PipelineResult:
        result = await self._handler.run(
            request.video_id, request.user_id, request.ai_generation_enabled
        )
        await self._handler.wait_for_background_tasks()
        return result
