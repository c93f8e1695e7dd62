"""RabbitMQ implementations of the MessageBroker and GenerationTrigger interfaces."""

import json
from collections.abc import Callable
from typing import Any

import pika
from pika.adapters.blocking_connection import BlockingChannel

from video_transcriber.config import QueueConfig
from video_transcriber.exceptions import EventPublishError
from video_transcriber.logging import setup_logging

from .interfaces import GenerationTrigger, MessageBroker

logger = setup_logging()

_JSON_PERSISTENT = pika.BasicProperties(
    content_type="application/json",
    delivery_mode=pika.DeliveryMode.Persistent,
)


def _publish_json(
    channel: BlockingChannel, exchange: str, routing_key: str, payload: dict
) -> None:
    try:
        channel.basic_publish(
            exchange=exchange,
            routing_key=routing_key,
            body=json.dumps(payload),
            properties=_JSON_PERSISTENT,
        )
    except Exception as e:
        logger.exception("RabbitMQ publish failed", extra={"routing_key": routing_key})
        raise EventPublishError(routing_key, e) from e
    logger.info(
        "Event published",
        extra={"exchange": exchange, "routing_key": routing_key},
    )


class RabbitMQBroker(MessageBroker):
    """Consumes the transcription queue and publishes pipeline events."""

    def __init__(self, channel: BlockingChannel, exchange_name: str, queue: QueueConfig):
        self._channel = channel
        self._exchange_name = exchange_name
        self._queue = queue

    def publish(self, routing_key: str, payload: dict) -> None:
        _publish_json(self._channel, self._exchange_name, routing_key, payload)

    def acknowledge(self, delivery_tag: int) -> None:
        self._channel.basic_ack(delivery_tag=delivery_tag)

    def reject(self, delivery_tag: int) -> None:
        # Requeued; the quorum queue's delivery limit dead-letters repeat failures
        self._channel.basic_nack(delivery_tag=delivery_tag, requeue=True)

    def consume(
        self, callback: Callable[[bytes, int, dict[str, Any] | None], None]
    ) -> None:
        def on_message(ch, method, properties, body):
            callback(body, method.delivery_tag, getattr(properties, "headers", None))

        # One video at a time per worker process
        self._channel.basic_qos(prefetch_count=1)
        self._channel.basic_consume(queue=self._queue.name, on_message_callback=on_message)
        logger.info("Waiting for transcription requests", extra={"queue": self._queue.name})
        self._channel.start_consuming()

    def setup(self) -> None:
        """Declares the transcription queue, its exchange binding and its dead-letter queue."""
        queue = self._queue

        self._channel.exchange_declare(
            exchange=queue.dlq_exchange_name, exchange_type="direct", durable=True
        )
        self._channel.queue_declare(queue=queue.dlq_name, durable=True)
        self._channel.queue_bind(
            queue=queue.dlq_name,
            exchange=queue.dlq_exchange_name,
            routing_key=queue.dlq_routing_key,
        )

        self._channel.exchange_declare(
            exchange=self._exchange_name, exchange_type="topic", durable=True
        )
        self._channel.queue_declare(
            queue=queue.name,
            durable=True,
            arguments={
                "x-queue-type": queue.queue_type,
                "x-delivery-limit": queue.max_delivery_count,
                "x-dead-letter-exchange": queue.dlq_exchange_name,
                "x-dead-letter-routing-key": queue.dlq_routing_key,
            },
        )
        self._channel.queue_bind(
            queue=queue.name,
            exchange=self._exchange_name,
            routing_key=queue.expected_routing_key,
        )
        logger.info(
            "Transcription queue declared",
            extra={"queue": queue.name, "dead_letter_queue": queue.dlq_name},
        )


class RabbitMQGenerationTrigger(GenerationTrigger):
    """
    Requests AI generation by publishing an event for the generation service.

    A fresh connection is opened per request: the trigger runs on a worker
    thread while the consumer channel stays busy on the main thread, and pika
    channels are not thread-safe.
    """

    def __init__(
        self,
        parameters: pika.ConnectionParameters,
        exchange_name: str,
        routing_key: str,
    ):
        self._parameters = parameters
        self._exchange_name = exchange_name
        self._routing_key = routing_key

    def start_generation(self, video_id: str, user_id: str) -> None:
        try:
            connection = pika.BlockingConnection(self._parameters)
        except Exception as e:
            logger.exception(
                "RabbitMQ connection failed", extra={"routing_key": self._routing_key}
            )
            raise EventPublishError(self._routing_key, e) from e

        try:
            _publish_json(
                connection.channel(),
                self._exchange_name,
                self._routing_key,
                {"video_id": video_id, "user_id": user_id},
            )
        finally:
            connection.close()
