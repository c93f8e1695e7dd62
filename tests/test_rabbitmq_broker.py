import json
from types import SimpleNamespace

import pika
import pika.exceptions
import pytest

from video_transcriber.config import QueueConfig
from video_transcriber.exceptions import EventPublishError
from video_transcriber.infrastructure import RabbitMQBroker, RabbitMQGenerationTrigger


class RecordingChannel:
    def __init__(self, fail_publish=False):
        self.fail_publish = fail_publish
        self.calls: list[tuple[str, dict]] = []
        self.on_message = None

    def basic_publish(self, **kwargs):
        if self.fail_publish:
            raise pika.exceptions.AMQPChannelError("channel closed")
        self.calls.append(("basic_publish", kwargs))

    def basic_ack(self, **kwargs):
        self.calls.append(("basic_ack", kwargs))

    def basic_nack(self, **kwargs):
        self.calls.append(("basic_nack", kwargs))

    def basic_qos(self, **kwargs):
        self.calls.append(("basic_qos", kwargs))

    def basic_consume(self, **kwargs):
        self.on_message = kwargs["on_message_callback"]
        self.calls.append(("basic_consume", {"queue": kwargs["queue"]}))

    def start_consuming(self):
        self.on_message(
            self,
            SimpleNamespace(delivery_tag=4),
            SimpleNamespace(headers={"x-delivery-count": 2}),
            b"{}",
        )

    def exchange_declare(self, **kwargs):
        self.calls.append(("exchange_declare", kwargs))

    def queue_declare(self, **kwargs):
        self.calls.append(("queue_declare", kwargs))

    def queue_bind(self, **kwargs):
        self.calls.append(("queue_bind", kwargs))


def named(channel, method):
    return [kwargs for name, kwargs in channel.calls if name == method]


def test_publish_sends_persistent_json():
    channel = RecordingChannel()

    RabbitMQBroker(channel, "events", QueueConfig()).publish(
        "video.transcription.completed", {"video_id": "video-1"}
    )

    (call,) = named(channel, "basic_publish")
    assert call["exchange"] == "events"
    assert call["routing_key"] == "video.transcription.completed"
    assert json.loads(call["body"]) == {"video_id": "video-1"}
    assert call["properties"].content_type == "application/json"
    assert call["properties"].delivery_mode == 2


def test_publish_failure_is_wrapped():
    broker = RabbitMQBroker(RecordingChannel(fail_publish=True), "events", QueueConfig())

    with pytest.raises(EventPublishError):
        broker.publish("video.transcription.completed", {})


def test_consume_takes_one_message_at_a_time():
    channel = RecordingChannel()
    received = []

    RabbitMQBroker(channel, "events", QueueConfig()).consume(
        lambda body, tag, headers: received.append((body, tag, headers))
    )

    assert named(channel, "basic_qos") == [{"prefetch_count": 1}]
    assert named(channel, "basic_consume") == [{"queue": "video_transcription_queue"}]
    assert received == [(b"{}", 4, {"x-delivery-count": 2})]


def test_reject_requeues():
    channel = RecordingChannel()

    RabbitMQBroker(channel, "events", QueueConfig()).reject(11)

    assert named(channel, "basic_nack") == [{"delivery_tag": 11, "requeue": True}]


def test_setup_dead_letters_the_transcription_queue():
    channel = RecordingChannel()
    queue = QueueConfig(max_delivery_count=5)

    RabbitMQBroker(channel, "events", queue).setup()

    main_queue = next(
        kwargs for kwargs in named(channel, "queue_declare") if kwargs["queue"] == queue.name
    )
    assert main_queue["arguments"] == {
        "x-queue-type": "quorum",
        "x-delivery-limit": 5,
        "x-dead-letter-exchange": queue.dlq_exchange_name,
        "x-dead-letter-routing-key": "video.transcription.failed",
    }
    assert {
        "queue": queue.name,
        "exchange": "events",
        "routing_key": "video.transcription.requested",
    } in named(channel, "queue_bind")
    assert {
        "queue": "dlq_video_transcriber",
        "exchange": queue.dlq_exchange_name,
        "routing_key": "video.transcription.failed",
    } in named(channel, "queue_bind")


def test_generation_trigger_publishes_on_fresh_connection(monkeypatch):
    channel = RecordingChannel()
    connections = []

    class FakeConnection:
        def __init__(self, parameters):
            self.closed = False
            connections.append(self)

        def channel(self):
            return channel

        def close(self):
            self.closed = True

    monkeypatch.setattr(pika, "BlockingConnection", FakeConnection)
    trigger = RabbitMQGenerationTrigger(
        pika.ConnectionParameters(host="rabbitmq"), "events", "ai.generation.requested"
    )

    trigger.start_generation("video-1", "user-1")

    (call,) = named(channel, "basic_publish")
    assert call["routing_key"] == "ai.generation.requested"
    assert json.loads(call["body"]) == {"video_id": "video-1", "user_id": "user-1"}
    assert [connection.closed for connection in connections] == [True]


def test_generation_trigger_wraps_connection_failure(monkeypatch):
    def refuse(parameters):
        raise pika.exceptions.AMQPConnectionError("refused")

    monkeypatch.setattr(pika, "BlockingConnection", refuse)
    trigger = RabbitMQGenerationTrigger(
        pika.ConnectionParameters(host="rabbitmq"), "events", "ai.generation.requested"
    )

    with pytest.raises(EventPublishError):
        trigger.start_generation("video-1", "user-1")
