import json

import pytest

from video_transcriber.config import RabbitMQConfig
from video_transcriber.db_models import TranscriptionStatus
from video_transcriber.domain import PipelineResult
from video_transcriber.exceptions import EventPublishError
from video_transcriber.infrastructure.interfaces import MessageBroker
from video_transcriber.worker import Worker


class FakeBroker(MessageBroker):
    def __init__(self, fail_publish=False):
        self.fail_publish = fail_publish
        self.acked: list[int] = []
        self.rejected: list[int] = []
        self.published: list[tuple[str, dict]] = []

    def publish(self, routing_key: str, payload: dict) -> None:
        if self.fail_publish:
            raise EventPublishError(routing_key)
        self.published.append((routing_key, payload))

    def acknowledge(self, delivery_tag: int) -> None:
        self.acked.append(delivery_tag)

    def reject(self, delivery_tag: int) -> None:
        self.rejected.append(delivery_tag)

    def consume(self, callback) -> None:
        callback(
            json.dumps({"video_id": "video-1", "user_id": "user-1"}).encode(),
            1,
            {"x-delivery-count": 2},
        )

    def setup(self) -> None:
        pass


class FakeHandler:
    def __init__(self, result: PipelineResult):
        self.result = result
        self.runs: list[tuple[str, str, bool]] = []
        self.drained = False

    async def run(self, video_id, user_id, ai_generation_enabled=False):
        self.runs.append((video_id, user_id, ai_generation_enabled))
        return self.result

    async def wait_for_background_tasks(self):
        self.drained = True


@pytest.fixture
def config():
    return RabbitMQConfig(host="rabbitmq", user="guest", password="guest")


def message(**fields) -> bytes:
    body = {"video_id": "video-1", "user_id": "user-1", "ai_generation_enabled": True}
    body.update(fields)
    return json.dumps(body).encode()


def test_success_is_acknowledged_and_announced(config):
    broker = FakeBroker()
    handler = FakeHandler(
        PipelineResult(
            success=True,
            message="Transcription completed successfully",
            status=TranscriptionStatus.COMPLETE,
        )
    )

    Worker(broker, handler, config)._on_message(message(), 7, None)

    assert handler.runs == [("video-1", "user-1", True)]
    assert handler.drained
    assert broker.acked == [7]
    assert broker.rejected == []
    assert broker.published == [
        (
            "video.transcription.completed",
            {"video_id": "video-1", "user_id": "user-1", "status": "COMPLETE"},
        )
    ]


def test_failure_is_rejected_for_redelivery(config):
    broker = FakeBroker()
    handler = FakeHandler(PipelineResult(success=False, message="boom"))

    Worker(broker, handler, config)._on_message(message(), 3, {"x-delivery-count": 1})

    assert broker.rejected == [3]
    assert broker.acked == []
    assert broker.published == []


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        json.dumps({"video_id": "v"}).encode(),
        b'{"video_id": "\x80", "user_id": "user-1"}',
    ],
)
def test_invalid_message_is_rejected(config, body):
    broker = FakeBroker()
    handler = FakeHandler(PipelineResult(success=True, message="ok"))

    Worker(broker, handler, config)._on_message(body, 5, None)

    assert broker.rejected == [5]
    assert handler.runs == []


def test_publish_failure_does_not_undo_ack(config):
    broker = FakeBroker(fail_publish=True)
    handler = FakeHandler(
        PipelineResult(success=True, message="skipped", status=TranscriptionStatus.SKIPPED)
    )

    Worker(broker, handler, config)._on_message(message(), 9, None)

    assert broker.acked == [9]
    assert broker.rejected == []


def test_start_consumes_through_broker(config):
    broker = FakeBroker()
    handler = FakeHandler(PipelineResult(success=True, message="ok"))

    Worker(broker, handler, config).start()

    assert handler.runs == [("video-1", "user-1", False)]
    assert broker.acked == [1]
