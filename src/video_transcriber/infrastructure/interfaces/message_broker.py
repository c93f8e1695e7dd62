"""Abstract interface for the queue the worker consumes from."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class MessageBroker(ABC):
    """Delivers transcription requests and carries pipeline events."""

    @abstractmethod
    def publish(self, routing_key: str, payload: dict) -> None:
        """
        Publishes an event as JSON on the events exchange.

        Raises:
            EventPublishError: If publishing fails.
        """

    @abstractmethod
    def acknowledge(self, delivery_tag: int) -> None:
        """Marks a request as handled so it is not delivered again."""

    @abstractmethod
    def reject(self, delivery_tag: int) -> None:
        """Returns a request for redelivery, or dead-lettering once the limit is hit."""

    @abstractmethod
    def consume(
        self, callback: Callable[[bytes, int, dict[str, Any] | None], None]
    ) -> None:
        """
        Blocks, feeding each request to callback as (body, delivery_tag, headers).
        """

    @abstractmethod
    def setup(self) -> None:
        """Declares exchanges, queues and bindings. Idempotent."""
