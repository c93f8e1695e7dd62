"""Abstract interface for checking that a source object is readable."""

from abc import ABC, abstractmethod


class SourceProbe(ABC):
    """Performs a minimal read against a URL."""

    @abstractmethod
    async def is_reachable(self, url: str) -> bool:
        """Returns True if the object behind the URL can be read."""
