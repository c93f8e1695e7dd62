"""aiohttp implementation of the SourceProbe interface."""

import asyncio

import aiohttp

from video_transcriber.logging import setup_logging

from .interfaces import SourceProbe

logger = setup_logging()


class HttpRangeProbe(SourceProbe):
    """Reads the first byte of an object to confirm it is accessible."""

    def __init__(self, timeout_seconds: float = 30.0):
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def is_reachable(self, url: str) -> bool:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as client:
                async with client.get(url, headers={"Range": "bytes=0-0"}) as response:
                    if response.status >= 400:
                        logger.warning(
                            "Source probe rejected", extra={"status": response.status}
                        )
                        return False
                    return True
        except (aiohttp.ClientError, asyncio.TimeoutError):
            logger.exception("Source probe failed")
            return False
