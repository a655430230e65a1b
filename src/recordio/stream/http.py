"""Read-only stream over an HTTP response body."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx

from recordio.stream.base import ReadableStream

logger = logging.getLogger(__name__)


class HttpBodyStream(ReadableStream):
    """Exposes a streamed httpx response body as a readable stream.

    The body is pulled from the connection chunk by chunk as reads ask for
    it; nothing beyond the current chunk is held in memory.

    Example:
        ```python
        async with httpx.AsyncClient() as client:
            stream = await HttpBodyStream.open(client, "https://host/events.rec")
            async for record in RecordReader(stream):
                ...
            await stream.close()
        ```
    """

    def __init__(self, response: httpx.Response) -> None:
        """Initialize from a response sent with ``stream=True``.

        Args:
            response: Response whose body has not been read yet.
        """
        self._response = response
        self._chunks: AsyncIterator[bytes] = response.aiter_bytes()
        self._pending = b""
        self._exhausted = False

    @classmethod
    async def open(cls, client: httpx.AsyncClient, url: str) -> HttpBodyStream:
        """Send a streaming GET request and wrap its body.

        Raises:
            httpx.HTTPStatusError: If the server answers with a non-2xx status.
        """
        request = client.build_request("GET", url)
        response = await client.send(request, stream=True)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError:
            await response.aclose()
            raise
        logger.debug("Streaming %s (status=%d)", url, response.status_code)
        return cls(response)

    @property
    def response(self) -> httpx.Response:
        return self._response

    async def read(self, size: int) -> bytes:
        while not self._pending and not self._exhausted:
            try:
                self._pending = await anext(self._chunks)
            except StopAsyncIteration:
                self._exhausted = True
        chunk, self._pending = self._pending[:size], self._pending[size:]
        return chunk

    async def close(self) -> None:
        await self._response.aclose()
