"""Network connection stream over asyncio streams."""

from __future__ import annotations

import asyncio
import logging

from recordio.stream.base import Stream

logger = logging.getLogger(__name__)


class ConnectionStream(Stream):
    """Wraps an asyncio StreamReader/StreamWriter pair.

    Reads return whatever the transport has buffered, so short reads are
    routine here. Writes hand the whole chunk to the transport and wait on
    drain() for backpressure.
    """

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer

    @classmethod
    async def connect(cls, host: str, port: int) -> ConnectionStream:
        """Open a TCP connection and wrap it."""
        reader, writer = await asyncio.open_connection(host, port)
        logger.debug("Connected to %s:%d", host, port)
        return cls(reader, writer)

    async def read(self, size: int) -> bytes:
        return await self._reader.read(size)

    async def write(self, data: bytes | bytearray | memoryview) -> int:
        self._writer.write(data)
        await self._writer.drain()
        return len(data)

    async def close(self) -> None:
        if not self._writer.is_closing():
            self._writer.close()
        await self._writer.wait_closed()
