"""Record writer that frames payloads onto a writable stream."""

import json
import logging
from typing import Any, Self

from recordio.errors import RecordTooLargeError, ShortWriteError
from recordio.framing import encode_header
from recordio.message import Message, encode_message
from recordio.models import RecordIOConfig
from recordio.stream.base import WritableStream

logger = logging.getLogger(__name__)


class RecordWriter:
    """Writes each payload to the wrapped stream as one length-prefixed record.

    Every write issues exactly two writes to the underlying stream, the
    4-byte header and then the payload, with no buffering in between. The
    two writes are not atomic, so a RecordWriter must not be used from
    several tasks at once; guard it with an asyncio.Lock if it is shared.

    Errors from the underlying stream (including cancellation) propagate
    unchanged. `bytes_written` is updated before they leave, so the number of
    bytes that reached the stream is always known.

    Example:
        ```python
        async with RecordWriter(MemoryStream()) as writer:
            await writer.write(b"Hello")  # returns 9
            await writer.write_message(StringValue(value="World"))
        ```
    """

    def __init__(self, stream: WritableStream, config: RecordIOConfig | None = None) -> None:
        """Initialize the writer. No I/O happens until the first write.

        Args:
            stream: Stream the writer takes ownership of.
            config: Framing configuration (default: RecordIOConfig()).
        """
        self._stream = stream
        self._config = config or RecordIOConfig()
        self._closed = False
        self._bytes_written = 0
        self._records_written = 0

    @property
    def stream(self) -> WritableStream:
        """The wrapped stream."""
        return self._stream

    @property
    def bytes_written(self) -> int:
        """Total bytes, headers included, accepted by the stream so far."""
        return self._bytes_written

    @property
    def records_written(self) -> int:
        """Number of records fully committed to the stream."""
        return self._records_written

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def write(self, payload: bytes | bytearray | memoryview) -> int:
        """Write payload as a new record.

        This adds len(payload) + 4 bytes to the stream.

        Args:
            payload: Record contents.

        Returns:
            Bytes written for header and payload together.

        Raises:
            RuntimeError: If the writer is closed.
            RecordTooLargeError: If payload exceeds max_record_size. Nothing
                is written.
            ShortWriteError: If the stream accepted only part of the payload.
        """
        if self._closed:
            raise RuntimeError("Cannot write to closed writer")

        payload = memoryview(payload).cast("B")
        size = len(payload)
        if size > self._config.max_record_size:
            raise RecordTooLargeError(size, self._config.max_record_size)

        header = encode_header(size)

        header_written = await self._stream.write(header)
        self._bytes_written += header_written

        body_written = await self._stream.write(payload)
        self._bytes_written += body_written

        total = header_written + body_written
        if body_written < size:
            raise ShortWriteError(expected=size, written=body_written, bytes_written=total)

        self._records_written += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                json.dumps(
                    {
                        "event": "record_written",
                        "size": size,
                        "record": self._records_written,
                        "offset": self._bytes_written - total,
                    }
                )
            )
        return total

    async def write_message(self, message: Message) -> int:
        """Serialize a message and write it as a new record.

        The same locking caveats as for write() apply.

        Returns:
            Bytes written for header and payload together.

        Raises:
            SerializationError: If the message cannot be encoded. Nothing is
                written in that case.
        """
        if self._closed:
            raise RuntimeError("Cannot write to closed writer")

        return await self.write(encode_message(message))

    async def close(self) -> None:
        """Close the underlying stream. No other teardown happens."""
        if self._closed:
            return

        self._closed = True
        await self._stream.close()
