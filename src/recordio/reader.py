"""Record reader that parses length-prefixed frames from a readable stream."""

import json
import logging
from collections.abc import AsyncIterator

from recordio.errors import InsufficientBufferError, RecordTooLargeError, ShortReadError
from recordio.framing import decode_header
from recordio.message import M, decode_message
from recordio.models import HEADER_SIZE, FramePhase, RecordIOConfig
from recordio.stream.base import ReadableStream

logger = logging.getLogger(__name__)


class RecordReader:
    """Reads records written by a RecordWriter back from a stream.

    The length of each record is read from the stream before its payload and
    used to size the payload buffer. With the default configuration this
    means a corrupted or hostile stream can make the reader allocate up to
    4 GiB from four bytes of input. Only read streams known to come from a
    RecordWriter, or set RecordIOConfig.max_record_size to cap the length.

    The reader keeps no position of its own; the stream's position is the
    only cursor. Reads must start on a frame boundary. After any error the
    stream is no longer known to be on one and should be abandoned.

    Example:
        ```python
        reader = RecordReader(stream)
        first = await reader.read_record()
        async for record in reader:
            ...
        ```
    """

    def __init__(self, stream: ReadableStream, config: RecordIOConfig | None = None) -> None:
        """Initialize the reader. No I/O happens until the first read.

        Args:
            stream: Stream the reader takes ownership of.
            config: Framing configuration (default: RecordIOConfig()).
        """
        self._stream = stream
        self._config = config or RecordIOConfig()
        self._bytes_read = 0
        self._records_read = 0

    @property
    def stream(self) -> ReadableStream:
        """The wrapped stream."""
        return self._stream

    @property
    def bytes_read(self) -> int:
        """Total bytes, headers included, consumed from the stream so far."""
        return self._bytes_read

    @property
    def records_read(self) -> int:
        """Number of complete records read so far."""
        return self._records_read

    async def _read_exactly(self, size: int, phase: FramePhase) -> bytes:
        """Read exactly `size` bytes, retrying short reads until end of data."""
        buffer = bytearray()
        while len(buffer) < size:
            chunk = await self._stream.read(size - len(buffer))
            if not chunk:
                raise ShortReadError(phase, expected=size, partial=bytes(buffer))
            buffer += chunk
            self._bytes_read += len(chunk)
        return bytes(buffer)

    async def read_record(self) -> bytes:
        """Read the next record from the stream.

        Returns:
            The record payload, exactly as it was written.

        Raises:
            ShortReadError: If the stream ends inside the header (phase
                HEADER) or inside the payload (phase BODY). A stream that ends
                exactly on a frame boundary raises with phase HEADER and
                received == 0.
            RecordTooLargeError: If the header claims more than
                max_record_size bytes. The header has been consumed.
        """
        header = await self._read_exactly(HEADER_SIZE, FramePhase.HEADER)
        length = decode_header(header)

        if length > self._config.max_record_size:
            logger.debug(
                json.dumps(
                    {
                        "event": "record_rejected",
                        "size": length,
                        "limit": self._config.max_record_size,
                    }
                )
            )
            raise RecordTooLargeError(length, self._config.max_record_size)

        payload = await self._read_exactly(length, FramePhase.BODY)

        self._records_read += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                json.dumps(
                    {"event": "record_read", "size": length, "record": self._records_read}
                )
            )
        return payload

    async def read_into(self, buffer: bytearray | memoryview) -> int:
        """Read the next record into a caller-supplied buffer.

        Only the prefix of `buffer` up to the record length is overwritten.

        If the buffer is too small no data is copied, yet the reader has still
        advanced past the record. The record is lost to the caller.

        Returns:
            Length of the record copied into buffer.

        Raises:
            InsufficientBufferError: If the record is longer than the buffer.
        """
        payload = await self.read_record()
        size = len(payload)
        target = memoryview(buffer).cast("B")

        if size > len(target):
            raise InsufficientBufferError(record_size=size, capacity=len(target))

        target[:size] = payload
        return size

    async def read_message(self, message: M) -> M:
        """Read the next record and decode it into `message`.

        The message type is chosen by the instance passed in. It is not cleared
        beforehand, so reset it between reads when reusing one instance. If
        the record does not decode, the reader has still advanced past it.

        Returns:
            The same message instance, now populated.

        Raises:
            DeserializationError: If the record is not a valid encoding.
        """
        payload = await self.read_record()
        return decode_message(payload, message)

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iter_records()

    async def _iter_records(self) -> AsyncIterator[bytes]:
        """Yield records until the stream ends on a frame boundary."""
        while True:
            try:
                payload = await self.read_record()
            except ShortReadError as exc:
                if exc.at_boundary:
                    return
                raise
            yield payload

    async def close(self) -> None:
        """Close the underlying stream."""
        await self._stream.close()
