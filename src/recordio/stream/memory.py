"""In-memory anonymous file stream."""

from __future__ import annotations

from recordio.stream.base import Stream


class MemoryStream(Stream):
    """Byte buffer with an append-only write end and a separate read cursor.

    Writes always append to the end of the buffer. Reads consume from the read
    cursor. Closing rewinds the read cursor to the start, so a stream that was
    just filled through a writer can be handed to a reader and read back from
    the first frame.

    `max_read_size` and `max_write_size` cap how many bytes a single call moves,
    which reproduces the short reads and short writes of pipes and sockets.

    Example:
        ```python
        stream = MemoryStream()
        async with RecordWriter(stream) as writer:
            await writer.write(b"Hello")
        reader = RecordReader(stream)
        assert await reader.read_record() == b"Hello"
        ```
    """

    def __init__(
        self,
        initial: bytes = b"",
        *,
        max_read_size: int | None = None,
        max_write_size: int | None = None,
    ) -> None:
        """Initialize the stream.

        Args:
            initial: Bytes the stream starts out holding.
            max_read_size: Upper bound on bytes returned by one read call.
            max_write_size: Upper bound on bytes accepted by one write call.

        Raises:
            ValueError: If a size limit is less than 1.
        """
        if max_read_size is not None and max_read_size < 1:
            raise ValueError("max_read_size must be at least 1")
        if max_write_size is not None and max_write_size < 1:
            raise ValueError("max_write_size must be at least 1")

        self._buffer = bytearray(initial)
        self._position = 0
        self._max_read_size = max_read_size
        self._max_write_size = max_write_size
        self._close_count = 0

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def position(self) -> int:
        """Offset of the read cursor."""
        return self._position

    @property
    def close_count(self) -> int:
        """Number of times close() has been called."""
        return self._close_count

    def getvalue(self) -> bytes:
        """Return the full contents regardless of the read cursor."""
        return bytes(self._buffer)

    def seek(self, offset: int) -> None:
        """Move the read cursor to an absolute offset."""
        if not 0 <= offset <= len(self._buffer):
            raise ValueError(f"offset {offset} outside stream of {len(self._buffer)} bytes")
        self._position = offset

    async def read(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must be non-negative")
        if self._max_read_size is not None:
            size = min(size, self._max_read_size)
        chunk = bytes(self._buffer[self._position : self._position + size])
        self._position += len(chunk)
        return chunk

    async def write(self, data: bytes | bytearray | memoryview) -> int:
        view = memoryview(data)
        if self._max_write_size is not None:
            view = view[: self._max_write_size]
        self._buffer += view
        return len(view)

    async def close(self) -> None:
        self._close_count += 1
        self._position = 0
