"""Base protocols for the byte streams records are framed on."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReadableStream(Protocol):
    """Protocol for ordered byte sources."""

    async def read(self, size: int) -> bytes:
        """Read up to `size` bytes. Fewer is normal; b"" means end of data."""
        ...

    async def close(self) -> None:
        """Close the stream and release resources."""
        ...


@runtime_checkable
class WritableStream(Protocol):
    """Protocol for ordered byte sinks."""

    async def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write data. Returns the number of bytes accepted, which may be fewer."""
        ...

    async def close(self) -> None:
        """Close the stream and release resources."""
        ...


@runtime_checkable
class Stream(ReadableStream, WritableStream, Protocol):
    """Protocol for streams that can be both read and written."""

    pass
