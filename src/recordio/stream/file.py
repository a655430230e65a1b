"""File stream with async I/O through aiofiles."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

import aiofiles

from recordio.stream.base import Stream

logger = logging.getLogger(__name__)

_MODES = frozenset({"rb", "wb", "ab", "r+b", "w+b", "a+b"})


@dataclass
class FileStreamConfig:
    """Configuration for FileStream.

    Attributes:
        file_path: Path to the file holding the record stream.
        mode: Binary open mode, e.g. "rb" to read records or "wb"/"ab" to
            write them.
        fsync: Whether flush() forces data to disk with os.fsync.
    """

    file_path: Path
    mode: str = "rb"
    fsync: bool = False

    def __post_init__(self) -> None:
        if self.mode not in _MODES:
            raise ValueError(f"mode must be one of {sorted(_MODES)}, got {self.mode!r}")
        self.file_path = Path(self.file_path)


class FileStream(Stream):
    """File on disk exposed as a record stream.

    The file is opened lazily on the first read or write, or when entering
    the async context manager.

    Example:
        ```python
        config = FileStreamConfig(Path("events.rec"), mode="wb")
        async with RecordWriter(FileStream(config)) as writer:
            await writer.write(b"first")
        ```
    """

    def __init__(self, config: FileStreamConfig) -> None:
        """Initialize the file stream.

        Args:
            config: Stream configuration.
        """
        self._config = config
        self._file: Any = None
        self._closed = False

    @property
    def config(self) -> FileStreamConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> Self:
        """Enter async context manager and open the file.

        Returns:
            Self for context manager protocol.
        """
        await self._ensure_open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager and close the file."""
        await self.close()

    async def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Cannot use closed file stream")
        if self._file is None:
            self._file = await aiofiles.open(self._config.file_path, mode=self._config.mode)
            logger.debug("Opened %s (mode=%s)", self._config.file_path, self._config.mode)

    async def read(self, size: int) -> bytes:
        await self._ensure_open()
        return await self._file.read(size)

    async def write(self, data: bytes | bytearray | memoryview) -> int:
        await self._ensure_open()
        written = await self._file.write(data)
        # Buffered binary files report None only in non-blocking mode.
        return len(data) if written is None else written

    async def flush(self) -> None:
        """Flush buffered writes, forcing them to disk when fsync is enabled."""
        if self._file is None:
            return
        await self._file.flush()
        if self._config.fsync:
            os.fsync(self._file.fileno())

    async def close(self) -> None:
        """Flush and close the file handle. Calling close twice is a no-op."""
        if self._closed:
            return

        try:
            await self.flush()
        finally:
            self._closed = True

            if self._file is not None:
                await self._file.close()
                self._file = None
                logger.debug("Closed %s", self._config.file_path)
