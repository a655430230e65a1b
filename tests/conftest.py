"""Pytest configuration and fixtures for recordio tests."""

from __future__ import annotations

import pytest

from recordio import MemoryStream, frame_bytes


@pytest.fixture()
def memory_stream() -> MemoryStream:
    """Provide an empty in-memory stream."""
    return MemoryStream()


@pytest.fixture()
def hello_world_stream() -> MemoryStream:
    """Provide a stream already holding the records "Hello" and "World"."""
    return MemoryStream(frame_bytes(b"Hello") + frame_bytes(b"World"))


@pytest.fixture()
def sample_payloads() -> list[bytes]:
    """Provide payloads of assorted sizes, including an empty one."""
    return [b"", b"x", b"Hello", bytes(range(256)), b"\x00" * 4096]


@pytest.fixture()
def failing_stream():
    """Stream whose second write raises, to check error propagation."""

    class FailingStream:
        def __init__(self) -> None:
            self.calls: list[bytes] = []

        async def read(self, size: int) -> bytes:
            raise OSError("read failed")

        async def write(self, data) -> int:
            self.calls.append(bytes(data))
            if len(self.calls) == 2:
                raise OSError("disk full")
            return len(data)

        async def close(self) -> None:
            pass

    return FailingStream()
