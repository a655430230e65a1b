"""Fixtures for integration tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest_asyncio

from benchmarks.record_server import RecordServer, RecordServerConfig


@pytest_asyncio.fixture
async def record_server() -> AsyncIterator[RecordServer]:
    """Provide a running RecordServer on a free local port."""
    async with RecordServer(RecordServerConfig(chunk_size=7)) as server:
        yield server
