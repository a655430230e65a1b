#!/usr/bin/env python3
"""HTTP server that serves record streams for tests and benchmarks.

Each published stream is served at /records/{name} in small chunks, so
clients receive the body piece by piece the way a slow network delivers it.

Usage:
    config = RecordServerConfig(chunk_size=64)
    async with RecordServer(config) as server:
        url = server.publish("events", data)
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from aiohttp import web


@dataclass(frozen=True, slots=True)
class RecordServerConfig:
    """Configuration for the record server.

    Attributes:
        host: Host address to bind to (default: 127.0.0.1)
        port: Port number to listen on; 0 picks a free port (default: 0)
        chunk_size: Bytes per body write (default: 7)
    """

    host: str = "127.0.0.1"
    port: int = 0
    chunk_size: int = 7


@dataclass
class RecordServer:
    """Async HTTP server for published record streams.

    Example:
        ```python
        async with RecordServer(RecordServerConfig()) as server:
            url = server.publish("events", frame_bytes(b"Hello"))
            async with httpx.AsyncClient() as client:
                stream = await HttpBodyStream.open(client, url)
        ```
    """

    config: RecordServerConfig = field(default_factory=RecordServerConfig)
    _streams: dict[str, bytes] = field(default_factory=dict, init=False)
    _request_count: int = field(default=0, init=False)
    _runner: web.AppRunner | None = field(default=None, init=False)
    _bound_port: int | None = field(default=None, init=False)

    @property
    def base_url(self) -> str:
        """Get the base URL of the server."""
        port = self._bound_port or self.config.port
        return f"http://{self.config.host}:{port}"

    @property
    def request_count(self) -> int:
        """Get the number of stream requests handled so far."""
        return self._request_count

    def url(self, name: str) -> str:
        """Return the URL a stream is (or would be) served at."""
        return f"{self.base_url}/records/{name}"

    def publish(self, name: str, data: bytes) -> str:
        """Register data under name and return its URL."""
        self._streams[name] = data
        return self.url(name)

    async def handle_records(self, request: web.Request) -> web.StreamResponse:
        """Handle stream requests.

        Path: /records/{name}

        Returns:
            The published bytes, written in chunk_size pieces, or 404.
        """
        self._request_count += 1
        name = request.match_info["name"]
        if name not in self._streams:
            return web.json_response({"error": "unknown stream"}, status=404)

        data = self._streams[name]
        response = web.StreamResponse(headers={"Content-Type": "application/octet-stream"})
        response.content_length = len(data)
        await response.prepare(request)
        for start in range(0, len(data), self.config.chunk_size):
            await response.write(data[start : start + self.config.chunk_size])
        await response.write_eof()
        return response

    def _create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/records/{name}", self.handle_records)
        return app

    async def start(self) -> None:
        """Start the server.

        Raises:
            RuntimeError: If the server is already running.
        """
        if self._runner is not None:
            raise RuntimeError("Server is already running")

        self._runner = web.AppRunner(self._create_app())
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await site.start()

        self._bound_port = self.config.port
        if self._runner.addresses:
            address = self._runner.addresses[0]
            if isinstance(address, tuple) and len(address) >= 2:
                self._bound_port = address[1]
        self._request_count = 0

    async def stop(self) -> None:
        """Stop the server.

        Raises:
            RuntimeError: If the server is not running.
        """
        if self._runner is None:
            raise RuntimeError("Server is not running")

        await self._runner.cleanup()
        self._runner = None
        self._bound_port = None

    async def __aenter__(self) -> RecordServer:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop()
