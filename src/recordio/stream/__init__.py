"""Byte streams that records are framed on."""

from recordio.stream.base import ReadableStream, Stream, WritableStream
from recordio.stream.connection import ConnectionStream
from recordio.stream.file import FileStream, FileStreamConfig
from recordio.stream.http import HttpBodyStream
from recordio.stream.memory import MemoryStream

__all__ = [
    "ConnectionStream",
    "FileStream",
    "FileStreamConfig",
    "HttpBodyStream",
    "MemoryStream",
    "ReadableStream",
    "Stream",
    "WritableStream",
]
