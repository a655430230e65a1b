"""recordio: length-prefixed record framing over async byte streams.

Each call to RecordWriter.write produces one record on the wrapped stream,
and the matching RecordReader.read_record returns exactly the bytes that
were written, whatever else the stream holds around them.
"""

from recordio.errors import (
    DeserializationError,
    InsufficientBufferError,
    RecordIOError,
    RecordTooLargeError,
    SerializationError,
    ShortReadError,
    ShortWriteError,
)
from recordio.framing import decode_header, deframe, encode_header, frame_bytes
from recordio.message import Message
from recordio.models import HEADER_SIZE, MAX_RECORD_SIZE, FramePhase, RecordIOConfig
from recordio.reader import RecordReader
from recordio.stream import (
    ConnectionStream,
    FileStream,
    FileStreamConfig,
    HttpBodyStream,
    MemoryStream,
    ReadableStream,
    Stream,
    WritableStream,
)
from recordio.writer import RecordWriter

__version__ = "0.1.0"

__all__ = [
    "HEADER_SIZE",
    "MAX_RECORD_SIZE",
    "ConnectionStream",
    "DeserializationError",
    "FileStream",
    "FileStreamConfig",
    "FramePhase",
    "HttpBodyStream",
    "InsufficientBufferError",
    "MemoryStream",
    "Message",
    "ReadableStream",
    "RecordIOConfig",
    "RecordIOError",
    "RecordReader",
    "RecordTooLargeError",
    "RecordWriter",
    "SerializationError",
    "ShortReadError",
    "ShortWriteError",
    "Stream",
    "WritableStream",
    "decode_header",
    "deframe",
    "encode_header",
    "frame_bytes",
]
