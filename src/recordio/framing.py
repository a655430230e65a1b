"""Wire format helpers.

Frame layout:
    [4 bytes - payload length, unsigned big-endian]
    [N bytes - payload]

A stream is a plain concatenation of frames, with no magic number, version
or trailer.
"""

from __future__ import annotations

import struct

from recordio.errors import RecordTooLargeError
from recordio.models import HEADER_SIZE, MAX_RECORD_SIZE

_HEADER = struct.Struct("!I")


def encode_header(length: int) -> bytes:
    """Encode a payload length as a frame header.

    Raises:
        RecordTooLargeError: If length does not fit in 4 bytes.
        ValueError: If length is negative.
    """
    if length < 0:
        raise ValueError("Record length must be non-negative")
    if length > MAX_RECORD_SIZE:
        raise RecordTooLargeError(length, MAX_RECORD_SIZE)
    return _HEADER.pack(length)


def decode_header(header: bytes | bytearray | memoryview) -> int:
    """Decode a 4-byte frame header into the payload length."""
    if len(header) != HEADER_SIZE:
        raise ValueError(f"Frame header must be {HEADER_SIZE} bytes, got {len(header)}")
    (length,) = _HEADER.unpack(header)
    return length


def frame_bytes(payload: bytes | bytearray | memoryview) -> bytes:
    """Return header and payload as a single frame."""
    view = memoryview(payload).cast("B")
    return encode_header(view.nbytes) + view.tobytes()


def deframe(buffer: bytes | bytearray) -> tuple[list[bytes], bytes]:
    """Split a buffer into complete frames.

    Args:
        buffer: Zero or more frames, optionally followed by an incomplete one.

    Returns:
        The payloads of every complete frame in order, and the unconsumed
        remainder (an incomplete trailing frame, or b"").
    """
    frames: list[bytes] = []
    offset = 0
    while len(buffer) - offset >= HEADER_SIZE:
        (length,) = _HEADER.unpack_from(buffer, offset)
        start = offset + HEADER_SIZE
        end = start + length
        if end > len(buffer):
            break
        frames.append(bytes(buffer[start:end]))
        offset = end
    return frames, bytes(buffer[offset:])
