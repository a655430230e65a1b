"""Error taxonomy for record framing.

Every error raised by the framing layer derives from RecordIOError. Errors
raised by the underlying stream (OSError, cancellation, HTTP errors) are never
wrapped and reach the caller unchanged.
"""

from __future__ import annotations

from recordio.models import FramePhase


class RecordIOError(Exception):
    """Base class for all framing errors."""

    pass


class ShortReadError(RecordIOError):
    """Raised when the stream ends before a frame is complete.

    The stream position is no longer known to sit on a frame boundary, so the
    stream should be treated as unusable for further reads.

    Attributes:
        phase: Which part of the frame was being read.
        expected: Number of bytes the frame required for this phase.
        received: Number of bytes actually read before end of data.
        partial: The bytes that were read. Never a valid record.
    """

    def __init__(self, phase: FramePhase, expected: int, partial: bytes = b"") -> None:
        super().__init__(
            f"Short read for {phase.value}: expected {expected} bytes, got {len(partial)}"
        )
        self.phase = phase
        self.expected = expected
        self.received = len(partial)
        self.partial = partial

    @property
    def at_boundary(self) -> bool:
        """True when the stream ended cleanly before any header byte."""
        return self.phase is FramePhase.HEADER and self.received == 0


class ShortWriteError(RecordIOError):
    """Raised when the stream accepted fewer payload bytes than requested.

    The record is only partially committed and the stream no longer holds
    valid framing after this point.

    Attributes:
        expected: Payload length that should have been written.
        written: Payload bytes the stream accepted.
        bytes_written: Header and payload bytes committed by this call.
    """

    def __init__(self, expected: int, written: int, bytes_written: int) -> None:
        super().__init__(f"Short write: expected {expected} payload bytes, wrote {written}")
        self.expected = expected
        self.written = written
        self.bytes_written = bytes_written


class InsufficientBufferError(RecordIOError):
    """Raised when a caller buffer cannot hold the next record.

    The record has been consumed from the stream all the same.
    """

    def __init__(self, record_size: int, capacity: int) -> None:
        super().__init__(
            f"Insufficiently large buffer: record is {record_size} bytes, "
            f"buffer holds {capacity}"
        )
        self.record_size = record_size
        self.capacity = capacity


class RecordTooLargeError(RecordIOError, ValueError):
    """Raised when a record length exceeds the configured or wire limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Record of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class SerializationError(RecordIOError):
    """Raised when a message cannot be encoded. Nothing was written."""

    pass


class DeserializationError(RecordIOError):
    """Raised when a record cannot be decoded into the target message."""

    pass
