"""Shared models and configuration for record readers and writers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

HEADER_SIZE = 4
MAX_RECORD_SIZE = 2**32 - 1


class FramePhase(str, Enum):
    """Part of a frame an operation was working on.

    Attributes:
        HEADER: The 4-byte length prefix.
        BODY: The payload that follows the prefix.
    """

    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True, slots=True)
class RecordIOConfig:
    """Configuration shared by RecordWriter and RecordReader.

    The default limit is the widest length the 4-byte header can express,
    which means a reader trusts whatever length the stream claims. Lower it
    when reading streams that were not produced by a RecordWriter under your
    control.

    Attributes:
        max_record_size: Largest payload in bytes a writer frames or a reader
            accepts (default: 2**32 - 1).
    """

    max_record_size: int = MAX_RECORD_SIZE

    def __post_init__(self) -> None:
        if not 0 <= self.max_record_size <= MAX_RECORD_SIZE:
            raise ValueError(f"max_record_size must be between 0 and {MAX_RECORD_SIZE}")
