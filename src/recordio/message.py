"""Structured message support for records.

Any object with protocol buffer style ``SerializeToString`` and
``ParseFromString`` methods can be written and read as a record. Generated
``google.protobuf`` message classes satisfy the protocol without adaptation.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from recordio.errors import DeserializationError, SerializationError


@runtime_checkable
class Message(Protocol):
    """Protocol for values with a canonical byte encoding.

    Example:
        >>> from google.protobuf.wrappers_pb2 import StringValue
        >>> isinstance(StringValue(value="x"), Message)
        True
    """

    def SerializeToString(self) -> bytes:  # noqa: N802
        """Encode the message to bytes."""
        ...

    def ParseFromString(self, serialized: bytes) -> int | None:  # noqa: N802
        """Merge the decoded bytes into this message."""
        ...


M = TypeVar("M", bound=Message)


def encode_message(message: Message) -> bytes:
    """Serialize a message to its canonical bytes.

    Raises:
        SerializationError: If the message cannot be encoded.
    """
    try:
        return message.SerializeToString()
    except Exception as exc:
        raise SerializationError(
            f"Cannot serialize {type(message).__name__}: {exc}"
        ) from exc


def decode_message(data: bytes, message: M) -> M:
    """Decode bytes into an existing message and return it.

    The message is not cleared here. Whether fields set earlier survive is up
    to the type's ParseFromString; protobuf messages clear themselves.

    Raises:
        DeserializationError: If the bytes are not a valid encoding.
    """
    try:
        message.ParseFromString(data)
    except Exception as exc:
        raise DeserializationError(
            f"Cannot parse {len(data)} bytes as {type(message).__name__}: {exc}"
        ) from exc
    return message
