"""Wire format for the ground-station link: text messages and vectors of doubles.

Every packet is big-endian. It starts with a 32-bit signed data type tag.
A message follows with a 32-bit length and that many UTF-8 bytes; a length
of ``0xFFFFFFFF`` marks a null byte array.
A vector follows with a 32-bit element count and that many 64-bit IEEE doubles.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Iterable, Optional

_TAG = struct.Struct(">i")
_LENGTH = struct.Struct(">I")
_DOUBLE = struct.Struct(">d")
_NULL_LENGTH = 0xFFFFFFFF


class DataType(enum.IntEnum):
    """Kind of payload a packet carries."""

    MESSAGE = 0
    VECTOR = 1


class Command(enum.IntEnum):
    """Flight command awaiting operator approval."""

    NONE = 0
    TAKEOFF = 1
    LAND = 2
    RETURN_TO_LAUNCH = 3


@dataclass(frozen=True)
class Packet:
    """A decoded packet: either a text message or a vector of values."""

    type: DataType
    message: Optional[str] = None
    values: tuple[float, ...] = ()

    def encode(self) -> bytes:
        if self.type is DataType.MESSAGE:
            return encode_message(self.message or "")
        return encode_vector(self.values)


def encode_message(text: str) -> bytes:
    """Serialize a text message packet."""
    payload = text.encode("utf-8")
    return _TAG.pack(DataType.MESSAGE) + _LENGTH.pack(len(payload)) + payload


def encode_vector(values: Iterable[float]) -> bytes:
    """Serialize a vector packet of doubles."""
    numbers = [float(v) for v in values]
    body = b"".join(_DOUBLE.pack(v) for v in numbers)
    return _TAG.pack(DataType.VECTOR) + _LENGTH.pack(len(numbers)) + body


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._view = memoryview(bytes(data))
        self._offset = 0

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._view):
            raise ValueError(
                f"truncated packet: needed {size} bytes at offset {self._offset}, "
                f"have {len(self._view) - self._offset}"
            )
        chunk = self._view[self._offset:end].tobytes()
        self._offset = end
        return chunk

    def unpack(self, fmt: struct.Struct):
        return fmt.unpack(self.take(fmt.size))[0]


def decode(data: bytes) -> Packet:
    """Parse one packet; raises ``ValueError`` on unknown type or short data."""
    reader = _Reader(data)
    tag = reader.unpack(_TAG)
    try:
        data_type = DataType(tag)
    except ValueError:
        raise ValueError(f"unknown data type {tag}") from None

    if data_type is DataType.MESSAGE:
        length = reader.unpack(_LENGTH)
        payload = b"" if length == _NULL_LENGTH else reader.take(length)
        return Packet(DataType.MESSAGE, message=payload.decode("utf-8"))

    count = reader.unpack(_LENGTH)
    values = tuple(reader.unpack(_DOUBLE) for _ in range(count))
    return Packet(DataType.VECTOR, values=values)