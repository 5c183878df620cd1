"""
wire.py — PostgreSQL binary format for ``money``

In binary mode PostgreSQL sends and receives money as its int8 value:
exactly 8 bytes, big-endian, two's complement.

    encode(Money.from_raw(12345))  -> b"\\x00\\x00\\x00\\x00\\x00\\x00\\x30\\x39"
    decode(b"\\xff" * 8)            -> Money.from_raw(-1)
"""

from __future__ import annotations
import struct

from .core import Money
from .errors import WireFormatError

_INT8 = struct.Struct(">q")

WIRE_SIZE = _INT8.size


def encode(value: Money) -> bytes:
    """Encode Money as 8 big-endian bytes."""
    if not isinstance(value, Money):
        raise TypeError(f"Expected Money, got {type(value).__name__}")
    return _INT8.pack(value.raw)


def decode(buf: bytes | bytearray | memoryview) -> Money:
    """Decode 8 big-endian bytes into Money. Any other length is an error."""
    if len(buf) != WIRE_SIZE:
        raise WireFormatError(
            f"money wire value must be {WIRE_SIZE} bytes, got {len(buf)}"
        )
    (raw,) = _INT8.unpack(buf)
    return Money.from_raw(raw)
