"""Signed variable-length integers.

Zigzag-mapped LEB128: 7 bits per byte, least significant group first, high
bit set on every byte except the last. Values are limited to signed 64 bits,
so an encoding is at most 10 bytes long.
"""

from typing import Tuple

from ..core.exceptions.tokens import DeserializeError

MAX_VARINT_LENGTH = 10
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _zigzag_encode(value: int) -> int:
    return (value << 1) ^ (value >> 63)


def _zigzag_decode(value: int) -> int:
    return (value >> 1) ^ -(value & 1)


def encode_varint(value: int) -> bytes:
    """Encode a signed 64-bit integer as a zigzag varint."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"varint value must be int, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"varint value out of signed 64-bit range: {value}")
    
    unsigned = _zigzag_encode(value) & 0xFFFFFFFFFFFFFFFF
    out = bytearray()
    while unsigned >= 0x80:
        out.append((unsigned & 0x7F) | 0x80)
        unsigned >>= 7
    out.append(unsigned)
    return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Decode a zigzag varint starting at `offset`.
    
    Args:
        data: Buffer holding the encoding
        offset: Position of the first varint byte
        
    Returns:
        Tuple of (value, number of bytes consumed)
        
    Raises:
        DeserializeError: If the varint is missing, unterminated or overflows 64 bits
    """
    if offset < 0 or offset >= len(data):
        raise DeserializeError(
            "Varint missing",
            details={"offset": offset, "length": len(data)},
        )
    
    unsigned = 0
    shift = 0
    for index in range(MAX_VARINT_LENGTH):
        position = offset + index
        if position >= len(data):
            raise DeserializeError("Varint truncated", details={"offset": offset})
        byte = data[position]
        if index == MAX_VARINT_LENGTH - 1 and byte > 1:
            raise DeserializeError("Varint overflows 64 bits", details={"offset": offset})
        unsigned |= (byte & 0x7F) << shift
        if byte < 0x80:
            return _zigzag_decode(unsigned), index + 1
        shift += 7
    
    raise DeserializeError("Varint overflows 64 bits", details={"offset": offset})


__all__ = ["MAX_VARINT_LENGTH", "INT64_MIN", "INT64_MAX", "encode_varint", "decode_varint"]
