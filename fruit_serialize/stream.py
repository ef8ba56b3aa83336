"""
Implementation of the fruitchain stream codec.

Encoders return ``bytes``; decoders read from a ByteReader and either
return a complete value or raise a MalformedEncodingError subclass.
Integers are little-endian and fixed width, variable-length data is
prefixed with a compact-size count.
"""

from enum import IntFlag
from typing import Any, Callable, List, Optional, Sequence, TypeVar
import logging
import struct
from .errors import (
    MalformedEncodingError,
    TruncatedStreamError,
    InvalidLengthPrefixError,
    TrailingDataError
)
from .hashing import DIGEST_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROTOCOL_VERSION = 70012

# Largest length a compact-size prefix may announce
MAX_SIZE = 0x02000000

class SerType(IntFlag):
    """Serialization target. GETHASH drops fields that are not committed to."""
    NETWORK = 1 << 0
    DISK = 1 << 1
    GETHASH = 1 << 2

class ByteReader:
    """
    Bounded reader over an in-memory encoding.

    Attributes:
        offset (int): Number of bytes consumed so far
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def read(self, size: int) -> bytes:
        """
        Consume exactly ``size`` bytes.

        Raises:
            TruncatedStreamError: If fewer than ``size`` bytes remain
        """
        if size > self.remaining:
            raise TruncatedStreamError(
                f"Expected {size} bytes, only {self.remaining} available",
                self.offset
            )
        chunk = self._data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def finish(self) -> None:
        """
        Assert the whole input was consumed.

        Raises:
            TrailingDataError: If unread bytes remain
        """
        if self.remaining:
            raise TrailingDataError(
                f"{self.remaining} unexpected trailing bytes",
                self.offset
            )

def decode_exact(data: bytes, decoder: Callable[[ByteReader], T]) -> T:
    """
    Decode one value that must span ``data`` completely.

    Args:
        data: Encoded bytes
        decoder: Callable reading one value from a ByteReader

    Returns:
        The decoded value

    Raises:
        MalformedEncodingError: On truncation, a bad prefix or trailing bytes
    """
    reader = ByteReader(data)
    try:
        value = decoder(reader)
        reader.finish()
    except MalformedEncodingError as e:
        logger.debug("Rejected %d-byte encoding: %s", len(data), e)
        raise
    return value

def _pack(fmt: str, value: int) -> bytes:
    try:
        return struct.pack(fmt, value)
    except struct.error as e:
        raise ValueError(f"Cannot encode {value!r} as {fmt}: {e}")

def _unpack(fmt: str, f: ByteReader) -> int:
    return struct.unpack(fmt, f.read(struct.calcsize(fmt)))[0]

def ser_int32(value: int) -> bytes:
    return _pack("<i", value)

def deser_int32(f: ByteReader) -> int:
    return _unpack("<i", f)

def ser_uint32(value: int) -> bytes:
    return _pack("<I", value)

def deser_uint32(f: ByteReader) -> int:
    return _unpack("<I", f)

def ser_uint8(value: int) -> bytes:
    return _pack("<B", value)

def deser_uint8(f: ByteReader) -> int:
    return _unpack("<B", f)

def ser_int64(value: int) -> bytes:
    return _pack("<q", value)

def deser_int64(f: ByteReader) -> int:
    return _unpack("<q", f)

def ser_compact_size(size: int) -> bytes:
    """
    Encode a length as 1, 3, 5 or 9 bytes.

    Raises:
        ValueError: If ``size`` is negative or wider than 64 bits
    """
    if size < 0:
        raise ValueError(f"Compact size cannot be negative: {size}")
    if size < 253:
        return _pack("<B", size)
    if size <= 0xffff:
        return b"\xfd" + _pack("<H", size)
    if size <= 0xffffffff:
        return b"\xfe" + _pack("<I", size)
    return b"\xff" + _pack("<Q", size)

def deser_compact_size(f: ByteReader) -> int:
    """
    Decode a compact-size prefix.

    Args:
        f: Reader positioned at the prefix

    Returns:
        int: Decoded length

    Raises:
        InvalidLengthPrefixError: If the prefix is not in its shortest form
            or announces more than MAX_SIZE
        TruncatedStreamError: If the prefix itself is cut short
    """
    start = f.offset
    marker = _unpack("<B", f)
    if marker < 253:
        size = marker
        minimum = 0
    elif marker == 253:
        size = _unpack("<H", f)
        minimum = 253
    elif marker == 254:
        size = _unpack("<I", f)
        minimum = 0x10000
    else:
        size = _unpack("<Q", f)
        minimum = 0x100000000

    if size < minimum:
        raise InvalidLengthPrefixError("Non-canonical compact size", start)
    if size > MAX_SIZE:
        raise InvalidLengthPrefixError(
            f"Compact size {size} exceeds maximum {MAX_SIZE}",
            start
        )
    return size

def ser_uint256(digest: bytes) -> bytes:
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    return bytes(digest)

def deser_uint256(f: ByteReader) -> bytes:
    return f.read(DIGEST_SIZE)

def ser_string(data: bytes) -> bytes:
    return ser_compact_size(len(data)) + bytes(data)

def deser_string(f: ByteReader) -> bytes:
    return f.read(deser_compact_size(f))

def ser_vector(items: Sequence[Any], ser_function_name: Optional[str] = None) -> bytes:
    """
    Encode a count followed by each item's own encoding.

    Args:
        items: Objects exposing ``serialize()``
        ser_function_name: Alternate bound method to encode each item with
    """
    r = ser_compact_size(len(items))
    for item in items:
        if ser_function_name:
            r += getattr(item, ser_function_name)()
        else:
            r += item.serialize()
    return r

def deser_vector(f: ByteReader, decoder: Callable[[ByteReader], T]) -> List[T]:
    count = deser_compact_size(f)
    return [decoder(f) for _ in range(count)]

def ser_uint256_vector(digests: Sequence[bytes]) -> bytes:
    r = ser_compact_size(len(digests))
    for digest in digests:
        r += ser_uint256(digest)
    return r

def deser_uint256_vector(f: ByteReader) -> List[bytes]:
    return deser_vector(f, deser_uint256)

def ser_string_vector(items: Sequence[bytes]) -> bytes:
    r = ser_compact_size(len(items))
    for item in items:
        r += ser_string(item)
    return r

def deser_string_vector(f: ByteReader) -> List[bytes]:
    return deser_vector(f, deser_string)
