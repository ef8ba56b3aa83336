"""
Tests for the fruitchain stream codec.
"""

import pytest
from fruit_serialize.errors import (
    MalformedEncodingError,
    TruncatedStreamError,
    InvalidLengthPrefixError,
    TrailingDataError
)
from fruit_serialize.stream import (
    ByteReader,
    SerType,
    MAX_SIZE,
    decode_exact,
    ser_compact_size, deser_compact_size,
    ser_int32, deser_int32,
    ser_uint32, deser_uint32,
    ser_uint8,
    ser_int64, deser_int64,
    ser_uint256, deser_uint256,
    ser_string, deser_string,
    ser_uint256_vector, deser_uint256_vector,
    ser_string_vector, deser_string_vector
)

@pytest.mark.parametrize("size,encoded", [
    (0, "00"),
    (252, "fc"),
    (253, "fdfd00"),
    (0xffff, "fdffff"),
    (0x10000, "fe00000100"),
    (0xffffffff, "feffffffff"),
    (0x100000000, "ff0000000001000000"),
])
def test_compact_size_forms(size, encoded):
    """Test each compact-size width boundary."""
    assert ser_compact_size(size).hex() == encoded

def test_compact_size_decode():
    """Test decoding sizes within MAX_SIZE."""
    assert decode_exact(bytes.fromhex("fc"), deser_compact_size) == 252
    assert decode_exact(bytes.fromhex("fdfd00"), deser_compact_size) == 253
    assert decode_exact(ser_compact_size(MAX_SIZE), deser_compact_size) == MAX_SIZE

def test_compact_size_rejects_negative():
    """Test that negative sizes cannot be encoded."""
    with pytest.raises(ValueError):
        ser_compact_size(-1)

@pytest.mark.parametrize("encoded", [
    "fd0000",              # 0 in the 3-byte form
    "fdfc00",              # 252 in the 3-byte form
    "feffff0000",          # 0xffff in the 5-byte form
    "ffffffffff00000000",  # 0xffffffff in the 9-byte form
])
def test_non_canonical_compact_size(encoded):
    """Test that longer-than-needed prefixes are rejected."""
    with pytest.raises(InvalidLengthPrefixError):
        decode_exact(bytes.fromhex(encoded), deser_compact_size)

def test_compact_size_above_max():
    """Test the MAX_SIZE range check."""
    data = ser_compact_size(MAX_SIZE + 1)
    with pytest.raises(InvalidLengthPrefixError):
        decode_exact(data, deser_compact_size)

def test_truncated_prefix():
    """Test a compact-size prefix cut short."""
    with pytest.raises(TruncatedStreamError):
        decode_exact(bytes.fromhex("fd01"), deser_compact_size)

def test_fixed_width_integers():
    """Test little-endian fixed-width encoding."""
    assert ser_int32(1).hex() == "01000000"
    assert ser_int32(-1).hex() == "ffffffff"
    assert ser_uint32(0x12345678).hex() == "78563412"
    assert ser_uint8(255).hex() == "ff"
    assert ser_int64(-2).hex() == "feffffffffffffff"

    assert decode_exact(bytes.fromhex("ffffffff"), deser_int32) == -1
    assert decode_exact(bytes.fromhex("ffffffff"), deser_uint32) == 0xffffffff
    assert decode_exact(bytes.fromhex("feffffffffffffff"), deser_int64) == -2

@pytest.mark.parametrize("encoder,value", [
    (ser_uint32, -1),
    (ser_uint32, 2**32),
    (ser_int32, 2**31),
    (ser_uint8, 256),
])
def test_out_of_range_integers(encoder, value):
    """Test that values wider than their field are refused."""
    with pytest.raises(ValueError):
        encoder(value)

def test_uint256():
    """Test raw 32-byte digest encoding."""
    digest = bytes(range(32))
    assert ser_uint256(digest) == digest
    assert decode_exact(digest, deser_uint256) == digest

    with pytest.raises(ValueError):
        ser_uint256(b"\x00" * 31)

def test_string():
    """Test length-prefixed byte strings."""
    assert ser_string(b"").hex() == "00"
    assert ser_string(b"\xab\xcd").hex() == "02abcd"
    assert decode_exact(bytes.fromhex("02abcd"), deser_string) == b"\xab\xcd"

    # Announced length longer than the data
    with pytest.raises(TruncatedStreamError):
        decode_exact(bytes.fromhex("03abcd"), deser_string)

def test_vectors():
    """Test digest and string vectors."""
    digests = [b"\x11" * 32, b"\x22" * 32]
    encoded = ser_uint256_vector(digests)
    assert encoded[0] == 2
    assert len(encoded) == 1 + 64
    assert decode_exact(encoded, deser_uint256_vector) == digests

    items = [b"", b"\x01", b"\x02\x03"]
    assert decode_exact(ser_string_vector(items), deser_string_vector) == items

def test_byte_reader():
    """Test reader bookkeeping and failure modes."""
    reader = ByteReader(b"\x01\x02\x03")
    assert reader.remaining == 3
    assert reader.read(2) == b"\x01\x02"
    assert reader.offset == 2

    with pytest.raises(TrailingDataError) as excinfo:
        reader.finish()
    assert excinfo.value.offset == 2

    with pytest.raises(TruncatedStreamError):
        reader.read(2)

    reader.read(1)
    reader.finish()

def test_errors_are_value_errors():
    """Test the decode error hierarchy."""
    for cls in (TruncatedStreamError, InvalidLengthPrefixError, TrailingDataError):
        assert issubclass(cls, MalformedEncodingError)
    assert issubclass(MalformedEncodingError, ValueError)

def test_trailing_data():
    """Test that decode_exact refuses leftover bytes."""
    with pytest.raises(TrailingDataError):
        decode_exact(bytes.fromhex("0100000000"), deser_int32)

def test_ser_type_flags():
    """Test that serialization targets combine as flags."""
    mode = SerType.NETWORK | SerType.GETHASH
    assert mode & SerType.GETHASH
    assert not SerType.DISK & SerType.GETHASH

def test_strings_respect_max_size():
    """Test that an oversized string length is refused before reading."""
    data = ser_compact_size(MAX_SIZE + 1) + b"\x00"
    with pytest.raises(InvalidLengthPrefixError):
        decode_exact(data, deser_string)
