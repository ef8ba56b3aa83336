"""
Fruitchain - Serialization Module

This module implements the byte-level encoding primitives shared by every
consensus structure: fixed-width integers, compact-size prefixes, digests,
vectors, and the double SHA-256 digest applied to encoded bytes.
"""

from .errors import (
    MalformedEncodingError,
    TruncatedStreamError,
    InvalidLengthPrefixError,
    TrailingDataError
)
from .hashing import ZERO_HASH, hash256, hash_to_hex, hex_to_hash
from .stream import ByteReader, SerType, PROTOCOL_VERSION, decode_exact

__all__ = [
    'MalformedEncodingError',
    'TruncatedStreamError',
    'InvalidLengthPrefixError',
    'TrailingDataError',
    'ZERO_HASH',
    'hash256',
    'hash_to_hex',
    'hex_to_hash',
    'ByteReader',
    'SerType',
    'PROTOCOL_VERSION',
    'decode_exact'
]
