"""
Digest primitive for fruitchain.

All consensus digests are double SHA-256 over the canonical byte encoding
and are 32 bytes long. They are stored in serialization byte order and
shown byte-reversed, the way block explorers print them.
"""

import hashlib

DIGEST_SIZE = 32
ZERO_HASH = bytes(DIGEST_SIZE)

def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()

def hash256(data: bytes) -> bytes:
    """
    Double SHA-256 digest.

    Args:
        data: Bytes to digest

    Returns:
        bytes: 32-byte digest in serialization order
    """
    return sha256(sha256(data))

def hash_to_hex(digest: bytes) -> str:
    """Display form of a digest (byte-reversed hex)."""
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    return digest[::-1].hex()

def hex_to_hash(value: str) -> bytes:
    """
    Parse the display form of a digest back into serialization order.

    Raises:
        ValueError: If the string is not 64 hex characters
    """
    raw = bytes.fromhex(value)
    if len(raw) != DIGEST_SIZE:
        raise ValueError(f"Digest hex must be {DIGEST_SIZE * 2} characters")
    return raw[::-1]
