"""
Implementation of the BlockLocator class for fruitchain.

A locator describes a place in the block chain to another node so that,
if the other node does not have the same branch, it can find a recent
common trunk. Hashes run from the tip backwards with growing gaps.
"""

from typing import List, Optional
from fruit_serialize.hashing import hash256, hash_to_hex
from fruit_serialize.stream import (
    ByteReader,
    SerType,
    PROTOCOL_VERSION,
    decode_exact,
    ser_int32, deser_int32,
    ser_uint256_vector, deser_uint256_vector
)

class BlockLocator:
    """
    Sparse list of ancestor block hashes, most recent first.

    The wire and disk encodings carry a version field ahead of the hashes;
    the hashing encoding does not. Every encode and decode call names the
    mode explicitly.

    Attributes:
        have (List[bytes]): Block hashes
        version (Optional[int]): Version read from a wire/disk encoding,
            reused when re-encoding; None for locally built locators
    """

    def __init__(self, have: Optional[List[bytes]] = None):
        self.have: List[bytes] = list(have) if have else []
        self.version: Optional[int] = None

    def reset(self) -> None:
        self.have.clear()
        self.version = None

    def is_null(self) -> bool:
        return not self.have

    def serialize(self, ser_type: SerType, version: Optional[int] = None) -> bytes:
        """
        Encode the locator.

        Args:
            ser_type: Target encoding. With SerType.GETHASH set no version
                field is written.
            version: Version field for wire/disk output. Defaults to the
                decoded version, then to PROTOCOL_VERSION.

        Returns:
            bytes: Encoded locator
        """
        r = b""
        if not ser_type & SerType.GETHASH:
            if version is None:
                version = self.version if self.version is not None else PROTOCOL_VERSION
            r += ser_int32(version)
        r += ser_uint256_vector(self.have)
        return r

    @classmethod
    def deserialize(cls, f: ByteReader, ser_type: SerType) -> 'BlockLocator':
        version = None
        if not ser_type & SerType.GETHASH:
            version = deser_int32(f)
        locator = cls(deser_uint256_vector(f))
        locator.version = version
        return locator

    @classmethod
    def from_bytes(cls, data: bytes, ser_type: SerType) -> 'BlockLocator':
        return decode_exact(data, lambda f: cls.deserialize(f, ser_type))

    def get_hash(self) -> bytes:
        """Digest of the hashing encoding (no version field)."""
        return hash256(self.serialize(SerType.GETHASH))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockLocator):
            return NotImplemented
        return self.have == other.have

    def __repr__(self) -> str:
        return f"BlockLocator(have={[hash_to_hex(h) for h in self.have]})"
