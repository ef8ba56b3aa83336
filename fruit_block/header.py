"""
Implementation of the BlockHeader class for fruitchain.

The header is the consensus summary of a block. Its canonical encoding is
fixed: version, four digests, time, bits, nonce, the creator's script and
the tax byte, in that order. The block hash is the double SHA-256 of
exactly those bytes.
"""

from typing import Any, Dict
from fruit_serialize.hashing import ZERO_HASH, hash256, hash_to_hex, hex_to_hash
from fruit_serialize.stream import (
    ByteReader,
    decode_exact,
    ser_int32, deser_int32,
    ser_uint32, deser_uint32,
    ser_uint8, deser_uint8,
    ser_uint256, deser_uint256,
    ser_string, deser_string
)

class BlockHeader:
    """
    Header of a fruitchain block.

    Attributes:
        version (int): Rule-set tag, signed 32-bit
        prev_block_hash (bytes): Digest of the parent block
        prev_episode_hash (bytes): Digest of the parent episode
        merkle_root (bytes): Merkle root over the block's transactions
        fruits_hash (bytes): Aggregate digest over the block's fruits
        time (int): Block timestamp in seconds, unsigned 32-bit
        bits (int): Compact proof-of-work target, unsigned 32-bit
        nonce (int): Proof-of-work search value, unsigned 32-bit
        creator_script (bytes): Payout script of the block's creator
        tax (int): Fixed-point tax parameter, unsigned 8-bit
    """

    def __init__(
        self,
        version: int = 0,
        prev_block_hash: bytes = ZERO_HASH,
        prev_episode_hash: bytes = ZERO_HASH,
        merkle_root: bytes = ZERO_HASH,
        fruits_hash: bytes = ZERO_HASH,
        time: int = 0,
        bits: int = 0,
        nonce: int = 0,
        creator_script: bytes = b"",
        tax: int = 0
    ):
        self.version = version
        self.prev_block_hash = prev_block_hash
        self.prev_episode_hash = prev_episode_hash
        self.merkle_root = merkle_root
        self.fruits_hash = fruits_hash
        self.time = time
        self.bits = bits
        self.nonce = nonce
        self.creator_script = bytes(creator_script)
        self.tax = tax

    def reset(self) -> None:
        """Set every field back to its zero sentinel."""
        self.version = 0
        self.prev_block_hash = ZERO_HASH
        self.prev_episode_hash = ZERO_HASH
        self.merkle_root = ZERO_HASH
        self.fruits_hash = ZERO_HASH
        self.time = 0
        self.bits = 0
        self.nonce = 0
        self.creator_script = b""
        self.tax = 0

    def is_null(self) -> bool:
        """A header is null when it has no target, whatever its other fields hold."""
        return self.bits == 0

    def serialize(self) -> bytes:
        """
        Canonical encoding of the header.

        Returns:
            bytes: 145 fixed bytes plus the length-prefixed creator script

        Raises:
            ValueError: If a field does not fit its fixed width
        """
        r = ser_int32(self.version)
        r += ser_uint256(self.prev_block_hash)
        r += ser_uint256(self.prev_episode_hash)
        r += ser_uint256(self.merkle_root)
        r += ser_uint256(self.fruits_hash)
        r += ser_uint32(self.time)
        r += ser_uint32(self.bits)
        r += ser_uint32(self.nonce)
        r += ser_string(self.creator_script)
        r += ser_uint8(self.tax)
        return r

    @classmethod
    def deserialize(cls, f: ByteReader) -> 'BlockHeader':
        """
        Read one header from a stream.

        Raises:
            MalformedEncodingError: If the stream is short or the script
                length prefix is invalid
        """
        version = deser_int32(f)
        prev_block_hash = deser_uint256(f)
        prev_episode_hash = deser_uint256(f)
        merkle_root = deser_uint256(f)
        fruits_hash = deser_uint256(f)
        time = deser_uint32(f)
        bits = deser_uint32(f)
        nonce = deser_uint32(f)
        creator_script = deser_string(f)
        tax = deser_uint8(f)
        return cls(
            version=version,
            prev_block_hash=prev_block_hash,
            prev_episode_hash=prev_episode_hash,
            merkle_root=merkle_root,
            fruits_hash=fruits_hash,
            time=time,
            bits=bits,
            nonce=nonce,
            creator_script=creator_script,
            tax=tax
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> 'BlockHeader':
        """Decode a header that must span ``data`` exactly."""
        return decode_exact(data, cls.deserialize)

    def get_hash(self) -> bytes:
        return hash256(self.serialize())

    def block_time(self) -> int:
        return int(self.time)

    def copy(self) -> 'BlockHeader':
        return BlockHeader(**self._fields())

    def describe(self) -> str:
        return (
            "BlockHeader(hash=%s, ver=0x%08x, hashPrevBlock=%s, hashPrevEpisode=%s, "
            "hashMerkleRoot=%s, hashFruits=%s, nTime=%u, nBits=%08x, nNonce=%u, "
            "scriptPubKey=%s, nTax=%u)\n"
            % (
                hash_to_hex(self.get_hash()),
                self.version & 0xffffffff,
                hash_to_hex(self.prev_block_hash),
                hash_to_hex(self.prev_episode_hash),
                hash_to_hex(self.merkle_root),
                hash_to_hex(self.fruits_hash),
                self.time, self.bits, self.nonce,
                bytes(self.creator_script).hex(), self.tax
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with digests in display hex."""
        return {
            "hash": hash_to_hex(self.get_hash()),
            "version": self.version,
            "prev_block_hash": hash_to_hex(self.prev_block_hash),
            "prev_episode_hash": hash_to_hex(self.prev_episode_hash),
            "merkle_root": hash_to_hex(self.merkle_root),
            "fruits_hash": hash_to_hex(self.fruits_hash),
            "time": self.time,
            "bits": self.bits,
            "nonce": self.nonce,
            "creator_script": self.creator_script.hex(),
            "tax": self.tax
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BlockHeader':
        """
        Create from dictionary representation.

        The ``hash`` entry, when present, is ignored; it is always recomputed.
        """
        return cls(
            version=data["version"],
            prev_block_hash=hex_to_hash(data["prev_block_hash"]),
            prev_episode_hash=hex_to_hash(data["prev_episode_hash"]),
            merkle_root=hex_to_hash(data["merkle_root"]),
            fruits_hash=hex_to_hash(data["fruits_hash"]),
            time=data["time"],
            bits=data["bits"],
            nonce=data["nonce"],
            creator_script=bytes.fromhex(data["creator_script"]),
            tax=data["tax"]
        )

    def _fields(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "prev_block_hash": self.prev_block_hash,
            "prev_episode_hash": self.prev_episode_hash,
            "merkle_root": self.merkle_root,
            "fruits_hash": self.fruits_hash,
            "time": self.time,
            "bits": self.bits,
            "nonce": self.nonce,
            "creator_script": self.creator_script,
            "tax": self.tax
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockHeader):
            return NotImplemented
        return self._fields() == other._fields()

    def __repr__(self) -> str:
        return (f"BlockHeader(version={self.version}, "
                f"prev_block_hash={hash_to_hex(self.prev_block_hash)}, "
                f"time={self.time}, bits={self.bits:08x}, nonce={self.nonce})")
