"""
Implementation of the Block class for fruitchain.

A block is a header plus an ordered transaction vector and an ordered
vector of fruits (auxiliary headers). The header is held by value and
its fields are reachable directly on the block. The fruits are folded
into one digest that the header commits to in ``fruits_hash``.
"""

from typing import Any, Dict, List, Optional
import logging
import threading
from fruit_serialize.hashing import ZERO_HASH, hash256, hash_to_hex
from fruit_serialize.stream import ByteReader, decode_exact, ser_vector, deser_vector
from fruit_transaction.transaction import Transaction
from .header import BlockHeader
from .merkle import block_merkle_root

logger = logging.getLogger(__name__)

# fruits_digest() of a block without fruits
EMPTY_FRUITS_HASH = ZERO_HASH

class ValidationFlag:
    """
    Memory-only marker that a block already passed its contextual checks.

    Single writer (the validation logic). The lock makes each read and
    write atomic; it does not order a check against a later write, which
    stays the caller's concern.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value = False

    def set(self) -> None:
        with self._lock:
            self._value = True

    def clear(self) -> None:
        with self._lock:
            self._value = False

    def is_set(self) -> bool:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"ValidationFlag({self.is_set()})"

def _header_field(name: str) -> property:
    def getter(self):
        return getattr(self.header, name)

    def setter(self, value):
        setattr(self.header, name, value)

    return property(getter, setter, doc=f"Delegates to ``header.{name}``.")

class Block:
    """
    A block in the fruitchain.

    Attributes:
        header (BlockHeader): The block's own header
        vtx (List[Transaction]): Transactions, in block order
        vfrt (List[BlockHeader]): Fruits, in block order
        checked (ValidationFlag): Memory-only validation cache; never
            serialized, hashed or compared
    """

    version = _header_field("version")
    prev_block_hash = _header_field("prev_block_hash")
    prev_episode_hash = _header_field("prev_episode_hash")
    merkle_root = _header_field("merkle_root")
    fruits_hash = _header_field("fruits_hash")
    time = _header_field("time")
    bits = _header_field("bits")
    nonce = _header_field("nonce")
    creator_script = _header_field("creator_script")
    tax = _header_field("tax")

    def __init__(
        self,
        header: Optional[BlockHeader] = None,
        vtx: Optional[List[Transaction]] = None,
        vfrt: Optional[List[BlockHeader]] = None
    ):
        """
        Initialize a block.

        Args:
            header: Header to copy in; a null header when omitted
            vtx: Transactions
            vfrt: Fruit headers
        """
        self.header = header.copy() if header is not None else BlockHeader()
        self.vtx: List[Transaction] = list(vtx) if vtx else []
        self.vfrt: List[BlockHeader] = list(vfrt) if vfrt else []
        self.checked = ValidationFlag()

    def reset(self) -> None:
        self.header.reset()
        self.vtx.clear()
        self.vfrt.clear()
        self.checked.clear()

    def is_null(self) -> bool:
        return self.header.is_null()

    def header_view(self) -> BlockHeader:
        """
        Return an independent copy of the nine header fields.

        Later changes to this block, its header or its vectors do not
        show through the returned value.
        """
        return BlockHeader(
            version=self.header.version,
            prev_block_hash=self.header.prev_block_hash,
            prev_episode_hash=self.header.prev_episode_hash,
            merkle_root=self.header.merkle_root,
            fruits_hash=self.header.fruits_hash,
            time=self.header.time,
            bits=self.header.bits,
            nonce=self.header.nonce,
            creator_script=bytes(self.header.creator_script),
            tax=self.header.tax
        )

    def get_hash(self) -> bytes:
        return self.header.get_hash()

    def block_time(self) -> int:
        return self.header.block_time()

    def fruits_digest(self) -> bytes:
        """
        Fold the fruits into one digest.

        Starting from the zero digest, each fruit's hash is appended to
        the running value and the pair is hashed again. The result
        depends on fruit order.

        Returns:
            bytes: Aggregate digest, EMPTY_FRUITS_HASH when there are no fruits
        """
        digest = ZERO_HASH
        for fruit in self.vfrt:
            digest = hash256(digest + fruit.get_hash())
        return digest

    def has_valid_fruits_hash(self) -> bool:
        """Check the header's fruits commitment against the fruits carried."""
        computed = self.fruits_digest()
        if computed != self.header.fruits_hash:
            logger.warning(
                "Block %s commits to fruits %s but carries %d fruits hashing to %s",
                hash_to_hex(self.get_hash()),
                hash_to_hex(self.header.fruits_hash),
                len(self.vfrt),
                hash_to_hex(computed)
            )
            return False
        return True

    def update_fruits_hash(self) -> None:
        """Commit the header to the current fruit vector."""
        self.header.fruits_hash = self.fruits_digest()

    def update_merkle_root(self) -> bool:
        """
        Commit the header to the current transaction vector.

        Returns:
            bool: True if the transaction list has a duplicate-pair
                mutation (the root is set either way)
        """
        root, mutated = block_merkle_root(self)
        self.header.merkle_root = root
        if mutated:
            logger.debug("Merkle tree of %d transactions is mutated", len(self.vtx))
        return mutated

    def serialize(self, with_witness: bool = True) -> bytes:
        """
        Wire/disk encoding: header, transaction vector, fruit vector.

        Args:
            with_witness: Encode transactions with their witness data
        """
        r = self.header.serialize()
        if with_witness:
            r += ser_vector(self.vtx)
        else:
            r += ser_vector(self.vtx, "serialize_without_witness")
        r += ser_vector(self.vfrt)
        return r

    @classmethod
    def deserialize(cls, f: ByteReader) -> 'Block':
        header = BlockHeader.deserialize(f)
        vtx = deser_vector(f, Transaction.deserialize)
        vfrt = deser_vector(f, BlockHeader.deserialize)
        block = cls(header=header)
        block.vtx = vtx
        block.vfrt = vfrt
        return block

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Block':
        """Decode a block that must span ``data`` exactly."""
        return decode_exact(data, cls.deserialize)

    def describe(self) -> str:
        s = (
            "Block(hash=%s, ver=0x%08x, hashPrevBlock=%s, hashPrevEpisode=%s, "
            "hashMerkleRoot=%s, hashFruits=%s, nTime=%u, nBits=%08x, nNonce=%u, "
            "scriptPubKey=%s, nTax=%u, vtx=%u, vfrt=%u)\n"
            % (
                hash_to_hex(self.get_hash()),
                self.version & 0xffffffff,
                hash_to_hex(self.prev_block_hash),
                hash_to_hex(self.prev_episode_hash),
                hash_to_hex(self.merkle_root),
                hash_to_hex(self.fruits_hash),
                self.time, self.bits, self.nonce,
                bytes(self.creator_script).hex(), self.tax,
                len(self.vtx), len(self.vfrt)
            )
        )
        for tx in self.vtx:
            s += "  " + tx.describe() + "\n"
        for fruit in self.vfrt:
            s += "  " + fruit.describe()
        return s

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for diagnostics."""
        return {
            "header": self.header.to_dict(),
            "tx": [
                {"txid": hash_to_hex(tx.get_txid()), "hex": tx.serialize().hex()}
                for tx in self.vtx
            ],
            "fruits": [fruit.to_dict() for fruit in self.vfrt],
            "fruits_digest": hash_to_hex(self.fruits_digest())
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return (self.header == other.header
                and self.vtx == other.vtx
                and self.vfrt == other.vfrt)

    def __repr__(self) -> str:
        return (f"Block(header={self.header!r}, vtx={len(self.vtx)}, "
                f"vfrt={len(self.vfrt)})")
