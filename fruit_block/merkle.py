"""
Merkle root computation for fruitchain blocks.

Builds the transaction commitment stored in a header's ``merkle_root``: a
binary tree of double SHA-256 digests where an odd node at any level is
paired with itself.
"""

from typing import List, Sequence, Tuple
from fruit_serialize.hashing import ZERO_HASH, hash256

def hash_pair(left: bytes, right: bytes) -> bytes:
    """
    Hash two child digests to create the parent digest.

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        bytes: Parent digest
    """
    return hash256(left + right)

def compute_merkle_root(hashes: Sequence[bytes]) -> Tuple[bytes, bool]:
    """
    Compute a merkle root and detect duplicate-pair mutation.

    Two identical siblings at any level mean a different transaction list
    (one with the tail repeated) yields the same root, so the caller is
    told about it.

    Args:
        hashes: Leaf digests in block order

    Returns:
        Tuple of (root: bytes, mutated: bool). An empty list yields the
        zero digest.
    """
    if not hashes:
        return ZERO_HASH, False

    mutated = False
    current_level: List[bytes] = list(hashes)

    while len(current_level) > 1:
        for i in range(0, len(current_level) - 1, 2):
            if current_level[i] == current_level[i + 1]:
                mutated = True

        # If odd number of nodes, duplicate last one
        if len(current_level) % 2:
            current_level.append(current_level[-1])

        current_level = [
            hash_pair(current_level[i], current_level[i + 1])
            for i in range(0, len(current_level), 2)
        ]

    return current_level[0], mutated

def block_merkle_root(block) -> Tuple[bytes, bool]:
    """Merkle root over the txids of ``block.vtx``."""
    return compute_merkle_root([tx.get_txid() for tx in block.vtx])
