"""
Tests for merkle root computation.
"""

from fruit_serialize.hashing import ZERO_HASH, hash256
from fruit_block.merkle import compute_merkle_root, hash_pair

A = b"\x0a" * 32
B = b"\x0b" * 32
C = b"\x0c" * 32

def test_empty():
    assert compute_merkle_root([]) == (ZERO_HASH, False)

def test_single_leaf():
    """Test that a single leaf becomes the root."""
    assert compute_merkle_root([A]) == (A, False)

def test_pair():
    root, mutated = compute_merkle_root([A, B])
    assert root == hash256(A + B)
    assert root == hash_pair(A, B)
    assert not mutated

def test_odd_leaf_is_duplicated():
    """Test that the last node of an odd level is paired with itself."""
    root, mutated = compute_merkle_root([A, B, C])
    assert root == hash_pair(hash_pair(A, B), hash_pair(C, C))
    assert not mutated

def test_mutation_detected():
    """Test that a repeated tail yields the same root but is flagged."""
    root, mutated = compute_merkle_root([A, B, C])
    root2, mutated2 = compute_merkle_root([A, B, C, C])
    assert root == root2
    assert not mutated
    assert mutated2

def test_input_not_modified():
    leaves = [A, B, C]
    compute_merkle_root(leaves)
    assert leaves == [A, B, C]
