"""
Tests for the fruitchain digest primitive.
"""

import pytest
from fruit_serialize.hashing import ZERO_HASH, hash256, hash_to_hex, hex_to_hash

def test_hash256_known_values():
    """Test double SHA-256 against well-known digests."""
    assert hash256(b"").hex() == (
        "5df6e0e2761359d30a8275058e299fcc0381534545f55cf43e41983f5d4c9456"
    )
    assert hash256(b"hello").hex() == (
        "9595c9df90075148eb06860365df33584b75bff782a510c6cd4883a419833d50"
    )

def test_zero_hash():
    """Test the zero digest sentinel."""
    assert ZERO_HASH == b"\x00" * 32
    assert hash_to_hex(ZERO_HASH) == "0" * 64

def test_display_order():
    """Test that display hex is byte-reversed."""
    digest = bytes(range(32))
    display = hash_to_hex(digest)
    assert display.startswith("1f1e1d")
    assert display.endswith("020100")
    assert hex_to_hash(display) == digest

def test_bad_digest_lengths():
    """Test rejection of wrong-sized digests."""
    with pytest.raises(ValueError):
        hash_to_hex(b"\x00" * 31)
    with pytest.raises(ValueError):
        hex_to_hash("00" * 33)
    with pytest.raises(ValueError):
        hex_to_hash("zz" * 32)
