"""
Implementation of the Transaction class for fruitchain.

Only the byte encoding lives here: a block needs its transactions' exact
serialized form to compute weight, merkle root and its own wire encoding.
Scripts are opaque byte strings and amounts are not range-checked.
"""

from typing import List, Optional
from fruit_serialize.errors import MalformedEncodingError
from fruit_serialize.hashing import ZERO_HASH, hash256, hash_to_hex
from fruit_serialize.stream import (
    ByteReader,
    decode_exact,
    ser_int32, deser_int32,
    ser_uint32, deser_uint32,
    ser_int64, deser_int64,
    ser_uint8, deser_uint8,
    ser_uint256, deser_uint256,
    ser_string, deser_string,
    ser_string_vector, deser_string_vector,
    ser_vector, deser_vector
)

SEQUENCE_FINAL = 0xffffffff
NULL_INDEX = 0xffffffff

class OutPoint:
    """
    Reference to an output of an earlier transaction.

    Attributes:
        hash (bytes): Txid of the funding transaction
        n (int): Output index within it
    """

    def __init__(self, hash: bytes = ZERO_HASH, n: int = NULL_INDEX):
        self.hash = hash
        self.n = n

    def is_null(self) -> bool:
        return self.hash == ZERO_HASH and self.n == NULL_INDEX

    def serialize(self) -> bytes:
        return ser_uint256(self.hash) + ser_uint32(self.n)

    @classmethod
    def deserialize(cls, f: ByteReader) -> 'OutPoint':
        return cls(hash=deser_uint256(f), n=deser_uint32(f))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutPoint):
            return NotImplemented
        return self.hash == other.hash and self.n == other.n

    def __repr__(self) -> str:
        return f"OutPoint({hash_to_hex(self.hash)[:10]}, {self.n})"

class TxIn:
    """
    A transaction input.

    Attributes:
        prevout (OutPoint): Output being spent
        script_sig (bytes): Unlocking script
        sequence (int): Sequence number
        witness (List[bytes]): Segregated witness stack, empty if none
    """

    def __init__(
        self,
        prevout: Optional[OutPoint] = None,
        script_sig: bytes = b"",
        sequence: int = SEQUENCE_FINAL,
        witness: Optional[List[bytes]] = None
    ):
        self.prevout = prevout if prevout is not None else OutPoint()
        self.script_sig = script_sig
        self.sequence = sequence
        self.witness = list(witness) if witness else []

    def serialize(self) -> bytes:
        """Encode without the witness stack, which travels separately."""
        return (
            self.prevout.serialize()
            + ser_string(self.script_sig)
            + ser_uint32(self.sequence)
        )

    @classmethod
    def deserialize(cls, f: ByteReader) -> 'TxIn':
        prevout = OutPoint.deserialize(f)
        script_sig = deser_string(f)
        sequence = deser_uint32(f)
        return cls(prevout=prevout, script_sig=script_sig, sequence=sequence)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TxIn):
            return NotImplemented
        return (self.prevout == other.prevout
                and self.script_sig == other.script_sig
                and self.sequence == other.sequence
                and self.witness == other.witness)

    def __repr__(self) -> str:
        return (f"TxIn(prevout={self.prevout!r}, script_sig={self.script_sig.hex()}, "
                f"sequence={self.sequence})")

class TxOut:
    """
    A transaction output.

    Attributes:
        value (int): Amount in base units
        script_pubkey (bytes): Locking script
    """

    def __init__(self, value: int = 0, script_pubkey: bytes = b""):
        self.value = value
        self.script_pubkey = script_pubkey

    def serialize(self) -> bytes:
        return ser_int64(self.value) + ser_string(self.script_pubkey)

    @classmethod
    def deserialize(cls, f: ByteReader) -> 'TxOut':
        return cls(value=deser_int64(f), script_pubkey=deser_string(f))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TxOut):
            return NotImplemented
        return self.value == other.value and self.script_pubkey == other.script_pubkey

    def __repr__(self) -> str:
        return f"TxOut(value={self.value}, script_pubkey={self.script_pubkey.hex()})"

class Transaction:
    """
    A transaction as carried inside a block.

    Attributes:
        version (int): Transaction format version
        vin (List[TxIn]): Inputs
        vout (List[TxOut]): Outputs
        lock_time (int): Earliest time or height the transaction is final
    """

    def __init__(
        self,
        vin: Optional[List[TxIn]] = None,
        vout: Optional[List[TxOut]] = None,
        version: int = 1,
        lock_time: int = 0
    ):
        self.version = version
        self.vin = list(vin) if vin else []
        self.vout = list(vout) if vout else []
        self.lock_time = lock_time

    def has_witness(self) -> bool:
        return any(txin.witness for txin in self.vin)

    def serialize(self, with_witness: bool = True) -> bytes:
        """
        Encode the transaction.

        Args:
            with_witness: Use the extended format when any input has a
                witness stack. Ignored for transactions without witnesses.

        Returns:
            bytes: Canonical encoding
        """
        extended = with_witness and self.has_witness()
        r = ser_int32(self.version)
        if extended:
            # Empty input vector marker followed by the flags byte
            r += ser_uint8(0) + ser_uint8(1)
        r += ser_vector(self.vin)
        r += ser_vector(self.vout)
        if extended:
            for txin in self.vin:
                r += ser_string_vector(txin.witness)
        r += ser_uint32(self.lock_time)
        return r

    def serialize_without_witness(self) -> bytes:
        return self.serialize(with_witness=False)

    @classmethod
    def deserialize(cls, f: ByteReader) -> 'Transaction':
        """
        Decode either the legacy or the extended encoding.

        Raises:
            MalformedEncodingError: On truncation, bad prefixes, an unknown
                flags byte or a witness section with no witness data
        """
        version = deser_int32(f)
        flags = 0
        flags_offset = f.offset
        vin = deser_vector(f, TxIn.deserialize)
        vout: List[TxOut] = []
        if not vin:
            flags_offset = f.offset
            flags = deser_uint8(f)
            if flags:
                vin = deser_vector(f, TxIn.deserialize)
                vout = deser_vector(f, TxOut.deserialize)
        else:
            vout = deser_vector(f, TxOut.deserialize)

        if flags & 1:
            flags ^= 1
            for txin in vin:
                txin.witness = deser_string_vector(f)
            if not any(txin.witness for txin in vin):
                raise MalformedEncodingError("Superfluous witness record", f.offset)
        if flags:
            raise MalformedEncodingError("Unknown transaction optional data", flags_offset)

        lock_time = deser_uint32(f)
        return cls(vin=vin, vout=vout, version=version, lock_time=lock_time)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Transaction':
        return decode_exact(data, cls.deserialize)

    def get_txid(self) -> bytes:
        """Digest of the encoding without witness data."""
        return hash256(self.serialize(with_witness=False))

    def get_wtxid(self) -> bytes:
        return hash256(self.serialize(with_witness=True))

    def is_coinbase(self) -> bool:
        return len(self.vin) == 1 and self.vin[0].prevout.is_null()

    def describe(self) -> str:
        return (f"Transaction(txid={hash_to_hex(self.get_txid())[:10]}, ver={self.version}, "
                f"vin.size={len(self.vin)}, vout.size={len(self.vout)}, "
                f"nLockTime={self.lock_time})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        return (f"Transaction(version={self.version}, vin={self.vin!r}, "
                f"vout={self.vout!r}, lock_time={self.lock_time})")
