"""
Block weight for fruitchain.

Weight charges WITNESS_SCALE_FACTOR units per byte of the block encoded
without witness data and one unit per witness byte:

    weight = stripped_size * (WITNESS_SCALE_FACTOR - 1) + total_size

It is computed from serialized lengths only; nothing is hashed or checked.
"""

from .consensus import WITNESS_SCALE_FACTOR, MAX_BLOCK_WEIGHT

def weight_from_sizes(stripped_size: int, total_size: int) -> int:
    """
    Weight from the two serialized lengths of a block.

    Args:
        stripped_size: Length of the encoding without witness data
        total_size: Length of the full encoding

    Returns:
        int: Block weight

    Raises:
        ValueError: If a size is negative or the stripped size exceeds the total
    """
    if stripped_size < 0 or total_size < 0:
        raise ValueError("Serialized sizes must be non-negative")
    if stripped_size > total_size:
        raise ValueError(
            f"Stripped size ({stripped_size}) exceeds total size ({total_size})"
        )
    return stripped_size * (WITNESS_SCALE_FACTOR - 1) + total_size

def get_block_weight(block) -> int:
    stripped_size = len(block.serialize(with_witness=False))
    total_size = len(block.serialize(with_witness=True))
    return weight_from_sizes(stripped_size, total_size)

def get_virtual_size(block) -> int:
    """Weight expressed in stripped-equivalent bytes, rounded up."""
    weight = get_block_weight(block)
    return (weight + WITNESS_SCALE_FACTOR - 1) // WITNESS_SCALE_FACTOR

def is_within_weight_limit(block, max_weight: int = MAX_BLOCK_WEIGHT) -> bool:
    return get_block_weight(block) <= max_weight
