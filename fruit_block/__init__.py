"""
Fruitchain - Block Module

This module implements the consensus-critical block structures: the block
header and its canonical encoding, blocks carrying transactions and
fruits, the fruit-hash fold, chain locators and block weight.
"""

from .header import BlockHeader
from .block import Block, ValidationFlag, EMPTY_FRUITS_HASH
from .locator import BlockLocator
from .weight import get_block_weight, weight_from_sizes

__all__ = [
    'BlockHeader',
    'Block',
    'ValidationFlag',
    'EMPTY_FRUITS_HASH',
    'BlockLocator',
    'get_block_weight',
    'weight_from_sizes'
]
