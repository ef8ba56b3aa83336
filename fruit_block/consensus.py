"""
Consensus constants for fruitchain blocks.
"""

# Weight units charged per byte of non-witness data vs. witness data
WITNESS_SCALE_FACTOR = 4

# Maximum block weight accepted by the network
MAX_BLOCK_WEIGHT = 4000000

# Maximum number of entries a peer should put in a locator
MAX_LOCATOR_SZ = 101
