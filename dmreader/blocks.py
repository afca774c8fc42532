"""Split an interleaved codeword stream into its Reed-Solomon blocks.

Larger symbols spread their codewords over several RS blocks, interleaved
byte by byte: all data codewords first (block 0, block 1, ..., block 0, ...),
then all EC codewords in the same round-robin order. No error correction
happens here; the blocks are handed to an external corrector as they are.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import SymbolGeometry

# 144x144 is the only size whose blocks differ in length (see ISO 16022:2006, 5.6.2)
_LONGER_BLOCKS_144 = 8


@dataclass
class DataBlock:
    num_data_codewords: int
    codewords: bytearray

    @property
    def data(self) -> bytes:
        return bytes(self.codewords[:self.num_data_codewords])

    @property
    def ec(self) -> bytes:
        return bytes(self.codewords[self.num_data_codewords:])


def get_data_blocks(codewords: bytes, geometry: SymbolGeometry) -> list[DataBlock]:
    """De-interleave codewords into per-block data + EC sequences.

    Args:
        codewords: The full codeword stream in placement order.
        geometry: Symbol geometry carrying the RS block structure.

    Returns:
        One DataBlock per RS block.

    Raises:
        ValueError: If the stream length differs from geometry.total_codewords,
            or the geometry carries no block structure.
    """
    if not geometry.ec_blocks:
        raise ValueError(f"Version {geometry.version_number} has no RS block structure")
    if len(codewords) != geometry.total_codewords:
        raise ValueError(
            f"Expected {geometry.total_codewords} codewords, got {len(codewords)}"
        )

    ec = geometry.ec_codewords_per_block
    blocks: list[DataBlock] = []
    for ec_block in geometry.ec_blocks:
        for _ in range(ec_block.count):
            blocks.append(DataBlock(
                ec_block.data_codewords,
                bytearray(ec_block.data_codewords + ec),
            ))
    num_blocks = len(blocks)

    # All blocks carry the same amount of data except, for 144x144, the last
    # two which are one codeword shorter
    longer_data = blocks[0].num_data_codewords
    shorter_data = min(b.num_data_codewords for b in blocks)
    special = any(b.num_data_codewords != longer_data for b in blocks)
    num_longer = _LONGER_BLOCKS_144 if special else num_blocks

    idx = 0
    for i in range(shorter_data):
        for block in blocks:
            block.codewords[i] = codewords[idx]
            idx += 1

    if special:
        for block in blocks[:num_longer]:
            block.codewords[longer_data - 1] = codewords[idx]
            idx += 1

    # EC codewords: for 144x144 the round-robin starts at the first shorter block
    for i in range(longer_data, longer_data + ec):
        for j in range(num_blocks):
            j_offset = (j + num_longer) % num_blocks if special else j
            i_offset = i - 1 if special and j_offset >= num_longer else i
            blocks[j_offset].codewords[i_offset] = codewords[idx]
            idx += 1

    return blocks
