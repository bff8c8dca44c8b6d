"""
The Block record and helpers over the flat block sequence.

A Range Series file is a tree of blocks, but it is held as a single list in
preorder: a container is followed by all of its descendants, then by its
next sibling. Nothing in a Block records its depth or its parent; regions
are found by scanning for the sentinel type codes.
"""
from dataclasses import dataclass
from typing import Any, List, Optional

from .descriptors import HEADER_SIZE


@dataclass
class Block:
    """
    One typed, sized unit of the file.

    Attributes:
        type_code: 4-character code, e.g. "sign" or "END ".
        byte_size: payload bytes, excluding the 8-byte header. Containers
            parsed from text have 0 until the sizes are reconciled.
        payload: None for containers, a dict of field values for fixed
            records, an (n, 2) float32 array for samples, bytes for opaque data.
    """
    type_code: str
    byte_size: int = 0
    payload: Any = None

    @property
    def total_size(self) -> int:
        """Bytes this block occupies on the wire, header included."""
        return self.byte_size + HEADER_SIZE


BlockSequence = List[Block]


def find_block(blocks: BlockSequence, type_code: str) -> Optional[int]:
    """Index of the first block with ``type_code``, or None."""
    for position, block in enumerate(blocks):
        if block.type_code == type_code:
            return position
    return None


def describe_blocks(blocks: BlockSequence) -> str:
    """One line per block, for debug output."""
    return "\n".join(
        "Node %u: key %s size %u" % (count, block.type_code, block.byte_size)
        for count, block in enumerate(blocks)
    )
