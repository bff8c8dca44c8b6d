"""
Size Reconciler: fill in container sizes of a flat block sequence.

Blocks parsed from text know their own payload size but containers do not.
The sizes are recovered by scanning for the sentinel codes:

    HEAD size = sum of (size + 8) over the blocks after HEAD, up to BODY or END
    BODY size = sum of (size + 8) over the blocks after BODY, up to END
    AQFT size = HEAD size + 8 + BODY size + 8

The root size leaves out the END block that follows BODY. Files written by
the acquisition software follow the same rule, so it is kept as is.
"""
import logging
from typing import Tuple

from .blocks import BlockSequence, find_block
from .descriptors import BODY_CODE, END_CODE, HEADER_SIZE, HEAD_CODE, ROOT_CODE
from .exceptions import SentinelError

logger = logging.getLogger(__name__)


def region_sizes(blocks: BlockSequence) -> Tuple[int, int]:
    """Compute (head_size, body_size) in a single scan."""
    in_head = False
    in_body = False
    head_size = 0
    body_size = 0
    for block in blocks:
        if block.type_code == END_CODE:
            in_head = False
            in_body = False
        elif block.type_code == BODY_CODE:
            in_head = False
        if in_head:
            head_size += block.total_size
        if in_body:
            body_size += block.total_size
        if block.type_code == HEAD_CODE:
            in_head = True
        elif block.type_code == BODY_CODE:
            in_body = True
    return head_size, body_size


def root_size(head_size: int, body_size: int) -> int:
    return head_size + HEADER_SIZE + body_size + HEADER_SIZE


def reconcile(blocks: BlockSequence) -> BlockSequence:
    """
    Write the HEAD, BODY and AQFT sizes into their blocks, in place.

    Returns:
        the same sequence, for chaining.

    Raises:
        SentinelError: AQFT, HEAD or BODY is missing. Nothing is modified.
    """
    positions = {}
    for code in (ROOT_CODE, HEAD_CODE, BODY_CODE):
        position = find_block(blocks, code)
        if position is None:
            raise SentinelError(code)
        positions[code] = position

    head_size, body_size = region_sizes(blocks)
    sizes = {
        ROOT_CODE: root_size(head_size, body_size),
        HEAD_CODE: head_size,
        BODY_CODE: body_size,
    }
    for code, size in sizes.items():
        blocks[positions[code]].byte_size = size
    logger.debug("reconcile: AQFT=%d HEAD=%d BODY=%d", sizes[ROOT_CODE], head_size, body_size)
    return blocks
