"""
Binary Encoder: flat block sequence -> bytes.
"""
import logging
from io import BytesIO

from .blocks import BlockSequence
from .registry import lookup
from .serialization import SerializationContext, WIRE_CONTEXT

logger = logging.getLogger(__name__)


def encode(blocks: BlockSequence, context: SerializationContext = WIRE_CONTEXT) -> bytes:
    """
    Serialize ``blocks`` in sequence order.

    Containers write only their header: what they contain is simply the
    blocks after them. Container sizes must already be set (see ``reconcile``).
    The image is built in memory, so a failing block leaves nothing half written.

    Raises:
        UnknownBlockError: a block type has no handler.
        InvalidParameterError: a field value does not fit its wire type.
    """
    stream = BytesIO()
    for block in blocks:
        handler = lookup(block.type_code, "write")
        stream.write(handler.encode_binary(block, context))
    logger.debug("encoded %d blocks, %d bytes", len(blocks), stream.tell())
    return stream.getvalue()
