"""
Binary Decoder: bytes -> flat block sequence.
"""
import logging
import warnings

from .basic_types import BlockHeader
from .blocks import Block, BlockSequence
from .descriptors import HEADER_SIZE, ROOT_CODE
from .exceptions import HeaderError, TruncationWarning
from .registry import lookup
from .serialization import SerializationContext, WIRE_CONTEXT

logger = logging.getLogger(__name__)


def check_header(data: bytes, context: SerializationContext = WIRE_CONTEXT) -> None:
    """Make sure ``data`` starts with the root container header.

    Raises:
        HeaderError: the buffer is too short or starts with another type code.
    """
    if len(data) < HEADER_SIZE:
        raise HeaderError(f"Buffer too short for a block header: {len(data)} bytes")
    header = BlockHeader(context.endianness).parse(data[:HEADER_SIZE])
    logger.debug("check_header: read %r", header.type_code)
    if header.type_code != ROOT_CODE:
        raise HeaderError(f"Bad header key: {header.type_code!r}")


def decode(data: bytes, context: SerializationContext = WIRE_CONTEXT) -> BlockSequence:
    """
    Decode a whole Range Series image into its flat block sequence.

    Container payloads are decoded recursively and their blocks spliced
    right after the container, so the result is in preorder.

    Args:
        data: the complete file contents.
        context: wire byte order, big-endian by default.

    Returns:
        list of Block, the root container first.

    Raises:
        HeaderError: ``data`` does not start with the root container.
        UnknownBlockError: a type code has no handler.
        TruncatedBlockError: a leaf is shorter than its type's layout.

    A block declaring more bytes than remain is clamped to what remains and a
    TruncationWarning is issued; decoding then runs to the end of the buffer.
    """
    check_header(data, context)
    blocks: BlockSequence = []
    _decode_region(memoryview(data), 0, len(data), blocks, context)
    logger.debug("decoded %d blocks", len(blocks))
    return blocks


def _decode_region(view: memoryview, offset: int, end: int,
                   blocks: BlockSequence, context: SerializationContext) -> None:
    header_layout = BlockHeader(context.endianness)
    while offset < end:
        remaining = end - offset
        if remaining < HEADER_SIZE:
            warnings.warn(
                f"{remaining} trailing bytes at offset {offset} are too short for a block header",
                TruncationWarning,
            )
            return
        header = header_layout.parse(view[offset:offset + HEADER_SIZE].tobytes())
        offset += HEADER_SIZE
        remaining -= HEADER_SIZE
        size = header.byte_size
        if size > remaining:
            warnings.warn(
                f"Block '{header.type_code}' size truncated from {size} to {remaining} bytes",
                TruncationWarning,
            )
            size = remaining

        handler = lookup(header.type_code, "decode")
        logger.debug("block %r at offset %d, %d bytes", header.type_code, offset - HEADER_SIZE, size)
        if handler.is_container:
            blocks.append(Block(header.type_code, size, None))
            _decode_region(view, offset, offset + size, blocks, context)
        else:
            raw = view[offset:offset + size].tobytes()
            blocks.append(Block(header.type_code, size, handler.fixup(raw, context)))
        offset += size
