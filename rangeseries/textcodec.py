"""
Text Codec: flat block sequence <-> editable text.

Each block becomes one record::

    sign
    version:1.00
    filetype:RSER
    ...
    <blank line>

Containers are the type-code line and a blank line. Sample blocks list
``index I Q`` lines. Records appear in the order of the flat sequence.

Parsing walks the text line by line: blank or one-character lines and
``name:value`` lines outside a record are skipped, any other line names a
block type and the following lines up to a blank line are that block's
record. Container sizes are left at 0; run ``reconcile`` before encoding.
"""
import logging
from typing import Iterable, List, Union

from .blocks import BlockSequence
from .descriptors import BODY_CODE
from .lines import LineStream
from .registry import lookup
from .serialization import SampleContext

logger = logging.getLogger(__name__)


def render_lines(blocks: BlockSequence, header_only: bool = False) -> List[str]:
    """
    Render ``blocks`` to a list of text lines (without newlines).

    Args:
        blocks: flat block sequence, e.g. from ``decode``.
        header_only: stop before the BODY record.

    Raises:
        UnknownBlockError: a block type has no handler.
        SampleFormatError: a sample block follows an unsupported ``fbin``.
        TruncatedBlockError: a sample or opaque block has too few bytes.
    """
    state = SampleContext()
    lines: List[str] = []
    for block in blocks:
        handler = lookup(block.type_code, "dump")
        if header_only and block.type_code == BODY_CODE:
            break
        lines.extend(handler.render_text(block, state))
    return lines


def render_text(blocks: BlockSequence, header_only: bool = False) -> str:
    """Render ``blocks`` to the text form, one record per block."""
    lines = render_lines(blocks, header_only)
    return "".join(line + "\n" for line in lines)


def _type_code_of(line: str) -> str:
    # editors may drop the trailing space of "END "
    return line[:4].ljust(4)


def parse_text(text: Union[str, Iterable[str]]) -> BlockSequence:
    """
    Parse the text form back into a flat block sequence.

    Args:
        text: the whole text, or an iterable of lines.

    Returns:
        list of Block; containers have byte_size 0.

    Raises:
        UnknownBlockError: a type-code line names no known block.
        MissingParameterError: a field is absent from its record.
        InvalidParameterError: a field value cannot be converted.
        SampleLineCountError: a sample record is not a multiple of 3 lines.
        SampleFormatError: samples appear without a supported ``fbin``.
    """
    stream = LineStream(text)
    state = SampleContext()
    blocks: BlockSequence = []
    while not stream.at_end():
        line = stream.next_line()
        # stray characters and name:value lines outside a record
        if len(line.strip()) <= 1 or ':' in line:
            continue
        type_code = _type_code_of(line)
        handler = lookup(type_code, "gen")
        logger.debug("line %d: block %r", stream.line_number, type_code)
        record = stream.read_record(type_code)
        blocks.append(handler.parse_text(record, state))
    logger.debug("read %d lines, %d blocks", len(stream.lines), len(blocks))
    return blocks
