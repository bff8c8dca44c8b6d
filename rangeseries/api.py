"""
Public API for Range Series conversion.

This module chains the decoder, text codec, reconciler and encoder into the
two conversions a user needs.

Functions:
    binary_to_text: Range Series bytes -> editable text
    text_to_binary: editable text -> Range Series bytes
"""

from typing import Iterable, Optional, Union

from .decoder import decode
from .encoder import encode
from .reconcile import reconcile
from .serialization import SerializationContext, WIRE_CONTEXT
from .textcodec import parse_text, render_text


def binary_to_text(data: bytes, header_only: bool = False,
                   context: Optional[SerializationContext] = None) -> str:
    """
    Convert a binary Range Series image to its text form.

    Args:
        data: the complete file contents.
        header_only: stop the text before the BODY record.
        context: wire byte order; big-endian when omitted.

    Returns:
        str: one record per block, each closed by a blank line.

    Examples:
        >>> text = binary_to_text(open("RSP_XXXX_2021_02_15_0000.rs", "rb").read())
        >>> text.splitlines()[:3]
        ['AQFT', '', 'HEAD']
    """
    blocks = decode(data, context or WIRE_CONTEXT)
    return render_text(blocks, header_only=header_only)


def text_to_binary(text: Union[str, Iterable[str]],
                   context: Optional[SerializationContext] = None) -> bytes:
    """
    Convert the text form back to a binary Range Series image.

    Container sizes are recomputed from the blocks, so records may be
    edited, added or removed freely.

    Args:
        text: the whole text, or an iterable of lines.
        context: wire byte order; big-endian when omitted.

    Returns:
        bytes: the binary image.

    Raises:
        SentinelError: AQFT, HEAD or BODY is missing from the text.
        RangeSeriesError: any other structural or parsing problem.
    """
    blocks = parse_text(text)
    reconcile(blocks)
    return encode(blocks, context or WIRE_CONTEXT)
