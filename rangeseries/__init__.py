"""
Range Series (RS) file conversion.

This package converts CODAR SeaSonde Range Series files, a big-endian
chunk-structured binary format, to an editable text form and back, keeping
the exact binary layout.

Key Features:
    - Declarative big-endian field layouts using Construct
    - I/Q sample arrays using NumPy
    - Flat, preorder block sequence; container regions found by sentinel codes
    - Container sizes recomputed from the blocks when writing

Pipeline:
    decode:  bytes -> decode() -> [Block] -> render_text() -> text
    encode:  text -> parse_text() -> [Block] -> reconcile() -> encode() -> bytes

Public API:
    - binary_to_text: Convert a binary image to text
    - text_to_binary: Convert text to a binary image
    - decode, encode, reconcile, render_text, parse_text: the individual steps

Usage:
    >>> from rangeseries import binary_to_text, text_to_binary
    >>> text = binary_to_text(data)
    >>> assert text_to_binary(text) == data
"""

__version__ = "0.1.0"

from .api import (
    binary_to_text,
    text_to_binary,
)

from .blocks import (
    Block,
    BlockSequence,
    describe_blocks,
    find_block,
)

from .decoder import (
    check_header,
    decode,
)

from .descriptors import (
    BlockKind,
    TypeCode,
    BinFormat,
    BinType,
    HEADER_SIZE,
    MAC_EPOCH_OFFSET,
)

from .encoder import encode

from .exceptions import (
    RangeSeriesError,
    HeaderError,
    UnknownBlockError,
    TruncatedBlockError,
    TextParseError,
    MissingParameterError,
    InvalidParameterError,
    SampleLineCountError,
    SampleFormatError,
    SentinelError,
    TruncationWarning,
)

from .reconcile import (
    reconcile,
    region_sizes,
    root_size,
)

from .registry import (
    BlockHandler,
    get_handler,
    lookup,
    registered_codes,
)

from .serialization import (
    SampleContext,
    SerializationContext,
)

from .textcodec import (
    parse_text,
    render_lines,
    render_text,
)

__all__ = [
    # Main API
    "binary_to_text",
    "text_to_binary",
    # Pipeline steps
    "decode",
    "check_header",
    "render_text",
    "render_lines",
    "parse_text",
    "reconcile",
    "region_sizes",
    "root_size",
    "encode",
    # Model
    "Block",
    "BlockSequence",
    "describe_blocks",
    "find_block",
    # Registry
    "BlockHandler",
    "BlockKind",
    "get_handler",
    "lookup",
    "registered_codes",
    # Codes and constants
    "TypeCode",
    "BinFormat",
    "BinType",
    "HEADER_SIZE",
    "MAC_EPOCH_OFFSET",
    # Contexts
    "SampleContext",
    "SerializationContext",
    # Errors
    "RangeSeriesError",
    "HeaderError",
    "UnknownBlockError",
    "TruncatedBlockError",
    "TextParseError",
    "MissingParameterError",
    "InvalidParameterError",
    "SampleLineCountError",
    "SampleFormatError",
    "SentinelError",
    "TruncationWarning",
]
