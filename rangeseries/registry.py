"""
Block Type Registry.

This module maps each 4-byte type code to the handler that knows how to
deal with that block type. A handler provides four operations:

    fixup(raw, context)          wire payload bytes -> host payload value
    render_text(block, state)    payload -> lines of the text record
    parse_text(record, state)    text record -> Block
    encode_binary(block, context) Block -> header + payload bytes

The set of block types is closed. Every type is one of four kinds
(see ``BlockKind``) and gets the handler class of its kind, configured
with the type's field layout.
"""

import logging
import warnings
from typing import Callable, Dict, List, Optional

from construct import ConstructError

from .basic_types import (
    BlockHeader,
    DoubleField,
    FieldList,
    FlagsField,
    FourCCField,
    Int32Field,
    TextField,
    TimestampField,
    UInt32Field,
    build_layout,
    layout_size,
)
from .blocks import Block
from .descriptors import SENTINEL_CODES, BlockKind, TypeCode
from .exceptions import (
    InvalidParameterError,
    SampleLineCountError,
    TruncatedBlockError,
    TruncationWarning,
    UnknownBlockError,
)
from .lines import TextRecord
from .samples import (
    SAMPLE_SIZE,
    pack_samples,
    parse_sample_line,
    render_samples,
    samples_from_values,
    unpack_samples,
)
from .serialization import SampleContext, SerializationContext, WIRE_CONTEXT

logger = logging.getLogger(__name__)

SIZE_DESCRIPTION = 64
SIZE_OWNERNAME = 64
SIZE_COMMENT = 64


# ============================================================================
# Handlers
# ============================================================================

class BlockHandler:
    """Base class: the operations every block type supports."""

    kind: BlockKind = None

    def __init__(self, type_code: str):
        self.type_code = type_code

    @property
    def is_container(self) -> bool:
        return self.kind is BlockKind.CONTAINER

    def __repr__(self):
        return f"<{self.__class__.__name__}({self.type_code!r})>"

    def fixup(self, raw: bytes, context: SerializationContext = WIRE_CONTEXT):
        raise NotImplementedError(f"{self.__class__.__name__}.fixup() not implemented")

    def render_text(self, block: Block, state: SampleContext) -> List[str]:
        raise NotImplementedError(f"{self.__class__.__name__}.render_text() not implemented")

    def parse_text(self, record: TextRecord, state: SampleContext) -> Block:
        raise NotImplementedError(f"{self.__class__.__name__}.parse_text() not implemented")

    def encode_payload(self, block: Block, context: SerializationContext) -> bytes:
        raise NotImplementedError(f"{self.__class__.__name__}.encode_payload() not implemented")

    def encode_header(self, size: int, context: SerializationContext) -> bytes:
        return BlockHeader(context.endianness).build(
            {"type_code": self.type_code, "byte_size": size})

    def encode_binary(self, block: Block, context: SerializationContext = WIRE_CONTEXT) -> bytes:
        body = self.encode_payload(block, context)
        return self.encode_header(len(body), context) + body

    def _check_minimum(self, raw: bytes, minimum: int) -> None:
        if len(raw) < minimum:
            raise TruncatedBlockError(self.type_code, len(raw), minimum)


class ContainerHandler(BlockHandler):
    """
    Container blocks hold no fields of their own.

    Their contents are the blocks that follow them in the flat sequence, so
    encoding writes the header alone, with the size stored on the block.
    """

    kind = BlockKind.CONTAINER

    def fixup(self, raw, context=WIRE_CONTEXT):
        return None

    def render_text(self, block, state):
        return [self.type_code, ""]

    def parse_text(self, record, state):
        return Block(self.type_code, 0, None)

    def encode_payload(self, block, context):
        return b''

    def encode_binary(self, block, context=WIRE_CONTEXT):
        return self.encode_header(block.byte_size, context)


class FieldsHandler(BlockHandler):
    """
    Fixed-width packed records.

    Args:
        type_code: the block's code.
        fields: ordered (label, FieldType) pairs; the label is both the
            Struct member name and the text label.
        remember: optional callback storing values needed by later blocks
            into the SampleContext, called on render and on parse.
    """

    kind = BlockKind.FIELDS

    def __init__(self, type_code: str, fields: FieldList,
                 remember: Optional[Callable[[SampleContext, dict], None]] = None):
        super().__init__(type_code)
        self.fields = fields
        self.size = layout_size(fields)
        self.remember = remember

    def fixup(self, raw, context=WIRE_CONTEXT):
        self._check_minimum(raw, self.size)
        if len(raw) > self.size:
            warnings.warn(
                f"Block '{self.type_code}' has {len(raw) - self.size} bytes past its "
                f"{self.size}-byte layout, ignored",
                TruncationWarning,
            )
        parsed = build_layout(self.fields, context.endianness).parse(raw[:self.size])
        return {name: parsed[name] for name, _ in self.fields}

    def render_text(self, block, state):
        payload = block.payload
        if self.remember:
            self.remember(state, payload)
        lines = [self.type_code]
        lines.extend(f"{name}:{field.render(payload[name])}" for name, field in self.fields)
        lines.append("")
        return lines

    def parse_text(self, record, state):
        payload = {name: record.parameter(name, field) for name, field in self.fields}
        if self.remember:
            self.remember(state, payload)
        return Block(self.type_code, self.size, payload)

    def encode_payload(self, block, context):
        chunks = []
        for name, field in self.fields:
            value = block.payload[name]
            try:
                chunks.append(field.construct(context.endianness).build(value))
            except (ConstructError, ValueError, TypeError):
                raise InvalidParameterError(name, str(value)) from None
        return b''.join(chunks)


class SampleHandler(BlockHandler):
    """
    Arrays of float32 I/Q pairs.

    Rendering and parsing need the earlier ``fbin`` block to have declared
    format 'cviq' and type 'flt4'. Each sample is one text line; the number
    of lines in a record must be a positive multiple of three.
    """

    kind = BlockKind.SAMPLES

    def fixup(self, raw, context=WIRE_CONTEXT):
        self._check_minimum(raw, SAMPLE_SIZE)
        return unpack_samples(raw, context.endianness)

    def render_text(self, block, state):
        self._check_minimum_samples(block)
        state.check_sample_format()
        return [self.type_code] + render_samples(block.payload) + [""]

    def _check_minimum_samples(self, block):
        if block.payload is None or len(block.payload) == 0:
            raise TruncatedBlockError(self.type_code, block.byte_size, SAMPLE_SIZE)

    def parse_text(self, record, state):
        count = len(record)
        if count <= 0 or count % 3 != 0:
            raise SampleLineCountError(self.type_code, count, record.end_line)
        state.check_sample_format()
        values = []
        for line_number, line in record.lines:
            try:
                _, i_value, q_value = parse_sample_line(line)
            except ValueError:
                raise InvalidParameterError("sample", line, line_number) from None
            values.append((i_value, q_value))
        logger.debug("%s: read %d samples", self.type_code, len(values))
        return Block(self.type_code, len(values) * SAMPLE_SIZE, samples_from_values(values))

    def encode_payload(self, block, context):
        return pack_samples(block.payload, context.endianness)


class OpaqueHandler(BlockHandler):
    """
    Blocks with an undocumented structure.

    The payload is kept as raw bytes and rendered as a hex byte list:
    ``data: 0a 1b 2c``. Bytes are written back unmodified.
    """

    kind = BlockKind.OPAQUE

    def __init__(self, type_code: str, minimum: int = 4):
        super().__init__(type_code)
        self.minimum = minimum

    def fixup(self, raw, context=WIRE_CONTEXT):
        self._check_minimum(raw, self.minimum)
        return bytes(raw)

    def render_text(self, block, state):
        self._check_minimum(block.payload, self.minimum)
        return [self.type_code, "data:" + "".join(" %02x" % byte for byte in block.payload), ""]

    def parse_text(self, record, state):
        text, line_number = record.find("data")
        try:
            data = bytes(int(token, 16) for token in text.split())
        except ValueError:
            raise InvalidParameterError("data", text, line_number) from None
        if not data:
            raise InvalidParameterError("data", text, line_number)
        return Block(self.type_code, len(data), data)

    def encode_payload(self, block, context):
        return bytes(block.payload)


# ============================================================================
# Shared state updates
# ============================================================================

def _remember_fbin(state: SampleContext, payload: dict) -> None:
    state.bin_format = payload["format"]
    state.bin_type = payload["type"]


def _remember_indx(state: SampleContext, payload: dict) -> None:
    state.index = payload["index"]


def _remember_scal(state: SampleContext, payload: dict) -> None:
    state.scalar_one = payload["scalar_one"]
    state.scalar_two = payload["scalar_two"]


# ============================================================================
# Registry
# ============================================================================

_BLOCK_REGISTRY: Dict[str, BlockHandler] = {}
"""Registry mapping type codes to their handlers."""


def register(handler: BlockHandler) -> BlockHandler:
    _BLOCK_REGISTRY[handler.type_code] = handler
    return handler


def get_handler(type_code: str) -> Optional[BlockHandler]:
    """Handler for ``type_code``, or None when the code is unknown."""
    return _BLOCK_REGISTRY.get(type_code)


def lookup(type_code: str, action: str = "handle") -> BlockHandler:
    """
    Handler for ``type_code``.

    Raises:
        UnknownBlockError: naming the raw code, when no handler exists.
    """
    handler = _BLOCK_REGISTRY.get(type_code)
    if handler is None:
        raise UnknownBlockError(type_code, action)
    return handler


def registered_codes() -> List[str]:
    return list(_BLOCK_REGISTRY)


for _code in SENTINEL_CODES:
    register(ContainerHandler(_code))

register(FieldsHandler(TypeCode.SIGN, [
    ("version", FourCCField()),
    ("filetype", FourCCField()),
    ("sitecode", FourCCField()),
    ("userflags", FlagsField()),
    ("description", TextField(SIZE_DESCRIPTION)),
    ("ownername", TextField(SIZE_OWNERNAME)),
    ("comment", TextField(SIZE_COMMENT)),
]))

register(FieldsHandler(TypeCode.MCDA, [
    ("filetimestamp", TimestampField()),
]))

register(FieldsHandler(TypeCode.DBRF, [
    ("rxloss", DoubleField()),
]))

register(FieldsHandler(TypeCode.CNST, [
    ("nchannels", Int32Field()),
    ("nranges", Int32Field()),
    ("nsweeps", Int32Field()),
    ("iqindicator", Int32Field()),
]))

register(OpaqueHandler(TypeCode.HASI))

register(FieldsHandler(TypeCode.SWEP, [
    ("samplespersweep", Int32Field()),
    ("sweepstart", DoubleField()),
    ("sweepbandwidth", DoubleField()),
    ("sweeprate", DoubleField()),
    ("rangeoffset", Int32Field()),
]))

register(FieldsHandler(TypeCode.FBIN, [
    ("format", FourCCField()),
    ("type", FourCCField()),
], remember=_remember_fbin))

register(FieldsHandler(TypeCode.RTAG, [
    ("rtag", UInt32Field()),
]))

register(FieldsHandler(TypeCode.GPS1, [
    ("lat", DoubleField()),
    ("lon", DoubleField()),
    ("alt", DoubleField()),
    ("gpstimestamp", TimestampField()),
]))

register(FieldsHandler(TypeCode.INDX, [
    ("index", UInt32Field()),
], remember=_remember_indx))

register(FieldsHandler(TypeCode.SCAL, [
    ("scalar_one", DoubleField()),
    ("scalar_two", DoubleField()),
], remember=_remember_scal))

register(SampleHandler(TypeCode.AFFT))
register(SampleHandler(TypeCode.IFFT))
