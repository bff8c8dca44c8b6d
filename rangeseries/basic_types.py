"""
Range Series Basic Field Types using Construct Library.

This module implements the primitive fields that make up the fixed-width
leaf records of a Range Series file, using the Construct library for the
binary side and plain string formatting for the text side.

Range Series files are big-endian. Every field builds its Construct for an
explicit endianness prefix ('>' or '<') taken from a SerializationContext.

Supported Fields:
    - Int32Field, UInt32Field: 32-bit integers rendered in decimal
    - FlagsField: 32-bit unsigned integer rendered in hexadecimal
    - DoubleField: 64-bit IEEE 754
    - FourCCField: 4-byte type code, ASCII readable
    - TextField: fixed-length byte array holding ASCII text
    - TimestampField: unsigned 32-bit seconds since 1904-01-01
"""

import re
from datetime import datetime, timedelta
from typing import TypeAlias, Annotated, List, Tuple
from construct import (
    Adapter,
    Bytes,
    Construct,
    Float64b, Float64l,
    Int32sb, Int32sl,
    Int32ub, Int32ul,
    Struct,
)

from .descriptors import MAC_EPOCH_OFFSET

# ============================================================================
# Type Aliases for Type Hints
# ============================================================================

FourCCType: TypeAlias = Annotated[str, "4-character type code"]
Int32Type: TypeAlias = Annotated[int, "signed 32-bit integer"]
UInt32Type: TypeAlias = Annotated[int, "unsigned 32-bit integer"]
DoubleType: TypeAlias = Annotated[float, "64-bit IEEE 754"]
TextType: TypeAlias = Annotated[str, "fixed-length ASCII text"]
MacTimestampType: TypeAlias = Annotated[int, "seconds since 1904-01-01"]

INT32_RANGE = (-(1 << 31), (1 << 31) - 1)
UINT32_RANGE = (0, (1 << 32) - 1)


# ============================================================================
# Numeric Constructs
# ============================================================================

def RSInt32(endianness: str = '>') -> Construct:
    """Signed 32-bit integer."""
    return Int32sl if endianness == '<' else Int32sb


def RSUInt32(endianness: str = '>') -> Construct:
    """Unsigned 32-bit integer."""
    return Int32ul if endianness == '<' else Int32ub


def RSDouble(endianness: str = '>') -> Construct:
    """64-bit floating point, IEEE 754."""
    return Float64l if endianness == '<' else Float64b


# ============================================================================
# FourCC and Text Adapters
# ============================================================================

class FourCCAdapter(Adapter):
    """
    Adapter for 4-byte type codes.

    On a big-endian image the four bytes read as ASCII in order ("AQFT").
    On a little-endian image the code is stored as a swapped 32-bit word, so
    the bytes are reversed before decoding.
    """

    def __init__(self, endianness: str = '>'):
        super().__init__(Bytes(4))
        self.swap = endianness == '<'

    def _decode(self, obj: bytes, context, path) -> str:
        if self.swap:
            obj = obj[::-1]
        return obj.decode('latin-1')

    def _encode(self, obj: str, context, path) -> bytes:
        raw = obj.encode('latin-1')
        if len(raw) != 4:
            raise ValueError(f"type code must be 4 bytes, got {obj!r}")
        return raw[::-1] if self.swap else raw


def FourCC(endianness: str = '>') -> Construct:
    return FourCCAdapter(endianness)


class FixedTextAdapter(Adapter):
    """
    Adapter for fixed-length text arrays.

    The array is not guaranteed to be NUL terminated and may hold residue
    after a NUL. Decoding keeps every byte up to the trailing NUL padding,
    encoding pads with NULs.
    """

    def __init__(self, length: int):
        super().__init__(Bytes(length))
        self.length = length

    def _decode(self, obj: bytes, context, path) -> str:
        return obj.rstrip(b'\x00').decode('latin-1')

    def _encode(self, obj: str, context, path) -> bytes:
        raw = obj.encode('latin-1')[:self.length]
        return raw.ljust(self.length, b'\x00')


# ============================================================================
# Block Header
# ============================================================================

def BlockHeader(endianness: str = '>') -> Construct:
    """
    Header preceding every block.

    Format: [type code (4 bytes)] [payload size (U32)]
    Example: b"AQFT" + 0x00000038 -> 41514654 00000038
    """
    return Struct(
        "type_code" / FourCC(endianness),
        "byte_size" / RSUInt32(endianness),
    )


# ============================================================================
# Field Types (binary Construct + text conversion)
# ============================================================================

def _check_range(value: int, bounds: Tuple[int, int]) -> int:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{value} out of range [{low}, {high}]")
    return value


class FieldType:
    """A leaf field: how it is stored and how it is written as text."""

    size = 0

    def construct(self, endianness: str) -> Construct:
        raise NotImplementedError(f"{self.__class__.__name__}.construct() not implemented")

    def render(self, value) -> str:
        return str(value)

    def parse(self, text: str):
        raise NotImplementedError(f"{self.__class__.__name__}.parse() not implemented")


class Int32Field(FieldType):
    size = 4

    def construct(self, endianness):
        return RSInt32(endianness)

    def render(self, value: int) -> str:
        return "%d" % value

    def parse(self, text: str) -> int:
        return _check_range(int(text.strip()), INT32_RANGE)


class UInt32Field(FieldType):
    size = 4

    def construct(self, endianness):
        return RSUInt32(endianness)

    def render(self, value: int) -> str:
        return "%u" % value

    def parse(self, text: str) -> int:
        return _check_range(int(text.strip()), UINT32_RANGE)


class FlagsField(UInt32Field):
    """Bit flags, written in hexadecimal without prefix."""

    def render(self, value: int) -> str:
        return "%x" % value

    def parse(self, text: str) -> int:
        return _check_range(int(text.strip(), 16), UINT32_RANGE)


class DoubleField(FieldType):
    """Doubles are written with 17 significant digits so they read back exactly."""
    size = 8

    def construct(self, endianness):
        return RSDouble(endianness)

    def render(self, value: float) -> str:
        return "%.17g" % value

    def parse(self, text: str) -> float:
        return float(text.strip())


class FourCCField(FieldType):
    size = 4

    def construct(self, endianness):
        return FourCC(endianness)

    def parse(self, text: str) -> str:
        # taken verbatim: codes may hold leading or trailing spaces
        code = text[:4].ljust(4)
        code.encode('latin-1')
        return code


class TextField(FieldType):
    """
    Fixed-length text, one byte per character.

    Bytes that would not survive a line-oriented text file (control
    characters, embedded NULs) are written as ``\\xNN``; a backslash is
    written as ``\\\\``.

    Example:
        b"Site A\\x00junk" -> "Site A\\x00junk"
    """

    def __init__(self, length: int):
        self.size = length

    def construct(self, endianness):
        return FixedTextAdapter(self.size)

    def render(self, value: str) -> str:
        return escape_text(value)

    def parse(self, text: str) -> str:
        return unescape_text(text).encode('latin-1')[:self.size].decode('latin-1')


_ESCAPE_PATTERN = re.compile(r'\\(\\|x[0-9a-fA-F]{2})')


def _is_plain(char: str) -> bool:
    code = ord(char)
    return (0x20 <= code < 0x7f or 0xa0 < code <= 0xff) and char not in '\\\xad'


def escape_text(value: str) -> str:
    """Escape a text field for a single line of latin-1 text."""
    return ''.join(
        char if _is_plain(char)
        else '\\\\' if char == '\\'
        else '\\x%02x' % ord(char)
        for char in value
    )


def unescape_text(text: str) -> str:
    """Undo ``escape_text``. A backslash not starting an escape is kept as is."""
    def replace(match):
        escape = match.group(1)
        return '\\' if escape == '\\' else chr(int(escape[1:], 16))
    return _ESCAPE_PATTERN.sub(replace, text)


class TimestampField(UInt32Field):
    """
    Legacy timestamp counted in seconds since 1904-01-01.

    The stored value is never changed; the text form shows seconds since
    1970-01-01 followed by a readable UTC date.

    Example:
        stored 3600000000 -> "1517155200 (NB: seconds since 1970) (Sun Jan 28 16:00:00 2018)"
    """

    def render(self, value: int) -> str:
        unix_time = value - MAC_EPOCH_OFFSET
        return "%d (NB: seconds since 1970) (%s)" % (unix_time, format_unix_time(unix_time))

    def parse(self, text: str) -> int:
        fields = text.split()
        if not fields:
            raise ValueError("empty timestamp")
        return _check_range(int(fields[0]) + MAC_EPOCH_OFFSET, UINT32_RANGE)


def format_unix_time(seconds: int) -> str:
    """ctime()-style rendering of a UTC time, e.g. 'Thu Jan  1 00:00:00 1970'."""
    return (datetime(1970, 1, 1) + timedelta(seconds=seconds)).ctime()


# ============================================================================
# Layouts
# ============================================================================

FieldList: TypeAlias = List[Tuple[str, FieldType]]


def build_layout(fields: FieldList, endianness: str = '>') -> Construct:
    """
    Build the packed Struct of a leaf record.

    Examples:
        >>> layout = build_layout([("nchannels", Int32Field()), ("nranges", Int32Field())])
        >>> layout.build({"nchannels": 3, "nranges": 1}).hex()
        '0000000300000001'
    """
    return Struct(*[name / field.construct(endianness) for name, field in fields])


def layout_size(fields: FieldList) -> int:
    return sum(field.size for _, field in fields)
