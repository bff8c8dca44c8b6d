"""
Serialization contexts - byte order and the state carried between blocks.
"""
from dataclasses import dataclass
from typing import Optional

from .descriptors import SUPPORTED_BIN_FORMAT, SUPPORTED_BIN_TYPE
from .exceptions import SampleFormatError


class SerializationContext:
    """Byte order of the binary image.

    Range Series files are big-endian by definition; ``byte_order`` is kept
    as a value so that every decode and encode call states it explicitly.
    """

    def __init__(self, byte_order: str = 'big'):
        if byte_order not in ('big', 'little'):
            raise ValueError(f"byte_order must be 'big' or 'little', got {byte_order!r}")
        self.byte_order = byte_order
        self.endianness = '<' if byte_order == 'little' else '>'

    def __repr__(self):
        return f"SerializationContext(byte_order={self.byte_order!r})"


WIRE_CONTEXT = SerializationContext('big')


@dataclass
class SampleContext:
    """Values declared by earlier blocks and needed by sample blocks.

    ``fbin`` sets the binary format and type, ``scal`` the scaling
    coefficients and ``indx`` the current index.
    """
    bin_format: Optional[str] = None
    bin_type: Optional[str] = None
    index: int = 0
    scalar_one: float = 0.0
    scalar_two: float = 0.0

    def check_sample_format(self) -> None:
        if self.bin_format != SUPPORTED_BIN_FORMAT:
            raise SampleFormatError("BINFORMAT", self.bin_format)
        if self.bin_type != SUPPORTED_BIN_TYPE:
            raise SampleFormatError("BINTYPE", self.bin_type)
