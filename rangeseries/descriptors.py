"""
Block descriptors - the closed catalog of Range Series block type codes.
"""
from enum import Enum


HEADER_SIZE = 8
"""Size of a block header on the wire: 4-byte type code + 4-byte size."""

MAC_EPOCH_OFFSET = 2082844800
"""Seconds between 1904-01-01 00:00:00 and 1970-01-01 00:00:00."""


class BlockKind(Enum):
    """How a block type stores its payload."""
    CONTAINER = "container"  # payload is the blocks that follow it
    FIELDS = "fields"        # fixed-width packed record
    SAMPLES = "samples"      # variable count of float32 I/Q pairs
    OPAQUE = "opaque"        # raw bytes, no interpretable fields


class TypeCode:
    """Four character type codes, case sensitive."""
    AQFT = "AQFT"   # root container
    HEAD = "HEAD"   # header container
    SIGN = "sign"
    MCDA = "mcda"
    DBRF = "dbrf"
    CNST = "cnst"
    HASI = "hasi"
    SWEP = "swep"
    FBIN = "fbin"
    BODY = "BODY"   # body container
    RTAG = "rtag"
    GPS1 = "gps1"
    INDX = "indx"
    SCAL = "scal"
    AFFT = "afft"
    IFFT = "ifft"
    END = "END "    # terminator


ROOT_CODE = TypeCode.AQFT
HEAD_CODE = TypeCode.HEAD
BODY_CODE = TypeCode.BODY
END_CODE = TypeCode.END

SENTINEL_CODES = (ROOT_CODE, HEAD_CODE, BODY_CODE, END_CODE)


class BinFormat:
    """Sample binary sub-format codes declared by an ``fbin`` block."""
    CVIQ = "cviq"
    DBRA = "dbra"


class BinType:
    """Sample binary sub-type codes declared by an ``fbin`` block."""
    FLT8 = "flt8"
    FLT4 = "flt4"
    FIX2 = "fix2"
    FIX3 = "fix3"
    FIX4 = "fix4"


# the only sample layout that can be rendered and parsed
SUPPORTED_BIN_FORMAT = BinFormat.CVIQ
SUPPORTED_BIN_TYPE = BinType.FLT4
