"""
Tests for the byte-order and sample contexts.
"""

import pytest

from rangeseries.exceptions import SampleFormatError
from rangeseries.serialization import SampleContext, SerializationContext, WIRE_CONTEXT


def test_wire_context_is_big_endian():
    """Range Series files are big-endian."""
    assert WIRE_CONTEXT.byte_order == 'big'
    assert WIRE_CONTEXT.endianness == '>'


def test_little_endian_context():
    """'little' selects the '<' prefix."""
    assert SerializationContext('little').endianness == '<'


def test_context_rejects_unknown_byte_order():
    """Only 'big' and 'little' are accepted."""
    with pytest.raises(ValueError):
        SerializationContext('middle')


def test_sample_context_defaults():
    """No format is declared until an fbin block is seen."""
    state = SampleContext()

    assert state.bin_format is None
    assert (state.index, state.scalar_one, state.scalar_two) == (0, 0.0, 0.0)
    with pytest.raises(SampleFormatError):
        state.check_sample_format()


def test_sample_context_supported_format():
    """cviq / flt4 is the supported sample layout."""
    SampleContext(bin_format="cviq", bin_type="flt4").check_sample_format()


def test_sample_context_reports_code():
    """The error carries the unsupported code."""
    with pytest.raises(SampleFormatError) as excinfo:
        SampleContext(bin_format="dbra", bin_type="flt4").check_sample_format()

    assert excinfo.value.what == "BINFORMAT"
    assert excinfo.value.code == "dbra"
