"""
Tests for the line cursor over the text form.
"""

import pytest

from rangeseries.basic_types import Int32Field
from rangeseries.exceptions import InvalidParameterError, MissingParameterError
from rangeseries.lines import LineStream


def test_line_stream_numbers_lines_from_one():
    """line_number is the number of the last line returned."""
    stream = LineStream("a\nb\n")

    assert stream.next_line() == "a"
    assert stream.line_number == 1
    assert stream.next_line() == "b"
    assert stream.at_end()
    assert stream.next_line() is None


def test_read_record_consumes_blank_line():
    """The blank line closing a record is consumed."""
    stream = LineStream("cnst\nnchannels:1\n\nnext\n")
    stream.next_line()

    record = stream.read_record("cnst")

    assert record.lines == [(2, "nchannels:1")]
    assert record.end_line == 3
    assert stream.next_line() == "next"


def test_read_record_whitespace_line_closes_record():
    """A line of spaces counts as blank."""
    stream = LineStream("rtag\n   \nrtag:1\n")
    stream.next_line()

    assert len(stream.read_record("rtag")) == 0


def test_read_record_at_end_of_stream():
    """Without a blank line the record runs to the end."""
    stream = LineStream("rtag\nrtag:1")
    stream.next_line()

    record = stream.read_record("rtag")

    assert record.end_line == 3
    assert stream.at_end()


def test_record_parameter():
    """parameter() converts the value after the colon."""
    stream = LineStream("cnst\nnranges:4\n\n")
    stream.next_line()

    assert stream.read_record("cnst").parameter("nranges", Int32Field()) == 4


def test_record_label_must_match_whole_name():
    """'nranges' does not match a line labelled 'nrangesx'."""
    stream = LineStream("cnst\nnrangesx:4\n\n")
    stream.next_line()

    with pytest.raises(MissingParameterError):
        stream.read_record("cnst").find("nranges")


def test_record_parameter_invalid():
    """A conversion failure carries the field and its line."""
    stream = LineStream("cnst\nnranges:many\n\n")
    stream.next_line()

    with pytest.raises(InvalidParameterError) as excinfo:
        stream.read_record("cnst").parameter("nranges", Int32Field())

    assert excinfo.value.value == "many"
    assert "(line 2)" in str(excinfo.value)


def test_line_stream_splits_on_newline_only():
    """Latin-1 bytes that str.splitlines() treats as breaks stay in the line."""
    stream = LineStream("description:Bj\x85rn\x1c\x0b\x0c\nnext\n")

    assert stream.lines == ["description:Bj\x85rn\x1c\x0b\x0c", "next"]


def test_line_stream_strips_carriage_returns():
    """CRLF text reads like LF text."""
    assert LineStream("a\r\n\r\nb\r\n").lines == ["a", "", "b"]


def test_line_stream_keeps_final_line_without_newline():
    """The last line need not end with a newline."""
    assert LineStream("a\nb").lines == ["a", "b"]
