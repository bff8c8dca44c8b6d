from typing import Optional


class RangeSeriesError(Exception):
    '''Base class of every error raised while converting a Range Series file.'''


class HeaderError(RangeSeriesError):
    '''The buffer does not start with a root container block.'''


class UnknownBlockError(RangeSeriesError):
    '''No handler is registered for a type code.

    The raw code is kept so the caller can report exactly what was found.
    '''

    def __init__(self, type_code, action: str = "handle"):
        self.type_code = type_code
        self.action = action
        super().__init__(f"Cannot {action} block {type_code!r}: no handler")


class TruncatedBlockError(RangeSeriesError):
    '''A leaf payload is shorter than the minimum layout of its type.'''

    def __init__(self, type_code: str, size: int, minimum: int):
        self.type_code = type_code
        self.size = size
        self.minimum = minimum
        super().__init__(
            f"Block '{type_code}' is truncated: {size} bytes, need at least {minimum}"
        )


class TextParseError(RangeSeriesError):
    '''Base class for errors found in the text rendering.'''

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)


class MissingParameterError(TextParseError):
    '''A required ``name:value`` line is absent before the end of the record.'''

    def __init__(self, field: str, line_number: Optional[int] = None):
        self.field = field
        super().__init__(f"Cannot find parameter '{field}'", line_number)


class InvalidParameterError(TextParseError):
    '''A ``name:value`` line was found but its value cannot be converted.'''

    def __init__(self, field: str, value: str, line_number: Optional[int] = None):
        self.field = field
        self.value = value
        super().__init__(f"Bad value {value!r} for parameter '{field}'", line_number)


class SampleLineCountError(TextParseError):
    '''A sample record does not hold a positive multiple of three lines.'''

    def __init__(self, type_code: str, count: int, line_number: Optional[int] = None):
        self.type_code = type_code
        self.count = count
        super().__init__(
            f"Bad number of lines: {count}, reading '{type_code}' block. "
            "Lines must be a multiple of 3",
            line_number,
        )


class SampleFormatError(RangeSeriesError):
    '''Sample blocks declared with a binary format or type that is not supported.'''

    def __init__(self, what: str, code):
        self.what = what
        self.code = code
        super().__init__(f"Cannot handle {what} {code!r}")


class SentinelError(RangeSeriesError):
    '''A container sentinel needed to compute sizes is missing from the sequence.'''

    def __init__(self, type_code: str):
        self.type_code = type_code
        super().__init__(f"Cannot find '{type_code}' block to set its size")


class TruncationWarning(UserWarning):
    '''The input ended before a block declared it would.'''
