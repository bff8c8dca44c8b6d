"""
Line-oriented access to the text rendering.

The text form is read one record at a time: a type-code line, then the
record's lines up to the blank line that closes it. Line numbers are kept
so errors can point at the place they were found.
"""
from typing import Iterable, List, Optional, Tuple

from .basic_types import FieldType
from .exceptions import InvalidParameterError, MissingParameterError


class LineStream:
    '''Cursor over the lines of a text rendering (1-based line numbers).'''

    def __init__(self, text_or_lines):
        # only '\n' ends a line; str.splitlines() would also break on
        # latin-1 bytes such as 0x85 or 0x1c
        if isinstance(text_or_lines, str):
            lines = text_or_lines.split('\n')
            if lines[-1] == '':
                lines.pop()
            lines = [line.rstrip('\r') for line in lines]
        else:
            lines = [line.rstrip('\r\n') for line in text_or_lines]
        self.lines: List[str] = lines
        self.position = 0

    @property
    def line_number(self) -> int:
        '''Number of the last line returned.'''
        return self.position

    def at_end(self) -> bool:
        return self.position >= len(self.lines)

    def next_line(self) -> Optional[str]:
        if self.at_end():
            return None
        line = self.lines[self.position]
        self.position += 1
        return line

    def read_record(self, type_code: str) -> 'TextRecord':
        '''Collect the lines following a type-code line up to a blank line or EOF.

        The blank line is consumed.
        '''
        body: List[Tuple[int, str]] = []
        while not self.at_end():
            line = self.next_line()
            if line.strip() == '':
                return TextRecord(type_code, body, end_line=self.position)
            body.append((self.position, line))
        # end of stream: point just past the last line
        return TextRecord(type_code, body, end_line=self.position + 1)


class TextRecord:
    '''The lines of one block's record, without its type-code line.'''

    def __init__(self, type_code: str, lines: Iterable[Tuple[int, str]], end_line: int):
        self.type_code = type_code
        self.lines = list(lines)
        self.end_line = end_line

    def __len__(self):
        return len(self.lines)

    def find(self, label: str) -> Tuple[str, int]:
        '''Search the record for ``label:`` and return the text after the colon.

        Raises:
            MissingParameterError: no line of the record carries the label.
        '''
        prefix = label + ':'
        for line_number, line in self.lines:
            if line.startswith(prefix):
                return line[len(prefix):], line_number
        raise MissingParameterError(label, self.end_line)

    def parameter(self, label: str, field: FieldType):
        '''Find ``label`` and convert its value with ``field``.'''
        text, line_number = self.find(label)
        try:
            return field.parse(text)
        except ValueError:
            raise InvalidParameterError(label, text, line_number) from None
