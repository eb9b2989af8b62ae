"""
CSV Tokenizer

Splits delimited text into rows of string cells.

Quoted fields may contain the delimiter and line breaks literally, and a
doubled quote inside a quoted field decodes to one quote. CRLF, CR and LF
all end a row, mixed freely. Unquoted fields are returned verbatim
(no trimming). An unclosed quote takes the rest of the input as the
field value instead of failing.
"""

import re
from typing import List, Tuple


class CsvTokenizer:
    """
    Single pass tokenizer for one delimiter character.

    Handles the format:
        name,"quoted, with delimiter","with ""escaped"" quotes"
    """

    def __init__(self, delimiter: str = ','):
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        if delimiter in '"\r\n':
            raise ValueError(f"Delimiter cannot be a quote or line break: {delimiter!r}")
        self.delimiter = delimiter
        # Run of characters up to the next delimiter or line break
        self._plain = re.compile('[^%s\r\n]*' % re.escape(delimiter))

    def tokenize(self, text: str) -> List[List[str]]:
        """
        Parse text into rows of cells.

        Always returns at least one row; empty input gives [['']].
        A trailing line break yields a final [''] row, which callers
        treat as a blank line.
        """
        rows: List[List[str]] = [[]]
        pos = 0
        end = len(text)

        while True:
            if pos < end and text[pos] == '"':
                value, pos = self._read_quoted(text, pos + 1)
                # Anything between the closing quote and the next separator
                # is kept as-is
                match = self._plain.match(text, pos)
                value += match.group()
                pos = match.end()
            else:
                match = self._plain.match(text, pos)
                value = match.group()
                pos = match.end()

            rows[-1].append(value)

            if pos >= end:
                break

            if text[pos] == self.delimiter:
                pos += 1
                continue

            # Row separator: \r\n, \r or \n
            if text[pos] == '\r' and text.startswith('\n', pos + 1):
                pos += 2
            else:
                pos += 1
            rows.append([])

        return rows

    def _read_quoted(self, text: str, pos: int) -> Tuple[str, int]:
        """Read a quoted field body starting after the opening quote."""
        parts = []
        while True:
            close = text.find('"', pos)
            if close < 0:
                # Unclosed quote: best effort, take the remainder
                parts.append(text[pos:])
                return ''.join(parts), len(text)

            parts.append(text[pos:close])
            if text.startswith('"', close + 1):
                parts.append('"')
                pos = close + 2
            else:
                return ''.join(parts), close + 1


def tokenize(text: str, delimiter: str = ',') -> List[List[str]]:
    """Convenience function to tokenize text with a given delimiter."""
    return CsvTokenizer(delimiter).tokenize(text)
