# pipecomp.completion.document - Host document and cursor
"""
The document a completion request is made for.

Positions follow editor conventions: 1-based lines and 1-based columns.
"""
import re
from dataclasses import dataclass
from typing import Optional

from pipecomp.completion.items import ReplacementRange

# Editor word definition for JavaScript; "$" is a word character
WORD_PATTERN = re.compile(
    r"(-?\d*\.\d\w*)|([^`~!@#%^&*()\-=+\[{\]}\\|;:'\",.<>/?\s]+)"
)


@dataclass(frozen=True)
class WordAtPosition:
    """Word before the cursor and its 1-based column span."""
    word: str
    start_column: int
    end_column: int


@dataclass
class Document:
    """Pipeline text plus a cursor position."""
    text: str
    line: int
    column: int
    word_start: Optional[int] = None  # host-supplied word span, 1-based
    word_end: Optional[int] = None

    @property
    def column_index(self) -> int:
        """0-based cursor column."""
        return self.column - 1

    def line_text(self, line: Optional[int] = None) -> str:
        """Get the text of a 1-based line, empty past the end."""
        lines = self.text.split("\n")
        number = self.line if line is None else line
        if 1 <= number <= len(lines):
            return lines[number - 1]
        return ""

    def word_until_position(self) -> WordAtPosition:
        """Get the part of the word under the cursor that precedes it."""
        text = self.line_text()
        index = self.column_index
        for match in WORD_PATTERN.finditer(text):
            if match.start() <= index <= match.end():
                return WordAtPosition(
                    word=text[match.start():index],
                    start_column=match.start() + 1,
                    end_column=self.column,
                )
            if match.start() > index:
                break
        return WordAtPosition(word="", start_column=self.column, end_column=self.column)

    def replacement_range(self) -> ReplacementRange:
        """Range replaced by an accepted suggestion."""
        if self.word_start is not None and self.word_end is not None:
            return ReplacementRange(self.line, self.word_start, self.word_end)
        word = self.word_until_position()
        return ReplacementRange(self.line, word.start_column, word.end_column)

    @classmethod
    def from_offset(cls, text: str, offset: int) -> "Document":
        """Create a document with the cursor at a character offset."""
        before = text[:offset]
        line = before.count("\n") + 1
        column = len(before) - (before.rfind("\n") + 1) + 1
        return cls(text=text, line=line, column=column)
