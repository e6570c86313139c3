"""Character-level view of MFL source text. The stream exposes the current character and its class and moves a cursor
forward one character at a time, counting lines as newlines are consumed.

Reading past the end of the source is well defined: the current character becomes END_CHAR and stays that way.
"""

from enum import Enum

from mfl.lang.error import GenericException


class CharacterClass(Enum):
    """Coarse classification of a source character, used by the lexer to pick a scanning state."""
    WHITE_SPACE = "whitespace"
    LETTER = "letter"
    DIGIT = "digit"
    OTHER = "other"
    END = "end"


class CharacterStream:
    """Cursor over source text with a one-slot deferred advance."""
    END_CHAR = "\0"

    def __init__(self, source=None):
        self.source = "" if source is None else source
        self.idx = 0
        self.line_number = 1

        self._skip_advance = False  # set by skip_next_advance, cleared by the next advance

    @classmethod
    def from_file(cls, path):
        """Returns a CharacterStream over the UTF-8 contents of path."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                return cls(file.read())
        except (OSError, UnicodeDecodeError):
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

    @property
    def current_char(self):
        if self.idx >= len(self.source):
            return CharacterStream.END_CHAR
        return self.source[self.idx]

    @property
    def current_class(self):
        if self.idx >= len(self.source):
            return CharacterClass.END

        char = self.source[self.idx]
        if char.isspace():
            return CharacterClass.WHITE_SPACE
        if char.isalpha():
            return CharacterClass.LETTER
        if char.isdecimal():
            return CharacterClass.DIGIT
        return CharacterClass.OTHER

    def peek(self):
        """Returns the character after the current one without moving the cursor."""
        if self.idx + 1 >= len(self.source):
            return CharacterStream.END_CHAR
        return self.source[self.idx + 1]

    def advance(self):
        """Moves the cursor forward by one character, unless a deferred advance is pending, in which case the pending
        flag is consumed and the cursor stays put.
        """
        if self._skip_advance:
            self._skip_advance = False
            return

        if self.idx >= len(self.source):
            return
        if self.source[self.idx] == "\n":
            self.line_number += 1
        self.idx += 1

    def skip_next_advance(self):
        """Marks the current character as belonging to the next token: the next call to advance is a no-op."""
        self._skip_advance = True

    def advance_to_non_blank(self):
        """Drops any pending deferred advance, then skips whitespace."""
        self._skip_advance = False
        while self.current_class is CharacterClass.WHITE_SPACE:
            self.advance()
