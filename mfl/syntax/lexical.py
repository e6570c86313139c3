"""Lexical analysis for the MFL language. Turns a CharacterStream into Tokens, one at a time, on demand.

Tokens can be loosely defined as follows:

```
<id>       ::= <letter> { <letter> | <digit> }     ; unless it is a keyword
<int>      ::= <digit> { <digit> }
<real>     ::= <int> "." { <digit> } | "." <digit> { <digit> }
<keyword>  ::= "val" | "not" | "and" | "or" | "mod" | "true" | "false"
<symbol>   ::= "+" | "-" | "*" | "/" | "(" | ")" | ";" | ":=" | "=" | "!=" | "<" | "<=" | ">" | ">="
```

Identifiers, integers and reals are scanned by maximal munch. Literal text is kept verbatim: numeric conversion
happens at evaluation time. Anything that is not a valid token becomes an UNKNOWN token so that the parser can
report it.
"""

from dataclasses import dataclass
from enum import Enum

from mfl.syntax.stream import CharacterClass, CharacterStream


class TokenType(Enum):
    ID = "identifier"
    INT = "integer literal"
    REAL = "real literal"
    TRUE = "true"
    FALSE = "false"

    VAL = "val"
    NOT = "not"
    AND = "and"
    OR = "or"
    MOD = "mod"

    ADD = "+"
    SUB = "-"
    MULT = "*"
    DIV = "/"
    LT = "<"
    GT = ">"
    LTE = "<="
    GTE = ">="
    EQ = "="
    NEQ = "!="

    LPAREN = "("
    RPAREN = ")"
    SEMI = ";"
    ASSIGN = ":="

    EOF = "end of input"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Token:
    """Immutable (kind, literal text) pair."""
    kind: TokenType
    text: str

    def __str__(self):
        if self.kind in (TokenType.ID, TokenType.INT, TokenType.REAL, TokenType.UNKNOWN):
            return f"{self.kind.name}({self.text})"
        return self.kind.name


class Lexer:
    """Pull-based tokenizer: each call to next_token scans exactly one token from the stream."""
    KEYWORDS = {
        "val": TokenType.VAL,
        "not": TokenType.NOT,
        "and": TokenType.AND,
        "or": TokenType.OR,
        "mod": TokenType.MOD,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
    }

    SYMBOLS = {
        "+": TokenType.ADD,
        "-": TokenType.SUB,
        "*": TokenType.MULT,
        "/": TokenType.DIV,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ";": TokenType.SEMI,
        "=": TokenType.EQ,
    }

    # first char: (token if followed by "=", token otherwise; None means the pair is mandatory)
    PAIRED_SYMBOLS = {
        ":": (TokenType.ASSIGN, None),
        "!": (TokenType.NEQ, None),
        "<": (TokenType.LTE, TokenType.LT),
        ">": (TokenType.GTE, TokenType.GT),
    }

    def __init__(self, source=None, stream=None):
        self.stream = stream if stream is not None else CharacterStream(source)

    @classmethod
    def from_file(cls, path):
        return cls(stream=CharacterStream.from_file(path))

    @property
    def line_number(self):
        return self.stream.line_number

    def next_token(self):
        """Returns the next Token in the stream. Once the input is exhausted, returns EOF tokens forever."""
        self.stream.advance_to_non_blank()

        char_class = self.stream.current_class
        if char_class is CharacterClass.LETTER:
            return self._read_word()
        if char_class is CharacterClass.DIGIT:
            return self._read_number()
        if char_class is CharacterClass.OTHER:
            return self._read_symbol()
        return Token(TokenType.EOF, "")

    def tokens(self):
        """Yields tokens up to and including the first EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return

    def _read_while(self, *classes):
        """Consumes a maximal run of characters belonging to classes and returns it."""
        value = ""
        while self.stream.current_class in classes:
            value += self.stream.current_char
            self.stream.advance()
        return value

    def _read_word(self):
        value = self._read_while(CharacterClass.LETTER, CharacterClass.DIGIT)
        self.stream.skip_next_advance()  # the char just read is part of the next token

        if value in Lexer.KEYWORDS:
            return Token(Lexer.KEYWORDS[value], value)
        return Token(TokenType.ID, value)

    def _read_number(self):
        value = self._read_while(CharacterClass.DIGIT)

        if self.stream.current_char == ".":
            value += "."
            self.stream.advance()
            value += self._read_while(CharacterClass.DIGIT)
            self.stream.skip_next_advance()
            return Token(TokenType.REAL, value)

        self.stream.skip_next_advance()
        return Token(TokenType.INT, value)

    def _read_symbol(self):
        char = self.stream.current_char

        if char == "." and self.stream.peek().isdecimal():  # real with just a leading dot
            self.stream.advance()
            value = "." + self._read_while(CharacterClass.DIGIT)
            self.stream.skip_next_advance()
            return Token(TokenType.REAL, value)

        if char in Lexer.SYMBOLS:
            self.stream.advance()
            return Token(Lexer.SYMBOLS[char], char)

        if char in Lexer.PAIRED_SYMBOLS:
            paired, single = Lexer.PAIRED_SYMBOLS[char]
            self.stream.advance()
            if self.stream.current_char == "=":
                self.stream.advance()
                return Token(paired, char + "=")

            self.stream.skip_next_advance()
            if single is None:
                return Token(TokenType.UNKNOWN, char)
            return Token(single, char)

        self.stream.advance()
        return Token(TokenType.UNKNOWN, char)
