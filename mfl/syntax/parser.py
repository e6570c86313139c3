"""Recursive-descent parser for the MFL language. Consumes Tokens from a Lexer with one token of lookahead and builds
a SyntaxTree.

Grammar (precedence from lowest to highest):

```
<program> ::= { <val> ";" }
<val>     ::= "val" <id> ":=" <expr> | <expr>
<expr>    ::= <relop> { ( "and" | "or" ) <relop> }
<relop>   ::= <addexpr> [ ( "<" | ">" | "<=" | ">=" | "=" | "!=" ) <addexpr> ]   ; non-associative
<addexpr> ::= <term> { ( "+" | "-" ) <term> }
<term>    ::= "not" <relop> | <factor> { ( "*" | "/" | "mod" ) <factor> }
<factor>  ::= <id> | <int> | <real> | "true" | "false" | "(" <expr> ")"
```

Repeated binary operators of the same level fold to the left: a - b - c = ((a - b) - c).

Every production method returns with self.current_token set to the first token it did not consume. Parsing stops
at the first error: no partial tree is ever returned.
"""

from mfl.lang.error import MFLSyntaxError
from mfl.syntax.lexical import Lexer, TokenType
from mfl.syntax.tree import BinaryOp, Leaf, Program, RelOp, SyntaxTree, UnaryOp, ValueBinding


class Parser:
    """Governs the parsing of a single program."""
    LOGICAL = (TokenType.AND, TokenType.OR)
    RELATIONAL = (TokenType.LT, TokenType.GT, TokenType.LTE, TokenType.GTE, TokenType.EQ, TokenType.NEQ)
    ADDITIVE = (TokenType.ADD, TokenType.SUB)
    MULTIPLICATIVE = (TokenType.MULT, TokenType.DIV, TokenType.MOD)
    LEAVES = (TokenType.ID, TokenType.INT, TokenType.REAL, TokenType.TRUE, TokenType.FALSE)

    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = None  # lookahead, primed by parse
        self.current_line = 1      # source line of the lookahead

    @classmethod
    def from_source(cls, source):
        return cls(Lexer(source))

    @classmethod
    def from_file(cls, path):
        return cls(Lexer.from_file(path))

    def parse(self):
        """Parses the whole token stream and returns a SyntaxTree. Raises MFLSyntaxError on the first error."""
        self.advance()
        try:
            return SyntaxTree(self.program())
        except RecursionError:
            raise MFLSyntaxError("expression nested too deeply to parse", line=self.current_line, diagnosis=False)

    # ---------- TOKEN HANDLING ----------
    def advance(self):
        """Replaces the lookahead with the next token from the lexer."""
        self.current_token = self.lexer.next_token()
        self.current_line = self.lexer.line_number

    def eat(self, kind):
        """Consumes and returns the lookahead if it is of the given kind, else raises MFLSyntaxError."""
        token = self.current_token
        if token.kind is not kind:
            self.error(f"'{kind.value}'" if kind is not TokenType.ID else kind.value)
        self.advance()
        return token

    def error(self, expected):
        token = self.current_token
        got = token.text if token.text else token.kind.value
        raise MFLSyntaxError("unexpected '{}', expected {}", (got, expected), line=self.current_line)

    # ---------- PRODUCTIONS ----------
    def program(self):
        line = self.current_line
        statements = []

        while self.current_token.kind is not TokenType.EOF:
            statements.append(self.val())
            self.eat(TokenType.SEMI)

        return Program(tuple(statements), line=line)

    def val(self):
        if self.current_token.kind is not TokenType.VAL:
            return self.expr()

        line = self.current_line
        self.eat(TokenType.VAL)
        name = self.eat(TokenType.ID).text
        self.eat(TokenType.ASSIGN)
        return ValueBinding(name, self.expr(), line=line)

    def expr(self):
        return self._fold(self.relop, Parser.LOGICAL)

    def relop(self):
        left = self.addexpr()
        if self.current_token.kind not in Parser.RELATIONAL:
            return left

        line = self.current_line
        op = self.current_token.kind
        self.advance()
        return RelOp(op, left, self.addexpr(), line=line)

    def addexpr(self):
        return self._fold(self.term, Parser.ADDITIVE)

    def term(self):
        if self.current_token.kind is TokenType.NOT:
            line = self.current_line
            self.advance()
            return UnaryOp(TokenType.NOT, self.relop(), line=line)

        return self._fold(self.factor, Parser.MULTIPLICATIVE)

    def factor(self):
        token = self.current_token
        line = self.current_line

        if token.kind in Parser.LEAVES:
            self.advance()
            return Leaf(token, line=line)

        if token.kind is TokenType.LPAREN:
            self.advance()
            node = self.expr()
            self.eat(TokenType.RPAREN)
            return node

        self.error("an identifier, a literal or '('")

    def _fold(self, operand, operators):
        """Parses operand { operator operand }, folding the results into left-associative BinaryOps."""
        left = operand()
        while self.current_token.kind in operators:
            line = self.current_line
            op = self.current_token.kind
            self.advance()
            left = BinaryOp(op, left, operand(), line=line)
        return left
