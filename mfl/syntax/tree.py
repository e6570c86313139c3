"""Abstract syntax tree for the MFL language.

The set of node types is closed: Program, ValueBinding, BinaryOp, RelOp, UnaryOp and Leaf. Nodes are immutable,
own their children exclusively and compare structurally (source line numbers are informational and are ignored by
equality).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Tuple

from mfl.syntax.lexical import Token, TokenType


class SyntaxNode(ABC):
    """Superclass of every AST node."""
    INDENT = "  "

    @abstractmethod
    def children(self):
        """Returns the child nodes of this node, in evaluation order."""

    @abstractmethod
    def label(self):
        """Returns the header of this node as shown by display."""

    def display(self, indents=0):
        """Recursively displays the subtree rooted at this node.

        Format:
        <label>(
          <child label>(
            ...
          )
        )
        """
        pad = SyntaxNode.INDENT * indents
        lines = [f"{pad}{self.label()}("]
        lines += [child.display(indents + 1) for child in self.children()]
        lines.append(f"{pad})")
        return "\n".join(lines)


@dataclass(frozen=True)
class Program(SyntaxNode):
    statements: Tuple[SyntaxNode, ...] = ()
    line: int = field(default=1, compare=False)

    def children(self):
        return self.statements

    def label(self):
        return "Prog"


@dataclass(frozen=True)
class ValueBinding(SyntaxNode):
    """val <name> := <expr>"""
    name: str
    expr: SyntaxNode
    line: int = field(default=1, compare=False)

    def children(self):
        return (self.expr,)

    def label(self):
        return f"Val[{self.name}]"


@dataclass(frozen=True)
class BinaryOp(SyntaxNode):
    op: TokenType
    left: SyntaxNode
    right: SyntaxNode
    line: int = field(default=1, compare=False)

    def children(self):
        return self.left, self.right

    def label(self):
        return f"BinOp[{self.op.name}]"


@dataclass(frozen=True)
class RelOp(BinaryOp):
    """Binary node whose operator is relational: its operands are numeric and its result is boolean."""

    def label(self):
        return f"RelOp[{self.op.name}]"


@dataclass(frozen=True)
class UnaryOp(SyntaxNode):
    op: TokenType
    operand: SyntaxNode
    line: int = field(default=1, compare=False)

    def children(self):
        return (self.operand,)

    def label(self):
        return f"UnaryOp[{self.op.name}]"


@dataclass(frozen=True)
class Leaf(SyntaxNode):
    token: Token
    line: int = field(default=1, compare=False)

    KINDS = frozenset({TokenType.ID, TokenType.INT, TokenType.REAL, TokenType.TRUE, TokenType.FALSE})

    def __post_init__(self):
        if self.token.kind not in Leaf.KINDS:
            raise ValueError(f"{self.token} cannot be a leaf")

    def children(self):
        return ()

    def label(self):
        return f"Token({self.token})"

    def display(self, indents=0):
        return SyntaxNode.INDENT * indents + self.label()


@dataclass(frozen=True)
class SyntaxTree:
    """Wrapper around the root of a parsed program."""
    root: Program

    def display(self):
        return self.root.display()
