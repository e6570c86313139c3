import dataclasses
import unittest

from mfl.syntax.lexical import Token, TokenType
from mfl.syntax.tree import BinaryOp, Leaf, Program, RelOp, SyntaxTree, UnaryOp, ValueBinding


class SyntaxNodeTestCase(unittest.TestCase):

    def test_leaf_kinds(self):
        should_raise = [TokenType.SEMI, TokenType.ADD, TokenType.VAL, TokenType.EOF, TokenType.UNKNOWN]
        for kind in should_raise:
            self.assertRaises(ValueError, Leaf, Token(kind, ""))

        should_pass = [TokenType.ID, TokenType.INT, TokenType.REAL, TokenType.TRUE, TokenType.FALSE]
        for kind in should_pass:
            self.assertEqual(kind, Leaf(Token(kind, "x")).token.kind)

    def test_equality(self):
        one = Leaf(Token(TokenType.INT, "1"))
        two = Leaf(Token(TokenType.INT, "2"))

        self.assertEqual(Leaf(Token(TokenType.INT, "1"), line=1), Leaf(Token(TokenType.INT, "1"), line=9))
        self.assertNotEqual(one, two)
        self.assertNotEqual(BinaryOp(TokenType.LT, one, two), RelOp(TokenType.LT, one, two))
        self.assertEqual(RelOp(TokenType.LT, one, two), RelOp(TokenType.LT, one, two))

    def test_immutable(self):
        node = ValueBinding("x", Leaf(Token(TokenType.INT, "1")))
        self.assertRaises(dataclasses.FrozenInstanceError, setattr, node, "name", "y")

    def test_children(self):
        one = Leaf(Token(TokenType.INT, "1"))
        cases = {
            Program((one, one)): (one, one),
            ValueBinding("x", one): (one,),
            BinaryOp(TokenType.ADD, one, one): (one, one),
            UnaryOp(TokenType.NOT, one): (one,),
            one: (),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tuple(case.children()), case)

    def test_display(self):
        tree = SyntaxTree(Program((ValueBinding("t", Leaf(Token(TokenType.TRUE, "true"))),)))
        self.assertEqual("Prog(\n  Val[t](\n    Token(TRUE)\n  )\n)", tree.display())
        self.assertEqual("Prog(\n)", SyntaxTree(Program()).display())


if __name__ == '__main__':
    unittest.main()
