"""Tree-walking evaluator for the MFL language.

Runtime values are Python ints (64-bit signed integers), floats (reals) and bools. Arithmetic and relational
operators promote to real if either operand is real. Logical operators always evaluate both operands. Every type
mismatch raises MFLRuntimeError, which aborts the rest of the program: results that were already written to the
sink stay written.
"""

import math
import operator

from mfl.lang.error import MFLRuntimeError
from mfl.syntax.lexical import TokenType
from mfl.syntax.tree import BinaryOp, Leaf, Program, RelOp, UnaryOp, ValueBinding

INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


def type_name(value):
    """Returns the MFL name of the type of value."""
    if isinstance(value, bool):  # bool is a subclass of int
        return "boolean"
    if isinstance(value, int):
        return "integer"
    return "real"


def format_value(value):
    """Returns the printed form of value: integral reals are shown without a fractional part."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def truncating_div(left, right):
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncating_mod(left, right):
    """Remainder of truncating_div: its sign follows the dividend."""
    return left - right * truncating_div(left, right)


class Evaluator:
    """Evaluates SyntaxTrees against a flat, mutable environment of name: value bindings."""
    ARITHMETIC = {
        TokenType.ADD: operator.add,
        TokenType.SUB: operator.sub,
        TokenType.MULT: operator.mul,
    }
    RELATIONAL = {
        TokenType.LT: operator.lt,
        TokenType.GT: operator.gt,
        TokenType.LTE: operator.le,
        TokenType.GTE: operator.ge,
        TokenType.EQ: operator.eq,
        TokenType.NEQ: operator.ne,
    }
    LOGICAL = {
        TokenType.AND: operator.and_,
        TokenType.OR: operator.or_,
    }

    def __init__(self, sink=print):
        self.sink = sink  # called with each formatted result
        self.env = {}

        self._handlers = {
            Program: self._program,
            ValueBinding: self._value_binding,
            BinaryOp: self._binary_op,
            RelOp: self._rel_op,
            UnaryOp: self._unary_op,
            Leaf: self._leaf,
        }

    def run(self, tree):
        """Evaluates every statement of tree in order, writing the value of each non-binding statement to the sink.
        Returns the list of formatted results.
        """
        try:
            return self.evaluate(tree.root)
        except RecursionError:
            raise MFLRuntimeError("expression nested too deeply to evaluate", diagnosis=False)

    def evaluate(self, node):
        try:
            handler = self._handlers[type(node)]
        except KeyError:
            raise MFLRuntimeError("cannot evaluate node of type '{}'", type(node).__name__, internal=True)
        return handler(node)

    def _program(self, node):
        results = []
        for statement in node.statements:
            value = self.evaluate(statement)
            if not isinstance(statement, ValueBinding):
                result = format_value(value)
                self.sink(result)
                results.append(result)
        return results

    def _value_binding(self, node):
        value = self.evaluate(node.expr)
        self.env[node.name] = value
        return value

    def _binary_op(self, node):
        # left-folded chains (a + b + c ...) are walked down their left spine, not recursively
        spine = []
        while type(node) is BinaryOp:
            spine.append(node)
            node = node.left

        value = self.evaluate(node)
        for op_node in reversed(spine):
            value = self._apply(op_node, value, self.evaluate(op_node.right))
        return value

    def _apply(self, node, left, right):
        """Applies the operator of BinaryOp node to already evaluated operands."""
        if node.op in Evaluator.LOGICAL:
            self._require(node, left, right, bool, "boolean")
            return Evaluator.LOGICAL[node.op](left, right)

        left, right = self._promote(node, left, right)
        if node.op is TokenType.MOD:
            if isinstance(left, float):
                raise MFLRuntimeError("'{}' requires integer operands, got real", node.op.value, line=node.line)
            self._check_divisor(node, right)
            return truncating_mod(left, right)

        if node.op is TokenType.DIV:
            self._check_divisor(node, right)
            if isinstance(left, float):
                return left / right
            return self._check_range(node, truncating_div(left, right))

        if node.op in Evaluator.ARITHMETIC:
            result = Evaluator.ARITHMETIC[node.op](left, right)
            return result if isinstance(result, float) else self._check_range(node, result)

        raise MFLRuntimeError("unsupported binary operator '{}'", node.op.value, line=node.line, internal=True)

    def _rel_op(self, node):
        left, right = self._promote(node, self.evaluate(node.left), self.evaluate(node.right))
        return Evaluator.RELATIONAL[node.op](left, right)

    def _unary_op(self, node):
        operand = self.evaluate(node.operand)
        if node.op is not TokenType.NOT:
            raise MFLRuntimeError("unsupported unary operator '{}'", node.op.value, line=node.line, internal=True)

        self._require(node, operand, operand, bool, "boolean")
        return not operand

    def _leaf(self, node):
        token = node.token

        if token.kind is TokenType.TRUE:
            return True
        if token.kind is TokenType.FALSE:
            return False

        if token.kind is TokenType.ID:
            if token.text not in self.env:
                raise MFLRuntimeError("'{}' is not defined", token.text, line=node.line)
            return self.env[token.text]

        try:
            if token.kind is TokenType.INT:
                return self._check_range(node, int(token.text))
            return float(token.text)
        except ValueError:
            raise MFLRuntimeError("malformed {} '{}'", (token.kind.value, token.text), line=node.line)

    # ---------- TYPE CHECKS ----------
    @staticmethod
    def _require(node, left, right, cls, expected):
        """Raises MFLRuntimeError unless both operands are instances of cls."""
        for value in (left, right):
            if not isinstance(value, cls):
                msg = "'{}' expects " + expected + " operands, got {} '{}'"
                raise MFLRuntimeError(msg, (node.op.value, type_name(value), format_value(value)), line=node.line)

    @staticmethod
    def _promote(node, left, right):
        """Checks that both operands are numeric; if either is real, converts both to real."""
        for value in (left, right):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                msg = "'{}' expects numeric operands, got {} '{}'"
                raise MFLRuntimeError(msg, (node.op.value, type_name(value), format_value(value)), line=node.line)

        if isinstance(left, float) or isinstance(right, float):
            return float(left), float(right)
        return left, right

    @staticmethod
    def _check_divisor(node, divisor):
        if divisor == 0:
            raise MFLRuntimeError("'{}' by zero", node.op.value, line=node.line)

    @staticmethod
    def _check_range(node, value):
        if not INT_MIN <= value <= INT_MAX:
            raise MFLRuntimeError("integer overflow: '{}' does not fit in 64 bits", str(value), line=node.line)
        return value
