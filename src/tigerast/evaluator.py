"""
Stack evaluator for the arithmetic/conditional subset of Tiger.

Only IntegerLiteral, BinaryOperator, Sequence and IfThenElse are supported;
every other kind fails with UnsupportedNodeError and no value is produced.
"""

import logging
import operator
from typing import Callable, Dict, List, Optional

from tigerast import tiger_ast as ast
from tigerast.errors import (
    DivisionByZeroError, NestingTooDeepError, StackUnderflowError,
    UnsupportedNodeError, node_location,
)
from tigerast.options import DumpOptions

logger = logging.getLogger(__name__)


def _divide(left: int, right: int) -> int:
    # Truncate toward zero, as Tiger integer division does.
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _compare(fn: Callable[[int, int], bool]) -> Callable[[int, int], int]:
    return lambda left, right: 1 if fn(left, right) else 0


OPERATIONS: Dict[ast.Operator, Callable[[int, int], int]] = {
    ast.Operator.PLUS: operator.add,
    ast.Operator.MINUS: operator.sub,
    ast.Operator.TIMES: operator.mul,
    ast.Operator.DIVIDE: _divide,
    ast.Operator.EQ: _compare(operator.eq),
    ast.Operator.NEQ: _compare(operator.ne),
    ast.Operator.LT: _compare(operator.lt),
    ast.Operator.LE: _compare(operator.le),
    ast.Operator.GT: _compare(operator.gt),
    ast.Operator.GE: _compare(operator.ge),
}


class ASTEvaluator(ast.ASTVisitor):
    """Evaluates an expression with an explicit operand stack."""

    def __init__(self, options: Optional[DumpOptions] = None):
        self.options = options or DumpOptions()
        self.stack: List[int] = []
        self.depth = 0

    def evaluate(self, node: ast.Node) -> int:
        """Return the value left on top of the stack by ``node``."""
        self.stack = []
        self.depth = 0
        logger.debug("Evaluating %s", node.kind)
        self._visit(node)
        self._require(1, node)
        result = self.stack[-1]
        logger.debug("Evaluated %s to %d (stack size %d)", node.kind, result, len(self.stack))
        return result

    def _visit(self, node: ast.Node) -> None:
        self.depth += 1
        if self.depth > self.options.max_depth:
            raise NestingTooDeepError(
                message=f"nesting deeper than {self.options.max_depth} levels",
                location=node_location(node),
                node=node,
            )
        node.accept(self)
        self.depth -= 1

    def _require(self, count: int, node: ast.Node) -> None:
        if len(self.stack) < count:
            logger.debug("Stack underflow at %s: need %d, have %d", node.kind, count, len(self.stack))
            raise StackUnderflowError(
                message="Evaluate: error: stack error",
                location=node_location(node),
                node=node,
                required=count,
                available=len(self.stack),
            )

    def _unsupported(self, node: ast.Node):
        logger.debug("Unsupported node %s", node.kind)
        raise UnsupportedNodeError(
            message=f"Evaluate: unsupported: {node.kind}",
            location=node_location(node),
            node=node,
            kind=node.kind,
        )

    def visit_IntegerLiteral(self, node):
        self.stack.append(node.value)

    def visit_BinaryOperator(self, node):
        self._visit(node.left)
        self._visit(node.right)
        self._require(2, node)
        right = self.stack.pop()
        left = self.stack.pop()
        if node.op is ast.Operator.DIVIDE and right == 0:
            raise DivisionByZeroError(
                message="Evaluate: error: division by zero",
                location=node_location(node),
                node=node,
            )
        self.stack.append(OPERATIONS[node.op](left, right))

    def visit_Sequence(self, node):
        for expr in node.exprs:
            self._visit(expr)

    def visit_IfThenElse(self, node):
        self._visit(node.condition)
        self._require(1, node)
        if self.stack.pop():
            self._visit(node.then_part)
        else:
            self._visit(node.else_part)

    def visit_StringLiteral(self, node):
        self._unsupported(node)

    def visit_Let(self, node):
        self._unsupported(node)

    def visit_Identifier(self, node):
        self._unsupported(node)

    def visit_VarDecl(self, node):
        self._unsupported(node)

    def visit_FunDecl(self, node):
        self._unsupported(node)

    def visit_FunCall(self, node):
        self._unsupported(node)

    def visit_WhileLoop(self, node):
        self._unsupported(node)

    def visit_ForLoop(self, node):
        self._unsupported(node)

    def visit_Break(self, node):
        self._unsupported(node)

    def visit_Assign(self, node):
        self._unsupported(node)


def evaluate(node: ast.Node, options: Optional[DumpOptions] = None) -> int:
    return ASTEvaluator(options).evaluate(node)
