"""
AST dumper for Tiger.
Renders a resolved tree back into concrete syntax, optionally annotated with
resolution diagnostics (declaration sites, depth differences, escapes).
"""

import io
import logging
import sys
from typing import List, Optional, TextIO

from tigerast import tiger_ast as ast
from tigerast.errors import NestingTooDeepError, node_location
from tigerast.options import DumpOptions

logger = logging.getLogger(__name__)

_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\a': '\\a',
    '\b': '\\b',
    '\t': '\\t',
    '\n': '\\n',
    '\v': '\\v',
    '\f': '\\f',
    '\r': '\\r',
}


def escape_string(value: str) -> str:
    """Quote a string literal; only the nine characters above are escaped."""
    return '"' + "".join(_ESCAPES.get(c, c) for c in value) + '"'


class ASTDumper(ast.ASTVisitor):
    """Pretty-printer producing Tiger concrete syntax.

    Text is collected in a private buffer and written to ``out`` only once the
    whole tree has been rendered, so a failed dump leaves the sink untouched.
    """

    def __init__(self, out: Optional[TextIO] = None, options: Optional[DumpOptions] = None):
        self.out = out if out is not None else sys.stdout
        self.options = options or DumpOptions()
        self.indent_level = 0
        self.depth = 0
        self._buffer: List[str] = []

    @property
    def verbose(self) -> bool:
        return self.options.verbose

    def dump(self, node: ast.Node) -> None:
        self.indent_level = 0
        self.depth = 0
        self._buffer = []
        logger.debug("Dumping %s (verbose=%s)", node.kind, self.verbose)
        self._visit(node)
        self.out.write("".join(self._buffer))
        self._buffer = []

    # Output primitives

    def _write(self, text: str) -> None:
        self._buffer.append(text)

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

    def nl(self) -> None:
        self._write("\n" + self.options.indent * self.indent_level)

    def inc(self) -> None:
        self.indent_level += 1

    def dec(self) -> None:
        self.indent_level -= 1

    def dnl(self) -> None:
        self.dec()
        self.nl()

    def _lines(self, nodes: List[ast.Node], separator: str = "") -> None:
        for i, node in enumerate(nodes):
            if i and separator:
                self._write(separator)
            self.nl()
            self._visit(node)

    def _comma_list(self, nodes: List[ast.Node]) -> None:
        for i, node in enumerate(nodes):
            if i:
                self._write(", ")
            self._visit(node)

    # Visitors

    def visit_IntegerLiteral(self, node):
        self._write(str(node.value))

    def visit_StringLiteral(self, node):
        self._write(escape_string(node.value))

    def visit_BinaryOperator(self, node):
        self._write("(")
        self._visit(node.left)
        self._write(node.op.symbol)
        self._visit(node.right)
        self._write(")")

    def visit_Sequence(self, node):
        self._write("(")
        self.inc()
        self._lines(node.exprs, ";")
        self.dnl()
        self._write(")")

    def visit_Let(self, node):
        self._write("let")
        self.inc()
        self._lines(node.decls)
        self.dnl()
        self._write("in")
        self.inc()
        self._lines(node.sequence.exprs, ";")
        self.dnl()
        self._write("end")

    def visit_Identifier(self, node):
        self._write(node.name)
        if self.verbose and node.decl is not None:
            self._write(f"/*decl:{node.decl.loc}")
            depth_diff = node.depth - node.decl.depth
            if depth_diff:
                self._write(f" depth_diff:{depth_diff}")
            self._write("*/")

    def visit_IfThenElse(self, node):
        self._write("if ")
        self.inc()
        self._visit(node.condition)
        self.dec()
        self._write(" then ")
        self.inc()
        self._visit(node.then_part)
        self.dec()
        self._write(" else ")
        self.inc()
        self._visit(node.else_part)
        self.dec()

    def visit_VarDecl(self, node):
        if node.expr is not None:
            self._write("var ")
        self._write(node.name)
        if self.verbose and node.escapes:
            self._write("/*e*/")
        if node.type_name:
            self._write(f": {node.type_name}")
        elif node.type not in (ast.Type.UNDEF, ast.Type.VOID):
            self._write(f": {ast.type_display_name(node.type)}")
        if node.expr is not None:
            self._write(" := ")
            self._visit(node.expr)

    def visit_FunDecl(self, node):
        self._write(f"function {node.name}")
        if self.verbose and node.name != node.external_name:
            self._write(f"/*{node.external_name}*/")
        self._write("(")
        self._comma_list(node.params)
        self._write(")")
        if node.type_name:
            self._write(f": {node.type_name}")
        self._write(" = ")
        self.inc()
        self._visit(node.body)
        self.dec()

    def visit_FunCall(self, node):
        self._write(node.func_name)
        if self.verbose and node.decl is not None:
            self._write(f"/*decl:{node.decl.loc}*/")
        self._write("(")
        self._comma_list(node.args)
        self._write(")")

    def visit_WhileLoop(self, node):
        self._write("while ")
        self._visit(node.condition)
        self._write(" do")
        self.inc()
        self.nl()
        self._visit(node.body)
        self.dnl()

    def visit_ForLoop(self, node):
        variable = node.variable
        self._write(f"for {variable.name}")
        if self.verbose and variable.escapes:
            self._write("/*e*/")
        self._write(" := ")
        self._visit(variable.expr)
        self._write(" to ")
        self._visit(node.high)
        self._write(" do")
        self.inc()
        self.nl()
        self._visit(node.body)
        self.dnl()

    def visit_Break(self, node):
        self._write("break")
        if self.verbose and node.loop is not None:
            self._write(f"/*loop:{node.loop.loc}*/")

    def visit_Assign(self, node):
        self._visit(node.lhs)
        self._write(" := ")
        self._visit(node.rhs)


def dump(node: ast.Node, verbose: bool = False, options: Optional[DumpOptions] = None) -> str:
    """Render ``node`` and return the text."""
    if options is None:
        options = DumpOptions(verbose=verbose)
    out = io.StringIO()
    ASTDumper(out, options).dump(node)
    return out.getvalue()
