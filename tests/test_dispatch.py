from __future__ import annotations

import pytest

import tigerast.tiger_ast as ast
from tigerast.dumper import ASTDumper
from tigerast.evaluator import ASTEvaluator


def sample_nodes() -> dict[type, ast.Node]:
    one = ast.IntegerLiteral(1)
    loop_var = ast.VarDecl("i", expr=one)
    return {
        ast.IntegerLiteral: one,
        ast.StringLiteral: ast.StringLiteral("s"),
        ast.BinaryOperator: ast.BinaryOperator(ast.Operator.PLUS, one, one),
        ast.Sequence: ast.Sequence([one]),
        ast.Let: ast.Let([], ast.Sequence([])),
        ast.Identifier: ast.Identifier("x"),
        ast.IfThenElse: ast.IfThenElse(one, one, one),
        ast.VarDecl: ast.VarDecl("v", expr=one),
        ast.FunDecl: ast.FunDecl("f", [], one),
        ast.FunCall: ast.FunCall("f"),
        ast.WhileLoop: ast.WhileLoop(one, one),
        ast.ForLoop: ast.ForLoop(loop_var, one, one),
        ast.Break: ast.Break(),
        ast.Assign: ast.Assign(ast.Identifier("x"), one),
    }


def make_recorder() -> type:
    handlers = {
        f"visit_{kind.__name__}": (lambda self, node, _name=kind.__name__: _name)
        for kind in ast.NODE_KINDS
    }
    return type("Recorder", (ast.ASTVisitor,), handlers)


def test_every_kind_has_an_abstract_handler() -> None:
    expected = {f"visit_{kind.__name__}" for kind in ast.NODE_KINDS}
    assert ast.ASTVisitor.__abstractmethods__ == frozenset(expected)
    assert len(ast.NODE_KINDS) == 14


def test_every_node_class_is_a_known_kind() -> None:
    concrete = {cls.__name__ for cls in ast.Node.__subclasses__()}
    assert concrete == {kind.__name__ for kind in ast.NODE_KINDS}


@pytest.mark.parametrize("kind", ast.NODE_KINDS, ids=lambda k: k.__name__)
def test_accept_routes_to_matching_handler(kind: type) -> None:
    node = sample_nodes()[kind]
    assert node.accept(make_recorder()()) == kind.__name__
    assert node.kind == kind.__name__


def test_incomplete_visitor_cannot_be_instantiated() -> None:
    handlers = {
        f"visit_{kind.__name__}": (lambda self, node: None)
        for kind in ast.NODE_KINDS
        if kind is not ast.Break
    }
    Partial = type("Partial", (ast.ASTVisitor,), handlers)
    with pytest.raises(TypeError):
        Partial()


def test_both_traversals_are_complete() -> None:
    assert not ASTDumper.__abstractmethods__
    assert not ASTEvaluator.__abstractmethods__
