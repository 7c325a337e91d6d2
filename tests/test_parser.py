import unittest

from tigerast.parser import Parser
from tigerast.lexer import Lexer
from tigerast.dumper import dump
from tigerast.evaluator import evaluate
from tigerast.errors import TigerSyntaxError
import tigerast.tiger_ast as ast


class TestLexer(unittest.TestCase):
    def setUp(self):
        self.lexer = Lexer()

    def test_keywords_and_operators(self):
        tokens = self.lexer.tokenize("let var x := 1 <> 2 in x end")
        self.assertEqual(
            [t.type for t in tokens],
            ['LET', 'VAR', 'ID', 'ASSIGN', 'INT', 'NEQ', 'INT', 'IN', 'ID', 'END'],
        )

    def test_nested_comments_are_skipped(self):
        tokens = self.lexer.tokenize("1 /* a /* b */ c */ + 2")
        self.assertEqual([t.type for t in tokens], ['INT', 'PLUS', 'INT'])

    def test_string_escapes(self):
        tokens = self.lexer.tokenize(r'"a\tb\"c\\d\065"')
        self.assertEqual(tokens[0].value, 'a\tb"c\\dA')

    def test_illegal_character(self):
        with self.assertRaises(TigerSyntaxError):
            self.lexer.tokenize("1 # 2")

    def test_unterminated_comment(self):
        with self.assertRaises(TigerSyntaxError):
            self.lexer.tokenize("1 /* never closed")


class TestParser(unittest.TestCase):
    def setUp(self):
        self.parser = Parser()

    def parse(self, source):
        return self.parser.parse(source, file_path="test.tig")

    def test_precedence(self):
        tree = self.parse("1 + 2 * 3")
        self.assertIsInstance(tree, ast.BinaryOperator)
        self.assertEqual(tree.op, ast.Operator.PLUS)
        self.assertIsInstance(tree.right, ast.BinaryOperator)
        self.assertEqual(tree.right.op, ast.Operator.TIMES)

    def test_grouping_round_trip(self):
        tree = self.parse("(3 + 4) * 2")
        self.assertEqual(dump(tree), "((3+4)*2)")
        self.assertEqual(evaluate(tree), 14)

    def test_sequence(self):
        tree = self.parse("(1; 2; 3)")
        self.assertIsInstance(tree, ast.Sequence)
        self.assertEqual(len(tree.exprs), 3)
        self.assertEqual(evaluate(tree), 3)

    def test_empty_parens(self):
        tree = self.parse("()")
        self.assertIsInstance(tree, ast.Sequence)
        self.assertEqual(tree.exprs, [])

    def test_if_without_else(self):
        tree = self.parse("if 1 then 2")
        self.assertIsInstance(tree, ast.IfThenElse)
        self.assertIsInstance(tree.else_part, ast.Sequence)
        self.assertEqual(tree.else_part.exprs, [])

    def test_dangling_else_binds_inner(self):
        tree = self.parse("if 1 then if 0 then 2 else 3")
        self.assertIsInstance(tree.then_part, ast.IfThenElse)
        self.assertIsInstance(tree.then_part.else_part, ast.IntegerLiteral)
        self.assertEqual(evaluate(tree), 3)

    def test_unary_minus(self):
        tree = self.parse("-5 * 2")
        self.assertEqual(dump(tree), "((0-5)*2)")
        self.assertEqual(evaluate(tree), -10)

    def test_and_or_are_conditionals(self):
        self.assertEqual(evaluate(self.parse("1 & 0")), 0)
        self.assertEqual(evaluate(self.parse("1 & 7")), 1)
        self.assertEqual(evaluate(self.parse("0 | 3")), 1)
        self.assertEqual(evaluate(self.parse("0 | 0")), 0)

    def test_let_with_declarations(self):
        tree = self.parse("let var a: int := 1 function f(x: int, y: string) = x in f(a, \"s\") end")
        self.assertIsInstance(tree, ast.Let)
        var, fun = tree.decls
        self.assertEqual(var.type_name, "int")
        self.assertEqual([p.name for p in fun.params], ["x", "y"])
        self.assertIsNone(fun.type_name)
        call = tree.sequence.exprs[0]
        self.assertIsInstance(call, ast.FunCall)
        self.assertEqual(len(call.args), 2)

    def test_loops_and_assignment(self):
        tree = self.parse("for i := 1 to 3 do (x := i; if i = 2 then break)")
        self.assertIsInstance(tree, ast.ForLoop)
        self.assertEqual(tree.variable.name, "i")
        self.assertIsInstance(tree.variable.expr, ast.IntegerLiteral)
        assign, cond = tree.body.exprs
        self.assertIsInstance(assign, ast.Assign)
        self.assertIsInstance(cond.then_part, ast.Break)
        self.assertIsInstance(self.parse("while 1 do break"), ast.WhileLoop)

    def test_while_dump(self):
        tree = self.parse("while x < 10 do x := x + 1")
        self.assertEqual(dump(tree), "while (x<10) do\n  x := (x+1)\n")

    def test_locations(self):
        tree = self.parse("\n  x")
        self.assertEqual(str(tree.loc), "test.tig:2:3")

    def test_syntax_error(self):
        with self.assertRaises(TigerSyntaxError) as cm:
            self.parse("1 +")
        self.assertIn("unexpected end of input", str(cm.exception))
        with self.assertRaises(TigerSyntaxError):
            self.parse("let in")

    def test_comparison_is_non_associative(self):
        with self.assertRaises(TigerSyntaxError):
            self.parse("1 = 2 = 3")


if __name__ == '__main__':
    unittest.main()
