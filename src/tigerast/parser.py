import ply.yacc as yacc
from tigerast.lexer import Lexer
import tigerast.tiger_ast as ast
from tigerast.errors import TigerSyntaxError, SourceLocation
import logging

logger = logging.getLogger(__name__)

_BINARY_OPERATORS = {
    '+': ast.Operator.PLUS,
    '-': ast.Operator.MINUS,
    '*': ast.Operator.TIMES,
    '/': ast.Operator.DIVIDE,
    '=': ast.Operator.EQ,
    '<>': ast.Operator.NEQ,
    '<': ast.Operator.LT,
    '<=': ast.Operator.LE,
    '>': ast.Operator.GT,
    '>=': ast.Operator.GE,
}


class Parser:
    """Tiger expression parser.

    Builds unresolved trees: declaration references, depths, escapes and
    types keep their defaults until a resolution stage fills them in.
    """

    tokens = Lexer.tokens
    start = 'program'

    precedence = (
        ('nonassoc', 'THEN'),
        ('nonassoc', 'ELSE'),
        ('nonassoc', 'DO'),
        ('nonassoc', 'ASSIGN'),
        ('left', 'OR'),
        ('left', 'AND'),
        ('nonassoc', 'EQ', 'NEQ', 'LT', 'LE', 'GT', 'GE'),
        ('left', 'PLUS', 'MINUS'),
        ('left', 'TIMES', 'DIVIDE'),
        ('right', 'UMINUS'),
    )

    def __init__(self):
        self.lexer = Lexer()
        self.parser = yacc.yacc(
            module=self,
            start=self.start,
            debug=False,
            write_tables=False,
            errorlog=yacc.NullLogger(),
        )

    def parse(self, source: str, file_path: str = "<string>") -> ast.Node:
        """Parse source code into an AST"""
        logger.debug("Parsing %s", file_path)
        self.lexer.source_file = file_path
        self.lexer.input(source)
        return self.parser.parse(source, lexer=self.lexer.lexer)

    def loc(self, p, index: int) -> SourceLocation:
        return self.lexer.location(p.lineno(index), p.lexpos(index))

    # Grammar rules

    def p_program(self, p):
        'program : exp'
        p[0] = p[1]

    def p_exp_int(self, p):
        'exp : INT'
        p[0] = ast.IntegerLiteral(p[1], loc=self.loc(p, 1))

    def p_exp_string(self, p):
        'exp : STRING'
        p[0] = ast.StringLiteral(p[1], loc=self.loc(p, 1))

    def p_exp_identifier(self, p):
        'exp : ID'
        p[0] = ast.Identifier(p[1], loc=self.loc(p, 1))

    def p_exp_binary(self, p):
        '''exp : exp PLUS exp
               | exp MINUS exp
               | exp TIMES exp
               | exp DIVIDE exp
               | exp EQ exp
               | exp NEQ exp
               | exp LT exp
               | exp LE exp
               | exp GT exp
               | exp GE exp'''
        p[0] = ast.BinaryOperator(_BINARY_OPERATORS[p[2]], p[1], p[3], loc=self.loc(p, 2))

    def p_exp_negate(self, p):
        'exp : MINUS exp %prec UMINUS'
        loc = self.loc(p, 1)
        p[0] = ast.BinaryOperator(ast.Operator.MINUS, ast.IntegerLiteral(0, loc=loc), p[2], loc=loc)

    def p_exp_and(self, p):
        'exp : exp AND exp'
        loc = self.loc(p, 2)
        p[0] = ast.IfThenElse(
            p[1],
            ast.BinaryOperator(ast.Operator.NEQ, p[3], ast.IntegerLiteral(0, loc=loc), loc=loc),
            ast.IntegerLiteral(0, loc=loc),
            loc=loc,
        )

    def p_exp_or(self, p):
        'exp : exp OR exp'
        loc = self.loc(p, 2)
        p[0] = ast.IfThenElse(
            p[1],
            ast.IntegerLiteral(1, loc=loc),
            ast.BinaryOperator(ast.Operator.NEQ, p[3], ast.IntegerLiteral(0, loc=loc), loc=loc),
            loc=loc,
        )

    def p_exp_parens(self, p):
        'exp : LPAREN exps RPAREN'
        # A single parenthesized expression is only grouping
        if len(p[2]) == 1:
            p[0] = p[2][0]
        else:
            p[0] = ast.Sequence(p[2], loc=self.loc(p, 1))

    def p_exp_call(self, p):
        'exp : ID LPAREN args RPAREN'
        p[0] = ast.FunCall(p[1], p[3], loc=self.loc(p, 1))

    def p_exp_assign(self, p):
        'exp : ID ASSIGN exp'
        lhs = ast.Identifier(p[1], loc=self.loc(p, 1))
        p[0] = ast.Assign(lhs, p[3], loc=self.loc(p, 2))

    def p_exp_if_else(self, p):
        'exp : IF exp THEN exp ELSE exp'
        p[0] = ast.IfThenElse(p[2], p[4], p[6], loc=self.loc(p, 1))

    def p_exp_if(self, p):
        'exp : IF exp THEN exp'
        loc = self.loc(p, 1)
        p[0] = ast.IfThenElse(p[2], p[4], ast.Sequence([], loc=loc), loc=loc)

    def p_exp_while(self, p):
        'exp : WHILE exp DO exp'
        p[0] = ast.WhileLoop(p[2], p[4], loc=self.loc(p, 1))

    def p_exp_for(self, p):
        'exp : FOR ID ASSIGN exp TO exp DO exp'
        variable = ast.VarDecl(p[2], expr=p[4], type=ast.Type.INT, loc=self.loc(p, 2))
        p[0] = ast.ForLoop(variable, p[6], p[8], loc=self.loc(p, 1))

    def p_exp_break(self, p):
        'exp : BREAK'
        p[0] = ast.Break(loc=self.loc(p, 1))

    def p_exp_let(self, p):
        'exp : LET decs IN exps END'
        loc = self.loc(p, 1)
        p[0] = ast.Let(p[2], ast.Sequence(p[4], loc=self.loc(p, 3)), loc=loc)

    def p_exps(self, p):
        '''exps : empty
                | expseq'''
        p[0] = p[1] if p[1] is not None else []

    def p_expseq(self, p):
        '''expseq : exp
                  | expseq SEMICOLON exp'''
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]

    def p_args(self, p):
        '''args : empty
                | arglist'''
        p[0] = p[1] if p[1] is not None else []

    def p_arglist(self, p):
        '''arglist : exp
                   | arglist COMMA exp'''
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]

    def p_decs(self, p):
        '''decs : empty
                | decs dec'''
        p[0] = [] if len(p) == 2 else p[1] + [p[2]]

    def p_dec_var(self, p):
        'dec : VAR ID ASSIGN exp'
        p[0] = ast.VarDecl(p[2], expr=p[4], loc=self.loc(p, 2))

    def p_dec_var_typed(self, p):
        'dec : VAR ID COLON ID ASSIGN exp'
        p[0] = ast.VarDecl(p[2], type_name=p[4], expr=p[6], loc=self.loc(p, 2))

    def p_dec_function(self, p):
        'dec : FUNCTION ID LPAREN params RPAREN EQ exp'
        p[0] = ast.FunDecl(p[2], p[4], p[7], loc=self.loc(p, 2))

    def p_dec_function_typed(self, p):
        'dec : FUNCTION ID LPAREN params RPAREN COLON ID EQ exp'
        p[0] = ast.FunDecl(p[2], p[4], p[9], type_name=p[7], loc=self.loc(p, 2))

    def p_params(self, p):
        '''params : empty
                  | paramlist'''
        p[0] = p[1] if p[1] is not None else []

    def p_paramlist(self, p):
        '''paramlist : param
                     | paramlist COMMA param'''
        p[0] = [p[1]] if len(p) == 2 else p[1] + [p[3]]

    def p_param(self, p):
        'param : ID COLON ID'
        p[0] = ast.VarDecl(p[1], type_name=p[3], loc=self.loc(p, 1))

    def p_empty(self, p):
        'empty :'
        p[0] = None

    def p_error(self, p):
        if p is None:
            raise TigerSyntaxError(message="unexpected end of input",
                                   location=SourceLocation(self.lexer.source_file, 0, 0))
        raise TigerSyntaxError(
            message=f"unexpected token {p.type} ({p.value!r})",
            location=self.lexer.location(p.lineno, p.lexpos),
        )
