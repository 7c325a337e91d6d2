import ply.lex as lex
from tigerast.errors import TigerSyntaxError, SourceLocation
import logging

logger = logging.getLogger(__name__)

_STRING_ESCAPES = {
    'a': '\a', 'b': '\b', 't': '\t', 'n': '\n',
    'v': '\v', 'f': '\f', 'r': '\r', '"': '"', '\\': '\\',
}


class Lexer:
    # A string containing ignored characters (spaces and tabs)
    t_ignore = ' \t\r'

    # Keywords
    reserved = {
        'if': 'IF',
        'then': 'THEN',
        'else': 'ELSE',
        'while': 'WHILE',
        'do': 'DO',
        'for': 'FOR',
        'to': 'TO',
        'break': 'BREAK',
        'let': 'LET',
        'in': 'IN',
        'end': 'END',
        'var': 'VAR',
        'function': 'FUNCTION',
    }

    # List of token names
    tokens = [
        'ID', 'INT', 'STRING',
        'PLUS', 'MINUS', 'TIMES', 'DIVIDE',
        'EQ', 'NEQ', 'LT', 'LE', 'GT', 'GE', 'AND', 'OR',
        'ASSIGN', 'LPAREN', 'RPAREN', 'SEMICOLON', 'COMMA', 'COLON',
    ] + list(reserved.values())

    # Regular expression rules for simple tokens
    t_PLUS = r'\+'
    t_MINUS = r'-'
    t_TIMES = r'\*'
    t_DIVIDE = r'/'
    t_EQ = r'='
    t_NEQ = r'<>'
    t_LE = r'<='
    t_GE = r'>='
    t_LT = r'<'
    t_GT = r'>'
    t_AND = r'&'
    t_OR = r'\|'
    t_ASSIGN = r':='
    t_LPAREN = r'\('
    t_RPAREN = r'\)'
    t_SEMICOLON = r';'
    t_COMMA = r','
    t_COLON = r':'

    # Comments nest, so they are scanned by hand rather than by a regex
    def t_COMMENT(self, t):
        r'/\*'
        data = t.lexer.lexdata
        pos = t.lexer.lexpos
        depth = 1
        while depth:
            if pos >= len(data):
                raise TigerSyntaxError(
                    message="unterminated comment",
                    location=self.location(t.lineno, t.lexpos),
                )
            if data.startswith('/*', pos):
                depth += 1
                pos += 2
            elif data.startswith('*/', pos):
                depth -= 1
                pos += 2
            else:
                if data[pos] == '\n':
                    t.lexer.lineno += 1
                pos += 1
        t.lexer.lexpos = pos

    def t_ID(self, t):
        r'[a-zA-Z][a-zA-Z_0-9]*'
        # Check for reserved words
        t.type = self.reserved.get(t.value, 'ID')
        return t

    def t_INT(self, t):
        r'\d+'
        t.value = int(t.value)
        return t

    def t_STRING(self, t):
        r'"(?:\\.|[^"\\\n])*"'
        t.value = self.unescape(t.value[1:-1], t)
        return t

    # Define a rule so we can track line numbers
    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += len(t.value)

    # Error handling rule
    def t_error(self, t):
        raise TigerSyntaxError(
            message=f"illegal character {t.value[0]!r}",
            location=self.location(t.lineno, t.lexpos),
        )

    # Build the lexer
    def __init__(self, source_file: str = "<string>"):
        self.source_file = source_file
        self.lexer = lex.lex(module=self, errorlog=lex.NullLogger())

    def input(self, data: str) -> None:
        self.lexer.lineno = 1
        self.lexer.input(data)

    def token(self):
        return self.lexer.token()

    def tokenize(self, data: str) -> list:
        self.input(data)
        return list(iter(self.token, None))

    def column(self, lexpos: int) -> int:
        line_start = self.lexer.lexdata.rfind('\n', 0, lexpos) + 1
        return lexpos - line_start + 1  # Make columns 1-based

    def location(self, lineno: int, lexpos: int) -> SourceLocation:
        return SourceLocation(self.source_file, lineno, self.column(lexpos))

    def unescape(self, body: str, t) -> str:
        out = []
        i = 0
        while i < len(body):
            c = body[i]
            if c != '\\':
                out.append(c)
                i += 1
                continue
            nxt = body[i + 1]
            if nxt in _STRING_ESCAPES:
                out.append(_STRING_ESCAPES[nxt])
                i += 2
            elif len(body[i + 1:i + 4]) == 3 and body[i + 1:i + 4].isdigit():
                out.append(chr(int(body[i + 1:i + 4])))
                i += 4
            else:
                raise TigerSyntaxError(
                    message=f"invalid escape sequence \\{nxt}",
                    location=self.location(t.lineno, t.lexpos),
                )
        logger.debug("String literal %r", "".join(out))
        return "".join(out)
