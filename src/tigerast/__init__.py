"""Tiger AST traversals.

Submodules:
- tiger_ast: node model and the visitor dispatch contract
- dumper: pretty-printer with optional resolution diagnostics
- evaluator: stack evaluator for the integer/conditional subset
- lexer, parser: ply front end producing unresolved trees
- errors: typed failures and source locations
- options: DumpOptions configuration
- cli: `tigerast` command line tool
"""

from .dumper import ASTDumper, dump
from .evaluator import ASTEvaluator, evaluate
from .options import DumpOptions

__all__ = [
    "ASTDumper",
    "ASTEvaluator",
    "DumpOptions",
    "dump",
    "evaluate",
]
