from dataclasses import dataclass

DEFAULT_INDENT = "  "
# A nesting level costs up to four Python frames; keep the product well under
# the interpreter's default recursion limit of 1000.
DEFAULT_MAX_DEPTH = 150


@dataclass
class DumpOptions:
    """Options shared by the dumper, the evaluator and the command line"""
    verbose: bool = False  # emit declaration/escape diagnostics
    indent: str = DEFAULT_INDENT
    max_depth: int = DEFAULT_MAX_DEPTH
    evaluate: bool = False
    debug: bool = False
