from pathlib import Path
from typing import List, Optional, TextIO
import argparse
import logging
import sys

from tigerast.dumper import ASTDumper
from tigerast.errors import TigerError
from tigerast.evaluator import ASTEvaluator
from tigerast.options import DumpOptions, DEFAULT_MAX_DEPTH
from tigerast.parser import Parser

logger = logging.getLogger(__name__)


class TigerTool:
    """Parses Tiger files, dumps them and optionally evaluates them"""

    def __init__(self, options: DumpOptions = None, out: Optional[TextIO] = None):
        self.options = options or DumpOptions()
        self.out = out if out is not None else sys.stdout
        self.parser = Parser()

    def process_str(self, source: str, source_path: str = "<string>") -> Optional[int]:
        tree = self.parser.parse(source, file_path=source_path)
        ASTDumper(self.out, self.options).dump(tree)
        self.out.write("\n")
        if not self.options.evaluate:
            return None
        value = ASTEvaluator(self.options).evaluate(tree)
        self.out.write(f"{value}\n")
        return value

    def process_file(self, filepath) -> Optional[int]:
        path = Path(filepath)
        logger.debug("Processing %s", path)
        return self.process_str(path.read_text(), str(path))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tiger AST dumper and evaluator")
    parser.add_argument('files', nargs='+', help='Tiger source files')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Annotate declarations, depths and escapes')
    parser.add_argument('--eval', '-e', dest='evaluate', action='store_true',
                        help='Evaluate each file and print the integer result')
    parser.add_argument('--indent', type=int, default=2,
                        help='Spaces per indentation level (default: 2)')
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                        help=f'Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})')
    parser.add_argument('--debug', '-g', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv: List[str] = None) -> int:
    """CLI entry point"""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(name)s - %(levelname)s - %(message)s',
    )

    options = DumpOptions(
        verbose=args.verbose,
        indent=" " * args.indent,
        max_depth=args.max_depth,
        evaluate=args.evaluate,
        debug=args.debug,
    )
    tool = TigerTool(options)

    status = 0
    for file in args.files:
        try:
            tool.process_file(file)
        except TigerError as e:
            print(str(e), file=sys.stderr)
            status = 1
        except OSError as e:
            print(f"IOError: {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
