"""
doit tasks for testing and running tigerast.
Run with: doit
"""

import os
import sys

# Directories
OUTPUT_DIR = 'outputs'
GOLDEN_DIR = 'tests/golden'

# Python test files
PYTHON_TESTS = [
    'tests/test_dispatch.py',
    'tests/test_dumper.py',
    'tests/test_evaluator.py',
    'tests/test_parser.py',
    'tests/test_cli.py',
]

SOURCES = [
    'src/tigerast/tiger_ast.py',
    'src/tigerast/dumper.py',
    'src/tigerast/evaluator.py',
    'src/tigerast/lexer.py',
    'src/tigerast/parser.py',
    'src/tigerast/cli.py',
]


def ensure_output_dir():
    """Create output directory if it doesn't exist"""
    os.makedirs(OUTPUT_DIR, exist_ok=True)


def task_test_python():
    """Run Python tests"""
    def run_python_tests():
        import pytest
        return pytest.main(['-v'] + PYTHON_TESTS) == 0

    return {
        'actions': [run_python_tests],
        'file_dep': PYTHON_TESTS + SOURCES,
        'verbosity': 2,
    }


def task_dump_golden():
    """Dump the golden Tiger programs into the output directory"""
    ensure_output_dir()
    for name in sorted(os.listdir(GOLDEN_DIR)):
        if not name.endswith('.tig'):
            continue
        source = os.path.join(GOLDEN_DIR, name)
        target = os.path.join(OUTPUT_DIR, name[:-len('.tig')] + '.dump.txt')
        yield {
            'name': name,
            'actions': [f'{sys.executable} -m tigerast.cli --verbose {source} > {target}'],
            'file_dep': [source] + SOURCES,
            'targets': [target],
            'clean': True,
        }


def task_test():
    """Run all tests"""
    return {
        'actions': None,
        'task_dep': ['test_python'],
    }
