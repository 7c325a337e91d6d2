from __future__ import annotations

import io
from pathlib import Path

from tigerast.cli import TigerTool, main
from tigerast.options import DumpOptions


def write(tmp_path: Path, name: str, source: str) -> Path:
    path = tmp_path / name
    path.write_text(source)
    return path


def test_dump_and_eval(tmp_path: Path, capsys) -> None:
    path = write(tmp_path, "arith.tig", "(3 + 4) * 2")
    assert main([str(path), "--eval"]) == 0
    assert capsys.readouterr().out == "((3+4)*2)\n14\n"


def test_dump_only(tmp_path: Path, capsys) -> None:
    path = write(tmp_path, "seq.tig", "(1; 2)")
    assert main([str(path), "--indent", "4"]) == 0
    assert capsys.readouterr().out == "(\n    1;\n    2\n)\n"


def test_unsupported_evaluation_fails(tmp_path: Path, capsys) -> None:
    path = write(tmp_path, "call.tig", "f(1)")
    assert main([str(path), "--eval"]) == 1
    captured = capsys.readouterr()
    assert captured.out == "f(1)\n"
    assert "Evaluate: unsupported: FunCall" in captured.err
    assert "call.tig:1:1" in captured.err


def test_syntax_error_fails(tmp_path: Path, capsys) -> None:
    path = write(tmp_path, "bad.tig", "let var in end")
    assert main([str(path)]) == 1
    assert "SyntaxError" in capsys.readouterr().err


def test_missing_file_fails(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "missing.tig")]) == 1
    assert "IOError" in capsys.readouterr().err


def test_tool_process_str() -> None:
    out = io.StringIO()
    tool = TigerTool(DumpOptions(evaluate=True), out=out)
    assert tool.process_str("if 0 then 7 else 99") == 99
    assert out.getvalue() == "if 0 then 7 else 99\n99\n"
