"""
Integration tests for the jsinfer command line.
"""

import json
import shutil
from pathlib import Path

import pytest

from jsinfer import __version__
from jsinfer.cli import EXIT_BAD_INPUT, EXIT_INFERENCE_ERROR, EXIT_OK, main

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def sample(tmp_path):
    """Copy a fixture program into a temporary directory."""

    def _sample(filename: str):
        target = tmp_path / filename
        shutil.copy(FIXTURES_DIR / filename, target)
        return target

    return _sample


@pytest.fixture
def script(tmp_path):
    """Write a script to a temporary file."""

    def _script(source: str, filename: str = "input.js"):
        path = tmp_path / filename
        path.write_text(source, encoding="utf-8")
        return path

    return _script


class TestIdentifiersCommand:
    """Tests for `jsinfer identifiers`."""

    def test_plain_output(self, script, capsys):
        path = script("var i = 1; function f() { return 's'; }")
        assert main(["identifiers", str(path)]) == EXIT_OK
        out = capsys.readouterr().out
        assert "i: int" in out
        assert "f: func<string>" in out

    def test_json_recursive(self, sample, capsys):
        path = sample("binary_search.js")
        assert main(["identifiers", str(path), "--recursive", "--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        entry = data["sortedIndex"]
        assert entry["dataType"] == "func<int>"
        assert list(entry["identifiers"]) == ["haystack", "needle", "low", "high", "current"]
        assert entry["identifiers"]["low"] == {"dataType": "int"}

    def test_recursive_tree_is_indented(self, sample, capsys):
        path = sample("nested_scope.js")
        assert main(["ids", str(path), "-r"]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert "nestedScope: func<int>" in lines
        assert "    y: int" in lines

    def test_max_type_depth_option(self, script, capsys):
        path = script("var a = []; a.push(a);")
        assert main(["--max-type-depth", "1", "identifiers", str(path)]) == EXIT_OK
        assert "a: array<array>" in capsys.readouterr().out


class TestOutlineCommand:
    """Tests for `jsinfer outline`."""

    def test_outline(self, script, capsys):
        path = script("var x = 1;")
        assert main(["outline", str(path)]) == EXIT_OK
        assert capsys.readouterr().out.splitlines() == [
            "Program",
            "  VariableDeclaration",
            "    VariableDeclarator",
            "      Identifier",
            "      Literal",
        ]


class TestExitCodes:
    """Tests for failure handling."""

    def test_missing_file(self, tmp_path, capsys):
        assert main(["identifiers", str(tmp_path / "missing.js")]) == EXIT_BAD_INPUT
        assert "cannot read" in capsys.readouterr().err

    def test_syntax_error(self, script, capsys):
        path = script("var = ;")
        assert main(["identifiers", str(path)]) == EXIT_BAD_INPUT
        assert "Syntax error" in capsys.readouterr().err

    def test_unsupported_kind(self, script, capsys):
        path = script("var f = (x) => x;")
        assert main(["identifiers", str(path)]) == EXIT_INFERENCE_ERROR
        assert "Unknown node kind: ArrowFunctionExpression" in capsys.readouterr().err

    def test_invalid_depth(self, script, capsys):
        path = script("var i = 1;")
        assert main(["--max-type-depth", "0", "identifiers", str(path)]) == EXIT_BAD_INPUT

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_OK
        assert "usage: jsinfer" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
