"""Tests for the tree-sitter JavaScript/TypeScript parser wrapper."""

import logging
from pathlib import Path

import pytest

from nullguard.parser import (
    JAVASCRIPT,
    TSX,
    TYPESCRIPT,
    create_parser,
    dialect_for_path,
    get_language,
    parse_bytes,
    parse_file,
)


@pytest.mark.parametrize("dialect", [JAVASCRIPT, TYPESCRIPT, TSX])
def test_get_language_returns_language(dialect):
    """get_language() returns a tree-sitter Language for every dialect."""
    assert get_language(dialect) is not None


def test_get_language_unknown_dialect():
    with pytest.raises(ValueError, match="Unsupported dialect"):
        get_language("coffeescript")


def test_create_parser_returns_parser():
    """create_parser() returns a configured Parser."""
    parser = create_parser()
    assert parser is not None
    assert parser.language is not None


@pytest.mark.parametrize(
    "name, expected",
    [
        ("app.js", JAVASCRIPT),
        ("App.JSX", JAVASCRIPT),
        ("worker.mjs", JAVASCRIPT),
        ("config.cjs", JAVASCRIPT),
        ("index.ts", TYPESCRIPT),
        ("loader.mts", TYPESCRIPT),
        ("view.tsx", TSX),
        ("README.md", None),
        ("Makefile", None),
    ],
)
def test_dialect_for_path(name, expected):
    assert dialect_for_path(Path(name)) == expected


def test_parse_bytes_success(caplog):
    """Parsing valid JavaScript succeeds and logs."""
    source = b"function main() { return 0; }"
    parser = create_parser()
    with caplog.at_level(logging.DEBUG):
        tree = parse_bytes(source, parser=parser)
    assert tree.root_node is not None
    assert not tree.root_node.has_error
    assert tree.root_node.type == "program"
    assert "Parse succeeded" in caplog.text


def test_parse_bytes_typescript():
    source = b"const n: number | null = null;"
    tree = parse_bytes(source, parser=create_parser(TYPESCRIPT))
    assert not tree.root_node.has_error


def test_parse_bytes_typescript_with_javascript_parser_has_errors():
    source = b"let x: number = 1;"
    tree = parse_bytes(source, parser=create_parser(JAVASCRIPT))
    assert tree.root_node.has_error


def test_parse_bytes_invalid_logs_warning(caplog):
    """Parsing invalid JavaScript logs a warning but still returns a tree."""
    source = b"function main( { broken"
    with caplog.at_level(logging.WARNING):
        tree = parse_bytes(source)
    assert tree.root_node is not None
    assert tree.root_node.has_error
    assert "Parse completed with errors" in caplog.text


def test_parse_file_sample_js():
    """Parser parses the sample JavaScript file successfully."""
    sample_path = Path(__file__).parent / "sample.js"
    assert sample_path.exists(), "tests/sample.js must exist"
    tree = parse_file(sample_path)
    assert tree is not None
    assert not tree.root_node.has_error
    assert tree.root_node.type == "program"


def test_parse_file_picks_dialect_from_extension(tmp_path):
    ts_file = tmp_path / "typed.ts"
    ts_file.write_bytes(b"export function f(x?: string): boolean { return x !== undefined; }\n")
    tree = parse_file(ts_file)
    assert tree is not None
    assert not tree.root_node.has_error


def test_parse_file_nonexistent(caplog):
    """parse_file() on a nonexistent path returns None and logs an error."""
    with caplog.at_level(logging.ERROR):
        tree = parse_file(Path("/nonexistent/sample.js"))
    assert tree is None
    assert "Failed to read" in caplog.text
