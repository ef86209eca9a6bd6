# Per-file analysis context: store file path, source code, AST, and helper methods.
# Handles reading/parsing script files, error handling for unreadable/malformed files,
# and logging of node/comparison counts so ASTs are ready for rules.

import logging
from pathlib import Path
from typing import Optional

from nullguard.parser import JAVASCRIPT, create_parser, dialect_for_path, parse_bytes
from tree_sitter import Parser, Tree
from tree_sitter import Node as TSNode

logger = logging.getLogger(__name__)

EQUALITY_OPERATORS = frozenset({"==", "!=", "===", "!=="})


def get_binary_operator(node: TSNode) -> Optional[str]:
    """Return the operator token of a binary_expression, or None for any other node."""
    if node.type != "binary_expression":
        return None
    operator = node.child_by_field_name("operator")
    if operator is None:
        return None
    return operator.type


def is_equality_comparison(node: TSNode) -> bool:
    """True for `==`, `!=`, `===` and `!==` binary expressions."""
    return get_binary_operator(node) in EQUALITY_OPERATORS


def count_tree_stats(root: TSNode) -> tuple[int, int]:
    """
    Return (total node count, equality comparison count) for the tree.

    Useful for logging how much was parsed.
    """
    nodes = 0
    comparisons = 0
    stack = [root]
    while stack:
        node = stack.pop()
        nodes += 1
        if is_equality_comparison(node):
            comparisons += 1
        stack.extend(node.children)
    return nodes, comparisons


class FileContext:
    """
    Per-file state for static analysis: path, raw source bytes, and AST.

    Rules use context.path, context.source, and context.tree. Use
    get_source_span(context, node) and get_line_col(node) for locations/snippets.
    """

    def __init__(
        self,
        path: Path,
        source: bytes,
        tree: Tree,
        *,
        has_parse_errors: bool = False,
    ) -> None:
        self.path = path
        self.source = source
        self.tree = tree
        self.has_parse_errors = has_parse_errors

    @property
    def root_node(self) -> TSNode:
        """Convenience access to the AST root."""
        return self.tree.root_node


def get_source_span(context: FileContext, node: TSNode) -> str:
    """
    Return the substring of context.source for the given node's byte range.

    Decodes with errors="replace" so bad UTF-8 does not crash.
    """
    return context.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def get_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """
    Return (line, column) for the node's start position.

    Tree-sitter uses 0-based (row, col). If one_based=True (default),
    returns 1-based line and column for display.
    """
    row, col = node.start_point
    if one_based:
        return row + 1, col + 1
    return row, col


def get_end_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """Same as get_line_col(), for the node's (exclusive) end position."""
    row, col = node.end_point
    if one_based:
        return row + 1, col + 1
    return row, col


def _char_position(source: bytes, point: tuple[int, int], byte_offset: int) -> tuple[int, int]:
    """1-based (line, character column) for a tree-sitter point and its byte offset."""
    row, byte_col = point
    line_prefix = source[byte_offset - byte_col : byte_offset]
    return row + 1, len(line_prefix.decode("utf-8", errors="replace")) + 1


def get_char_line_col(context: FileContext, node: TSNode) -> tuple[int, int]:
    """
    Return 1-based (line, column) of the node's start, counting characters.

    Tree-sitter columns are byte offsets; non-ASCII text earlier on the line
    would shift them, so the line prefix is decoded and measured instead.
    """
    return _char_position(context.source, node.start_point, node.start_byte)


def get_char_end_line_col(context: FileContext, node: TSNode) -> tuple[int, int]:
    """Same as get_char_line_col(), for the node's (exclusive) end position."""
    return _char_position(context.source, node.end_point, node.end_byte)


def create_context(
    path: Path,
    parser: Optional[Parser] = None,
) -> Optional[FileContext]:
    """
    Read a script file and parse it into a FileContext (path, source, AST).

    - Unreadable file (permission, missing): returns None and logs error.
    - Malformed source (syntax errors): still returns a FileContext with the
      tree and sets has_parse_errors=True; logs a warning and node counts.
    - Success: returns FileContext and logs node count and comparison count.

    Returns:
        FileContext if the file was read (and parsed), None if the file
        could not be read.
    """
    if parser is None:
        parser = create_parser(dialect_for_path(path) or JAVASCRIPT)

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    tree = parse_bytes(source, parser=parser)
    has_errors = tree.root_node.has_error
    if has_errors:
        logger.warning("File %s parsed with syntax errors; AST may be incomplete", path)

    node_count, comparison_count = count_tree_stats(tree.root_node)
    logger.info(
        "Parsed %s: %d nodes, %d equality comparison(s)%s",
        path,
        node_count,
        comparison_count,
        " (with parse errors)" if has_errors else "",
    )

    return FileContext(
        path=path,
        source=source,
        tree=tree,
        has_parse_errors=has_errors,
    )


def load_contexts(paths: list[Path]) -> list[FileContext]:
    """
    Read and parse multiple script files into FileContexts (ASTs in memory).

    Unreadable or missing files are skipped (logged); malformed files still
    get a context with has_parse_errors=True. One parser is shared per
    dialect.

    Args:
        paths: List of paths to script files (e.g. from traversal.find_script_files).

    Returns:
        List of FileContext instances, one per file that could be read.
        Order matches input order; failed files are omitted.
    """
    parsers: dict[str, Parser] = {}
    contexts: list[FileContext] = []
    for path in paths:
        dialect = dialect_for_path(path) or JAVASCRIPT
        if dialect not in parsers:
            parsers[dialect] = create_parser(dialect)
        ctx = create_context(path, parser=parsers[dialect])
        if ctx is not None:
            contexts.append(ctx)
    return contexts
