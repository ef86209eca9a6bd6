# Tree-sitter setup and AST parsing: parse JavaScript / TypeScript source into AST trees.

import logging
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language

logger = logging.getLogger(__name__)

JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TSX = "tsx"

# Grammars: wrap the tree-sitter-* capsules for use with tree_sitter.Parser.
# The javascript grammar also covers JSX.
_LANGUAGES: dict[str, Language] = {
    JAVASCRIPT: Language(tree_sitter_javascript.language()),
    TYPESCRIPT: Language(tree_sitter_typescript.language_typescript()),
    TSX: Language(tree_sitter_typescript.language_tsx()),
}

DIALECT_BY_SUFFIX: dict[str, str] = {
    ".js": JAVASCRIPT,
    ".jsx": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
    ".ts": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
    ".tsx": TSX,
}


def dialect_for_path(path: Path) -> Optional[str]:
    """Return the dialect name for a file by extension, or None if unsupported."""
    return DIALECT_BY_SUFFIX.get(path.suffix.lower())


def get_language(dialect: str = JAVASCRIPT) -> Language:
    """Return the Tree-sitter Language object for a dialect."""
    try:
        return _LANGUAGES[dialect]
    except KeyError:
        raise ValueError(
            f"Unsupported dialect {dialect!r}; expected one of {sorted(_LANGUAGES)}"
        ) from None


def create_parser(dialect: str = JAVASCRIPT) -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for the dialect."""
    parser = tree_sitter.Parser(get_language(dialect))
    return parser


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse source bytes into an AST.

    Args:
        source: UTF-8 encoded JavaScript or TypeScript source code.
        parser: Optional parser instance; if None, a JavaScript parser is created.

    Returns:
        The parse tree. Check tree.root_node for errors (e.g. ERROR nodes).
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Parse completed with errors: root=%s",
            tree.root_node.type,
        )
    else:
        logger.debug(
            "Parse succeeded: root=%s",
            tree.root_node.type,
        )
    return tree


def parse_file(path: Path, parser: Optional[tree_sitter.Parser] = None) -> Optional[tree_sitter.Tree]:
    """
    Parse a script file into an AST.

    Args:
        path: Path to the .js/.ts/... file.
        parser: Optional parser instance; if None, one is created for the
                dialect implied by the file extension.

    Returns:
        The parse tree, or None if the file could not be read.
    """
    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None
    if parser is None:
        parser = create_parser(dialect_for_path(path) or JAVASCRIPT)
    tree = parse_bytes(source, parser=parser)
    logger.info("Parsed file %s: success=%s", path, not tree.root_node.has_error)
    return tree
