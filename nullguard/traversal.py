"""
File system traversal: walk directories and collect JavaScript / TypeScript files.

Directories that normally hold dependencies or generated output
(node_modules, dist, coverage, ...) are skipped, as are TypeScript
declaration files (`*.d.ts`), which contain no expressions to check.

Typical usage:
    from pathlib import Path
    from nullguard.traversal import find_script_files, find_source_files

    # JavaScript and TypeScript
    files = find_script_files(Path("./web"))

    # JavaScript only, custom ignore set
    js_files = find_source_files(
        Path("./web"),
        include_typescript=False,
        ignore_dirs={"node_modules", "vendor"},
    )
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Set

logger = logging.getLogger(__name__)

JAVASCRIPT_SUFFIXES = frozenset({".js", ".jsx", ".mjs", ".cjs"})
TYPESCRIPT_SUFFIXES = frozenset({".ts", ".tsx", ".mts", ".cts"})

DEFAULT_IGNORE_DIRS: Set[str] = {
    # Dependencies
    "node_modules",
    "bower_components",
    "jspm_packages",
    "vendor",

    # Build output and bundles
    "build",
    "dist",
    "out",
    "lib-cov",
    "coverage",
    ".next",
    ".nuxt",

    # Version control
    ".git",
    ".svn",
    ".hg",

    # IDE and editor directories
    ".vscode",
    ".idea",

    # Caches
    ".cache",
    ".parcel-cache",
    "__pycache__",
}


def is_declaration_file(path: Path) -> bool:
    """True for TypeScript declaration files such as `index.d.ts`."""
    name = path.name.lower()
    return name.endswith((".d.ts", ".d.mts", ".d.cts"))


def is_javascript_file(path: Path) -> bool:
    """
    Check if a file is a JavaScript source file.

    Examples:
        >>> is_javascript_file(Path("app.js"))
        True
        >>> is_javascript_file(Path("app.ts"))
        False
    """
    return path.suffix.lower() in JAVASCRIPT_SUFFIXES


def is_typescript_file(path: Path) -> bool:
    """Check if a file is a TypeScript source file (declaration files excluded)."""
    return path.suffix.lower() in TYPESCRIPT_SUFFIXES and not is_declaration_file(path)


def is_source_file(path: Path, include_typescript: bool = True) -> bool:
    """
    Check if a file should be linted.

    Args:
        path: Path to the file to check.
        include_typescript: If False, only JavaScript files are accepted.
    """
    if is_javascript_file(path):
        return True
    if include_typescript and is_typescript_file(path):
        return True
    return False


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check if a directory should be skipped during traversal.

    Only the directory name is compared (case-sensitive), not the full path.
    """
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    include_typescript: bool = True,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[Path]:
    """
    Recursively find all script files in a directory tree.

    Args:
        root: Root directory to start traversal from.
        include_typescript: If True, also collect TypeScript files.
        ignore_dirs: Set of directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
        filter_fn: Optional additional filter; only files for which
                   filter_fn(path) returns True are included.

    Returns:
        Sorted list of matching files.

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If root is not a directory.

    Permission errors on subdirectories are logged and do not stop traversal.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: include_typescript=%s, follow_symlinks=%s, ignore_dirs=%s",
        include_typescript,
        follow_symlinks,
        ignore_dirs,
    )

    collected_files: list[Path] = []
    pending = [root]
    while pending:
        current_dir = pending.pop()
        try:
            entries = list(current_dir.iterdir())
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)
            continue

        for entry in entries:
            if entry.is_symlink() and not follow_symlinks:
                logger.debug("Skipping symlink: %s", entry)
                continue

            if entry.is_dir():
                if should_ignore_directory(entry, ignore_dirs):
                    logger.debug("Ignoring directory: %s", entry)
                    continue
                pending.append(entry)
            elif entry.is_file() and is_source_file(entry, include_typescript=include_typescript):
                if filter_fn is not None and not filter_fn(entry):
                    logger.debug("Filtered out by custom filter: %s", entry)
                    continue
                logger.debug("Found source file: %s", entry)
                collected_files.append(entry)

    collected_files.sort()

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files


def find_script_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
) -> list[Path]:
    """Find all JavaScript and TypeScript files under root, sorted by path."""
    return find_source_files(
        root=root,
        include_typescript=True,
        ignore_dirs=ignore_dirs,
        follow_symlinks=follow_symlinks,
    )
