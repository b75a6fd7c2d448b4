"""
File system traversal: walk directories and collect Java source files.

Typical usage:
    from pathlib import Path
    from rulelint.traversal import find_java_files, find_source_files

    java_files = find_java_files(Path("./my_project"))

    # Custom ignore set and extra filter
    sources = find_source_files(
        Path("./my_project"),
        ignore_dirs={"build", "target"},
        filter_fn=lambda p: not p.name.endswith("Test.java"),
    )
"""

import logging
from pathlib import Path
from typing import Callable, FrozenSet, Optional, Set

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES: FrozenSet[str] = frozenset({".java"})

# Default directories to ignore during traversal
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Build output
    "build",
    "target",
    "out",
    "bin",
    "classes",
    "generated",
    # Build tool state
    ".gradle",
    ".mvn",
    "node_modules",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # IDE and editor directories
    ".vscode",
    ".idea",
    ".settings",
    # Caches
    ".cache",
    "__pycache__",
}


def is_java_file(path: Path) -> bool:
    """
    Check if a file is a Java source file (.java extension, any case).

    Examples:
        >>> is_java_file(Path("Main.java"))
        True
        >>> is_java_file(Path("Main.class"))
        False
    """
    return path.suffix.lower() in SOURCE_SUFFIXES


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check if a directory should be skipped; only the name is compared (case-sensitive).

    Examples:
        >>> should_ignore_directory(Path("target"), {"target"})
        True
        >>> should_ignore_directory(Path("src"), {"target"})
        False
    """
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[Path]:
    """
    Recursively find all Java source files in a directory tree.

    Args:
        root: Root directory to start traversal from.
        ignore_dirs: Directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
        filter_fn: Optional extra filter; only files for which it returns True are kept.

    Returns:
        Sorted list of matching paths.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.

    Notes:
        Permission errors on subdirectories are logged but do not stop traversal.
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
        "Traversal config: follow_symlinks=%s, ignore_dirs=%s",
        follow_symlinks,
        ignore_dirs,
    )

    collected_files: list[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file() and is_java_file(entry):
                    if filter_fn is not None and not filter_fn(entry):
                        logger.debug("Filtered out by custom filter: %s", entry)
                        continue
                    logger.debug("Found source file: %s", entry)
                    collected_files.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    # Sort for deterministic ordering
    collected_files.sort()

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files


def find_java_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
) -> list[Path]:
    """Convenience wrapper around find_source_files() without a custom filter."""
    return find_source_files(
        root=root,
        ignore_dirs=ignore_dirs,
        follow_symlinks=follow_symlinks,
    )
