# Per-file Source Model: raw lines plus the lowered declaration tree.
# Handles reading/parsing Java files, degrading to a header-only tree for
# unparsable sources, and logging of declaration counts.

import logging
from pathlib import Path
from typing import Optional, Sequence

from tree_sitter import Parser

from rulelint.parser import build_header_tree, build_syntax_tree, create_parser, parse_bytes
from rulelint.syntax import NodeKind, SyntaxNode, iter_nodes

logger = logging.getLogger(__name__)


def split_lines(text: str) -> tuple[str, ...]:
    """
    Split text into lines without terminators.

    Only \\n (optionally preceded by \\r) ends a line, so line numbers agree
    with the parser's row numbers. A trailing newline does not add a line.
    """
    if not text:
        return ()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(line[:-1] if line.endswith("\r") else line for line in lines)


def count_tree_stats(root: SyntaxNode) -> tuple[int, int]:
    """Return (type declaration count, member declaration count) for the tree."""
    types = members = 0
    for node in iter_nodes(root):
        if node.kind is NodeKind.TYPE:
            types += 1
        elif node.kind is NodeKind.MEMBER:
            members += 1
    return types, members


class SourceModel:
    """
    Read-only view of one file: 1-indexed lines and an optional syntax tree.

    tree is None when no parser was involved, and holds only the header
    declarations when the source has syntax errors; line-based detection
    runs in both cases.
    """

    def __init__(
        self,
        lines: Sequence[str],
        tree: Optional[SyntaxNode] = None,
        *,
        path: Optional[Path] = None,
        has_parse_errors: bool = False,
    ) -> None:
        self._lines = tuple(lines)
        self._tree = tree
        self.path = path
        self.has_parse_errors = has_parse_errors

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def tree(self) -> Optional[SyntaxNode]:
        return self._tree

    def line(self, line_number: int) -> str:
        """Return the text of a 1-based line, or "" when out of range."""
        if 1 <= line_number <= len(self._lines):
            return self._lines[line_number - 1]
        return ""

    def __repr__(self) -> str:
        return f"SourceModel(path={self.path!r}, lines={len(self._lines)}, tree={self._tree is not None})"


def source_from_bytes(
    source: bytes,
    path: Optional[Path] = None,
    parser: Optional[Parser] = None,
) -> SourceModel:
    """
    Build a SourceModel from raw bytes.

    Malformed Java (syntax errors) yields has_parse_errors=True and a tree
    holding only the package/import declarations, so file-level markers
    still apply while type and member checks are skipped.
    """
    lines = split_lines(source.decode("utf-8", errors="replace"))
    tree = parse_bytes(source, parser=parser)
    if tree.root_node.has_error:
        logger.warning("Source %s has syntax errors; type and member checks are skipped", path or "<memory>")
        header = build_header_tree(tree, source, len(lines))
        return SourceModel(lines, header, path=path, has_parse_errors=True)
    return SourceModel(lines, build_syntax_tree(tree, source, len(lines)), path=path)


def source_from_text(
    text: str,
    path: Optional[Path] = None,
    parser: Optional[Parser] = None,
) -> SourceModel:
    """Convenience wrapper around source_from_bytes() for str input."""
    return source_from_bytes(text.encode("utf-8"), path=path, parser=parser)


def create_source(
    path: Path,
    parser: Optional[Parser] = None,
) -> Optional[SourceModel]:
    """
    Read a Java file and build its SourceModel.

    - Unreadable file (permission, missing): returns None and logs error.
    - Malformed Java: returns a header-only SourceModel with has_parse_errors=True.
    - Success: returns SourceModel and logs type/member counts.
    """
    if parser is None:
        parser = create_parser()

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    model = source_from_bytes(source, path=path, parser=parser)
    if model.has_parse_errors:
        logger.info("Loaded %s: %d line(s), header declarations only", path, len(model.lines))
        return model

    type_count, member_count = count_tree_stats(model.tree)
    logger.info(
        "Loaded %s: %d line(s), %d type(s), %d member(s)",
        path,
        len(model.lines),
        type_count,
        member_count,
    )
    return model


def load_sources(
    paths: list[Path],
    parser: Optional[Parser] = None,
) -> list[SourceModel]:
    """
    Read and parse multiple Java files into SourceModels.

    Unreadable files are skipped (logged). Order matches input order.
    """
    if parser is None:
        parser = create_parser()

    sources: list[SourceModel] = []
    for path in paths:
        model = create_source(path, parser=parser)
        if model is not None:
            sources.append(model)
    return sources
