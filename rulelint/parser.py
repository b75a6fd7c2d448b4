# Tree-sitter setup and Java parsing: parse source into a tree-sitter tree and
# lower it into the language-neutral SyntaxNode declaration tree.

import dataclasses
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional

import tree_sitter
from tree_sitter import Language
from tree_sitter import Node as TSNode
from tree_sitter_java import language as _java_language_capsule

from rulelint.syntax import ALL_RULES, NodeKind, SyntaxNode, file_node

logger = logging.getLogger(__name__)

# Java grammar: wrap tree-sitter-java capsule for use with tree_sitter.Parser
_JAVA_LANGUAGE = Language(_java_language_capsule())

TOOL_NAME = "rulelint"

HEADER_DECLARATIONS = frozenset({"package_declaration", "import_declaration"})

TYPE_DECLARATIONS = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }
)

MEMBER_DECLARATIONS = frozenset(
    {
        "method_declaration",
        "constructor_declaration",
        "compact_constructor_declaration",
        "field_declaration",
        "constant_declaration",
        "annotation_type_element_declaration",
    }
)

COMMENT_NODES = frozenset({"line_comment", "block_comment", "comment"})

SUPPRESS_ANNOTATIONS = frozenset({"SuppressWarnings", "java.lang.SuppressWarnings"})

# // rulelint: suppress UnnecessarySemicolon, OtherRule  free-text reason
# /* rulelint: suppress */            (no names = every rule)
_PRAGMA_RE = re.compile(
    r"^\s*(?://+|/\*+)\s*rulelint:\s*suppress\b(?P<names>.*?)(?:\*+/)?\s*$",
    re.IGNORECASE,
)
# Names are a comma-separated list; text after the list is a reason, not a name.
_PRAGMA_NAME_LIST_RE = re.compile(r"\s*(?P<list>[A-Za-z_][\w.]*(?:\s*,\s*[A-Za-z_][\w.]*)*)")
_PRAGMA_NAME_RE = re.compile(r"[A-Za-z_][\w.]*")


def get_java_language() -> Language:
    """Return the Tree-sitter Language object for Java."""
    return _JAVA_LANGUAGE


def create_parser() -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for Java."""
    parser = tree_sitter.Parser(_JAVA_LANGUAGE)
    return parser


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse Java source bytes into a tree-sitter tree.

    Args:
        source: UTF-8 encoded Java source code.
        parser: Optional parser instance; if None, a new one is created.

    Returns:
        The parse tree. Check tree.root_node.has_error for syntax errors.
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
    Parse a Java source file into a tree-sitter tree.

    Returns:
        The parse tree, or None if the file could not be read.
    """
    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None
    tree = parse_bytes(source, parser=parser)
    logger.info("Parsed file %s: success=%s", path, not tree.root_node.has_error)
    return tree


# --- suppression markers -----------------------------------------------------


def normalize_marker(raw: str) -> str:
    """
    Map a suppression name as written in source to a rule id or ALL_RULES.

    "all" and "rulelint" suppress everything; "rulelint.Foo" means "Foo".
    """
    name = raw.strip()
    lowered = name.lower()
    if lowered in (ALL_RULES, TOOL_NAME):
        return ALL_RULES
    if lowered.startswith(TOOL_NAME + "."):
        return name[len(TOOL_NAME) + 1 :]
    return name


def parse_pragma(comment: str) -> Optional[frozenset[str]]:
    """Return the marker names of a `rulelint: suppress` comment, or None if it is not one."""
    m = _PRAGMA_RE.match(comment)
    if m is None:
        return None
    listed = _PRAGMA_NAME_LIST_RE.match(m.group("names"))
    if listed is None:
        return frozenset({ALL_RULES})
    names = _PRAGMA_NAME_RE.findall(listed.group("list"))
    return frozenset(normalize_marker(n) for n in names)


def _node_text(source: bytes, node: TSNode) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _walk(node: TSNode) -> Iterator[TSNode]:
    yield node
    for child in node.children:
        yield from _walk(child)


def _unquote(raw: str) -> Optional[str]:
    raw = raw.strip()
    if len(raw) < 2 or raw[0] != '"' or raw[-1] != '"' or raw.startswith('"""'):
        return None
    return raw[1:-1]


def _suppress_warnings_values(annotation: TSNode, source: bytes) -> set[str]:
    """Marker names carried by one @SuppressWarnings(...) annotation."""
    name_node = annotation.child_by_field_name("name")
    if name_node is None or _node_text(source, name_node) not in SUPPRESS_ANNOTATIONS:
        return set()
    args = annotation.child_by_field_name("arguments")
    if args is None:
        return set()
    names: set[str] = set()
    for node in _walk(args):
        if node.type != "string_literal":
            continue
        value = _unquote(_node_text(source, node))
        if value:
            names.add(normalize_marker(value))
    return names


def annotation_markers(node: TSNode, source: bytes) -> frozenset[str]:
    """Collect suppression markers from annotations attached to a declaration."""
    names: set[str] = set()
    for child in node.children:
        if child.type == "modifiers":
            names |= annotation_markers(child, source)
        elif child.type == "annotation":
            names |= _suppress_warnings_values(child, source)
    return frozenset(names)


# --- lowering ----------------------------------------------------------------


def _line_range(node: TSNode) -> tuple[int, int]:
    return node.start_point[0] + 1, node.end_point[0] + 1


def _declaration_name(node: TSNode, source: bytes) -> Optional[str]:
    name = node.child_by_field_name("name")
    if name is None:
        declarator = node.child_by_field_name("declarator")
        if declarator is not None:
            name = declarator.child_by_field_name("name")
    if name is None:
        return None
    return _node_text(source, name)


def _body_children(body: Optional[TSNode]) -> Iterator[TSNode]:
    """Children of a type body, with enum member declarations inlined."""
    if body is None:
        return
    for child in body.children:
        if child.type == "enum_body_declarations":
            yield from child.children
        else:
            yield child


def _lower(node: TSNode, source: bytes, pragma: frozenset[str]) -> Optional[SyntaxNode]:
    start, end = _line_range(node)
    if node.type in HEADER_DECLARATIONS:
        # package annotations live directly on package_declaration
        return SyntaxNode(
            kind=NodeKind.IMPORT,
            start_line=start,
            end_line=end,
            name=_node_text(source, node).strip(),
            syntax_type=node.type,
            marker_names=annotation_markers(node, source) | pragma,
        )
    if node.type in TYPE_DECLARATIONS:
        return SyntaxNode(
            kind=NodeKind.TYPE,
            start_line=start,
            end_line=end,
            name=_declaration_name(node, source),
            syntax_type=node.type,
            children=tuple(lower_declarations(_body_children(node.child_by_field_name("body")), source)),
            marker_names=annotation_markers(node, source) | pragma,
        )
    if node.type in MEMBER_DECLARATIONS:
        return SyntaxNode(
            kind=NodeKind.MEMBER,
            start_line=start,
            end_line=end,
            name=_declaration_name(node, source),
            syntax_type=node.type,
            marker_names=annotation_markers(node, source) | pragma,
        )
    return None


def lower_declarations(nodes: Iterable[TSNode], source: bytes) -> list[SyntaxNode]:
    """
    Lower a sequence of sibling tree-sitter nodes into SyntaxNodes.

    A `rulelint: suppress` comment attaches its markers to the declaration
    that immediately follows it; any other node in between drops them. A
    comment starting on the last row of the preceding declaration trails
    that declaration and attaches to it instead.
    """
    lowered: list[SyntaxNode] = []
    pending: frozenset[str] = frozenset()
    last_row: Optional[int] = None
    for node in nodes:
        if node.type in COMMENT_NODES:
            names = parse_pragma(_node_text(source, node))
            if names is None:
                continue
            if lowered and node.start_point[0] == last_row:
                prev = lowered[-1]
                lowered[-1] = dataclasses.replace(prev, marker_names=prev.marker_names | names)
            else:
                pending = pending | names
            continue
        decl = _lower(node, source, pending)
        if decl is not None:
            lowered.append(decl)
            last_row = node.end_point[0]
        else:
            last_row = None
        pending = frozenset()
    return lowered


def build_syntax_tree(tree: tree_sitter.Tree, source: bytes, line_count: int) -> SyntaxNode:
    """Lower a whole tree-sitter program into a FILE SyntaxNode."""
    return file_node(lower_declarations(tree.root_node.children, source), line_count)


def build_header_tree(tree: tree_sitter.Tree, source: bytes, line_count: int) -> SyntaxNode:
    """
    Lower only the error-free package/import declarations of a program.

    Used for sources with syntax errors: file-level markers survive, while
    types and members (whose ranges may be wrong) are left out.
    """
    header = [
        child
        for child in tree.root_node.children
        if child.type in HEADER_DECLARATIONS | COMMENT_NODES and not child.has_error
    ]
    return file_node(lower_declarations(header, source), line_count)
