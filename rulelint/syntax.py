# Language-neutral syntax tree: declarations with line ranges and suppression markers.
# Produced by the parser (rulelint.parser) and consumed read-only by the walker
# and the suppression overlay.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

# Marker name that suppresses every rule.
ALL_RULES = "all"


class NodeKind(str, Enum):
    """Declaration kinds the walker distinguishes."""

    FILE = "file"
    IMPORT = "import"
    TYPE = "type"
    MEMBER = "member"


@dataclass(frozen=True)
class SyntaxNode:
    """
    One declaration in the parsed file.

    start_line/end_line are 1-based and inclusive. marker_names holds the
    suppression markers attached directly to this node (rule ids or "all").
    syntax_type is the parser-specific declaration type (e.g. "method_declaration").
    """

    kind: NodeKind
    start_line: int
    end_line: int
    name: Optional[str] = None
    syntax_type: Optional[str] = None
    children: tuple[SyntaxNode, ...] = ()
    marker_names: frozenset[str] = field(default_factory=frozenset)

    def markers(self) -> frozenset[str]:
        """Suppression markers attached directly to this node."""
        return self.marker_names

    def imports(self) -> tuple[SyntaxNode, ...]:
        return self._children_of(NodeKind.IMPORT)

    def types(self) -> tuple[SyntaxNode, ...]:
        return self._children_of(NodeKind.TYPE)

    def members(self) -> tuple[SyntaxNode, ...]:
        return self._children_of(NodeKind.MEMBER)

    def contains_line(self, line_number: int) -> bool:
        """True if line_number lies in [start_line, end_line]; inverted ranges contain nothing."""
        return self.start_line <= line_number <= self.end_line

    def is_suppressed_for(self, rule_id: str) -> bool:
        """True if a marker on this node names rule_id or the wildcard."""
        return rule_id in self.marker_names or ALL_RULES in self.marker_names

    def _children_of(self, kind: NodeKind) -> tuple[SyntaxNode, ...]:
        return tuple(c for c in self.children if c.kind is kind)


def file_node(
    children: Iterable[SyntaxNode],
    line_count: int,
) -> SyntaxNode:
    """Build the FILE root spanning the whole file."""
    return SyntaxNode(
        kind=NodeKind.FILE,
        start_line=1,
        end_line=max(line_count, 1),
        children=tuple(children),
    )


def iter_nodes(node: SyntaxNode):
    """Yield node and every descendant in document order (DFS)."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)
