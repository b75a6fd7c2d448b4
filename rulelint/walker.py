# Tree walker: fixed-order traversal of the declaration tree driving rule callbacks.

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from rulelint.syntax import SyntaxNode

if TYPE_CHECKING:
    from rulelint.rules.base import Rule
    from rulelint.suppression import RunState


class TreeVisitor:
    """
    Callback set for one rule over one file.

    Subclasses override the hooks they need. All per-file mutable state goes
    through the RunState passed to every hook, so one visitor instance can be
    reused across files and threads.
    """

    def __init__(self, rule: Optional[Rule] = None) -> None:
        self.rule = rule

    def visit_imports(self, imports: Sequence[SyntaxNode], state: RunState) -> None:
        """Called once per file with the whole import group, before any type."""

    def enter_type(self, node: SyntaxNode, state: RunState) -> None:
        """Called for each type declaration, before its members."""

    def enter_member(self, node: SyntaxNode, state: RunState) -> None:
        """Called for each member declaration of the enclosing type."""

    def add_violation(self, state: RunState, line_number: int, message: Optional[str] = None) -> None:
        """Record a violation of self.rule at line_number in the current file."""
        state.record(self.rule.create_violation(state.source, line_number, message))


def walk(root: SyntaxNode, visitors: Sequence[TreeVisitor], state: RunState) -> None:
    """
    Traverse root: import group first, then each type with its members,
    then its nested types, then the next sibling type.

    Visitors are called in the given order at every step. Once
    state.ignore_forever is set, type and member hooks are skipped but the
    recursion still completes.
    """
    imports = root.imports()
    for visitor in visitors:
        visitor.visit_imports(imports, state)
    for node in root.types():
        _walk_type(node, visitors, state)


def _walk_type(node: SyntaxNode, visitors: Sequence[TreeVisitor], state: RunState) -> None:
    if not state.ignore_forever:
        for visitor in visitors:
            visitor.enter_type(node, state)
    for member in node.members():
        if not state.ignore_forever:
            for visitor in visitors:
                visitor.enter_member(member, state)
    for nested in node.types():
        _walk_type(nested, visitors, state)
