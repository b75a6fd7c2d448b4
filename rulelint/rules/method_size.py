# Method size detection: flags methods and constructors spanning too many lines.

from __future__ import annotations

from typing import Any

from rulelint.exceptions import RuleConfigurationError
from rulelint.rules.base import Rule
from rulelint.suppression import RunState
from rulelint.syntax import SyntaxNode
from rulelint.walker import TreeVisitor

METHOD_DECLARATIONS = frozenset(
    {
        "method_declaration",
        "constructor_declaration",
        "compact_constructor_declaration",
    }
)


class MethodSizeVisitor(TreeVisitor):
    def enter_member(self, node: SyntaxNode, state: RunState) -> None:
        if node.syntax_type not in METHOD_DECLARATIONS:
            return
        size = node.end_line - node.start_line + 1
        if size > self.rule.max_lines:
            self.add_violation(
                state,
                node.start_line,
                f"Method {node.name} is {size} lines long; the maximum is {self.rule.max_lines}",
            )


class MethodSizeRule(Rule):
    """Tree-only rule: reports a method at its first line when it exceeds max_lines."""

    id = "MethodSize"
    name = "Method size"
    priority = 2
    max_lines = 100
    visitor_class = MethodSizeVisitor

    def __init__(self, **properties: Any) -> None:
        super().__init__(**properties)
        if not isinstance(self.max_lines, int) or self.max_lines < 1:
            raise RuleConfigurationError(self.id, f"max_lines must be a positive integer, got {self.max_lines!r}")
