# Suppression overlay: per-call violation accumulator plus the visitor that
# removes violations inside scopes marked with a suppression for the rule.

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from rulelint.findings.models import Violation
from rulelint.syntax import SyntaxNode
from rulelint.walker import TreeVisitor

if TYPE_CHECKING:
    from rulelint.context import SourceModel

logger = logging.getLogger(__name__)


class RunState:
    """
    Violations-in-progress for one rule over one file.

    Created fresh by each Rule.apply_to() call and drained before it returns,
    so concurrent calls on the same rule never share it.
    """

    def __init__(self, rule_id: str, source: Optional[SourceModel] = None) -> None:
        self.rule_id = rule_id
        self.source = source
        self._violations: list[Violation] = []
        self._suppressed: list[tuple[int, int]] = []
        self._ignore_forever = False

    @property
    def ignore_forever(self) -> bool:
        return self._ignore_forever

    @property
    def violations(self) -> tuple[Violation, ...]:
        return tuple(self._violations)

    def record(self, violation: Violation) -> None:
        """Accumulate a violation unless the file or an enclosing scope is suppressed."""
        if self._ignore_forever:
            return
        if any(start <= violation.line_number <= end for start, end in self._suppressed):
            return
        self._violations.append(violation)

    def ignore_remaining(self) -> None:
        """File-level suppression: discard everything and drop later findings."""
        self._ignore_forever = True
        self._violations.clear()

    def suppress_range(self, start: int, end: int) -> None:
        """Scope-level suppression: remove violations with start <= line <= end."""
        if start > end:
            return
        self._suppressed.append((start, end))
        self._violations = [v for v in self._violations if not start <= v.line_number <= end]

    def drain(self) -> list[Violation]:
        """Return the surviving violations ordered by line and reset the state."""
        result = sorted(self._violations, key=lambda v: v.line_number)
        self._violations = []
        self._suppressed = []
        return result


class SuppressionOverlay(TreeVisitor):
    """Applies file-level and scope-level suppression markers for one rule id."""

    def visit_imports(self, imports: Sequence[SyntaxNode], state: RunState) -> None:
        if any(node.is_suppressed_for(state.rule_id) for node in imports):
            logger.debug("Rule %s suppressed for the whole file", state.rule_id)
            state.ignore_remaining()

    def enter_type(self, node: SyntaxNode, state: RunState) -> None:
        self._suppress_scope(node, state)

    def enter_member(self, node: SyntaxNode, state: RunState) -> None:
        self._suppress_scope(node, state)

    @staticmethod
    def _suppress_scope(node: SyntaxNode, state: RunState) -> None:
        if node.is_suppressed_for(state.rule_id):
            logger.debug(
                "Rule %s suppressed in %s %s (lines %d-%d)",
                state.rule_id,
                node.kind.value,
                node.name,
                node.start_line,
                node.end_line,
            )
            state.suppress_range(node.start_line, node.end_line)
