# Rule base class: defines the contract all rules implement.
# Concrete rules supply a line pattern, a TreeVisitor class, or both; apply_to()
# runs them over one SourceModel and returns the violations that survive
# suppression.

from __future__ import annotations

import inspect
from typing import Any, Optional

from rulelint.context import SourceModel
from rulelint.exceptions import RuleConfigurationError
from rulelint.findings.models import Violation
from rulelint.scanning import LinePattern, scan_lines
from rulelint.suppression import RunState, SuppressionOverlay
from rulelint.walker import TreeVisitor, walk


def _is_configurable(cls: type, key: str) -> bool:
    """True for public class-level settings; methods and properties are not settings."""
    if key.startswith("_"):
        return False
    try:
        attr = inspect.getattr_static(cls, key)
    except AttributeError:
        return False
    if isinstance(attr, type):
        return True
    return not (callable(attr) or isinstance(attr, (property, staticmethod, classmethod)))


class Rule:
    """
    Base class for all static analysis rules.

    Subclasses define:
    - id: str — unique rule identifier, also the name used in suppression markers
    - name: str — human-readable rule name
    - priority: int — 1 (high) to 3 (low)
    - line_match / exclude_pattern — optional textual detector (see LinePattern)
    - visitor_class — optional TreeVisitor subclass for tree-based detection

    A rule with neither detector reports nothing. Class attributes may be
    overridden per instance through constructor keyword arguments, e.g.
    UnnecessarySemicolonRule(exclude_pattern=r".*//.*").

    The rule instance holds configuration only; per-file state lives in the
    RunState created by each apply_to() call, so one instance can serve many
    threads at once.
    """

    id: str = ""
    name: str = ""
    priority: int = 3
    message: str = ""
    line_match: Optional[str] = None
    exclude_pattern: Optional[str] = None
    visitor_class: Optional[type[TreeVisitor]] = None

    def __init__(self, **properties: Any) -> None:
        rule_id = properties.get("id") or self.id or type(self).__name__
        for key, value in properties.items():
            if not _is_configurable(type(self), key):
                raise RuleConfigurationError(rule_id, f"unknown property {key!r}")
            setattr(self, key, value)
        if not self.id:
            raise RuleConfigurationError(rule_id, "rule has no id")
        if self.priority not in (1, 2, 3):
            raise RuleConfigurationError(self.id, f"priority must be 1, 2 or 3, got {self.priority!r}")

        self.line_pattern: Optional[LinePattern] = None
        if self.line_match:
            self.line_pattern = LinePattern.compile(self.id, self.line_match, self.exclude_pattern)
        self._overlay = SuppressionOverlay(self)
        self._visitor = self.visitor_class(self) if self.visitor_class is not None else None

    def apply_to(self, source: SourceModel) -> list[Violation]:
        """
        Analyze one file and return its violations, ordered by line.

        Line-scan and tree-walk findings share one RunState so that
        suppression scopes found in the tree also remove textual findings.
        """
        if self.line_pattern is None and self._visitor is None:
            return []

        state = RunState(self.id, source)
        if self.line_pattern is not None:
            for violation in scan_lines(
                source.lines,
                self.line_pattern,
                lambda line_number, line: self.create_violation(source, line_number, source_line=line),
            ):
                state.record(violation)

        if source.tree is not None:
            visitors: list[TreeVisitor] = [self._overlay]
            if self._visitor is not None:
                visitors.append(self._visitor)
            walk(source.tree, visitors, state)

        return state.drain()

    def create_violation(
        self,
        source: SourceModel,
        line_number: int,
        message: Optional[str] = None,
        source_line: Optional[str] = None,
    ) -> Violation:
        """Build a Violation for this rule, reading the literal line from source when not given."""
        return Violation(
            rule_id=self.id,
            line_number=line_number,
            source_line=source.line(line_number) if source_line is None else source_line,
            message=message or self.message or self.name,
            path=source.path,
            priority=self.priority,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
