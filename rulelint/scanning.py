# Line scanner: apply a rule's textual pattern to every raw line of a file.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

from rulelint.exceptions import RuleConfigurationError
from rulelint.findings.models import Violation


@dataclass(frozen=True)
class LinePattern:
    """
    Compiled line detector.

    match is searched in the trimmed line; exclude must match the whole raw
    line to veto it (e.g. lines that are, or contain, comments).
    """

    match: re.Pattern[str]
    exclude: Optional[re.Pattern[str]] = None

    @classmethod
    def compile(cls, rule_id: str, match: str, exclude: Optional[str] = None) -> LinePattern:
        """Compile both expressions once; raise RuleConfigurationError if either is invalid."""
        try:
            compiled_match = re.compile(match)
        except re.error as e:
            raise RuleConfigurationError(rule_id, f"invalid line pattern {match!r}: {e}") from e
        compiled_exclude = None
        if exclude:
            try:
                compiled_exclude = re.compile(exclude)
            except re.error as e:
                raise RuleConfigurationError(rule_id, f"invalid exclude pattern {exclude!r}: {e}") from e
        return cls(match=compiled_match, exclude=compiled_exclude)

    def flags(self, line: str) -> bool:
        if not self.match.search(line.strip()):
            return False
        return self.exclude is None or self.exclude.fullmatch(line) is None


def scan_lines(
    lines: Sequence[str],
    pattern: LinePattern,
    make_violation: Callable[[int, str], Violation],
) -> Iterator[Violation]:
    """Yield one violation per flagged line, in ascending 1-based line order."""
    for line_number, line in enumerate(lines, start=1):
        if pattern.flags(line):
            yield make_violation(line_number, line)
