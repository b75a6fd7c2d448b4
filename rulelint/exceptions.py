"""rulelint exceptions.

Only configuration faults are raised as exceptions. Per-file and per-line
conditions (unreadable files, parse errors, empty input, odd line ranges)
degrade to "no findings" and are logged instead.

Example:
    >>> from rulelint.exceptions import RuleConfigurationError
    >>> from rulelint.rules.unnecessary_semicolon import UnnecessarySemicolonRule
    >>>
    >>> try:
    ...     rule = UnnecessarySemicolonRule(exclude_pattern="(unclosed")
    ... except RuleConfigurationError as e:
    ...     print(f"Rule rejected: {e}")
"""


class RulelintError(Exception):
    """Base exception for all rulelint errors."""

    pass


class RuleConfigurationError(RulelintError):
    """Raised when a rule cannot be registered.

    This indicates:
    - An invalid line or exclusion pattern
    - A rule class missing its id
    """

    def __init__(self, rule_id: str, reason: str) -> None:
        self.rule_id = rule_id
        self.reason = reason
        super().__init__(f"Rule {rule_id!r} is misconfigured: {reason}")
