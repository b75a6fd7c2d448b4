from __future__ import annotations

"""
Engine configuration: which rules are registered and enabled.

Rules are registered from factories (usually the rule classes themselves).
A rule whose construction fails with RuleConfigurationError is reported once
here and left out; the remaining rules still run.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Set

from rulelint.exceptions import RuleConfigurationError
from rulelint.rules.base import Rule
from rulelint.rules.method_size import MethodSizeRule
from rulelint.rules.unnecessary_semicolon import UnnecessarySemicolonRule

logger = logging.getLogger(__name__)

RuleFactory = Callable[[], Rule]

BUILTIN_RULES: Sequence[RuleFactory] = (
    UnnecessarySemicolonRule,
    MethodSizeRule,
)


@dataclass
class Config:
    """
    Engine configuration.

    rules holds every successfully registered rule; disabled_rules lists ids
    that should not run. workers bounds the thread pool used across files
    (None lets the executor decide).
    """

    rules: Sequence[Rule] = field(default_factory=list)
    disabled_rules: Set[str] = field(default_factory=set)
    workers: Optional[int] = None


def register_rules(factories: Iterable[RuleFactory]) -> List[Rule]:
    """
    Instantiate rules, dropping any that are misconfigured.

    Duplicate ids keep the first registration.
    """
    rules: List[Rule] = []
    seen: Set[str] = set()
    for factory in factories:
        try:
            rule = factory()
        except RuleConfigurationError as e:
            logger.error("Skipping rule %s: %s", e.rule_id, e.reason)
            continue
        if rule.id in seen:
            logger.warning("Duplicate rule id %s ignored", rule.id)
            continue
        seen.add(rule.id)
        rules.append(rule)
    logger.debug("Registered %d rule(s): %s", len(rules), ", ".join(r.id for r in rules))
    return rules


def get_default_config(
    disabled_rules: Iterable[str] = (),
    workers: Optional[int] = None,
) -> Config:
    """Return a configuration with the built-in rule catalogue."""
    return Config(
        rules=register_rules(BUILTIN_RULES),
        disabled_rules=set(disabled_rules),
        workers=workers,
    )


def get_enabled_rules(config: Config | None = None) -> Sequence[Rule]:
    """
    Return the enabled rules from the given config (or default config).

    Unknown ids in disabled_rules are logged and otherwise ignored.
    """
    if config is None:
        config = get_default_config()
    known = {rule.id for rule in config.rules}
    for rule_id in sorted(config.disabled_rules - known):
        logger.warning("Cannot disable unknown rule %s", rule_id)
    return [rule for rule in config.rules if rule.id not in config.disabled_rules]
