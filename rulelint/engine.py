"""
Rule engine: run every enabled rule against every file.

Files are independent units of work and are fanned out across a thread
pool. Rules are shared between workers; each Rule.apply_to() call keeps its
state local, so no locking is involved.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from rulelint.context import SourceModel, create_source
from rulelint.findings.models import Violation
from rulelint.rules.base import Rule

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Violations found in one file; loaded is False when it could not be read."""

    path: Path
    violations: list[Violation] = field(default_factory=list)
    loaded: bool = True
    has_parse_errors: bool = False


class RuleEngine:
    """Applies a collection of rules to source models or files."""

    def __init__(self, rules: Sequence[Rule], max_workers: Optional[int] = None) -> None:
        self.rules = list(rules)
        self.max_workers = max_workers

    def analyze_source(self, source: SourceModel) -> list[Violation]:
        """
        Run every rule on one source, in rule order.

        A rule that raises is logged and skipped for this source only.
        """
        violations: list[Violation] = []
        for rule in self.rules:
            try:
                rule_violations = rule.apply_to(source)
            except Exception as exc:
                logger.exception("Rule %s failed on %s: %s", rule.id, source.path, exc)
                continue
            violations.extend(rule_violations)
        return violations

    def analyze_file(self, path: Path) -> FileResult:
        """Load one file (with its own parser) and analyze it."""
        source = create_source(path)
        if source is None:
            # File could not be read; error already logged in create_source
            return FileResult(path=path, loaded=False)
        return FileResult(
            path=path,
            violations=self.analyze_source(source),
            has_parse_errors=source.has_parse_errors,
        )

    def analyze_files(self, paths: Sequence[Path]) -> list[FileResult]:
        """
        Analyze files concurrently and return results in input order.
        """
        if not paths:
            return []

        results: list[Optional[FileResult]] = [None] * len(paths)
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(self.analyze_file, path): index for index, path in enumerate(paths)}
            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as exc:  # pragma: no cover
                    logger.exception("Analysis of %s failed: %s", paths[index], exc)
                    results[index] = FileResult(path=paths[index], loaded=False)

        logger.info(
            "Analyzed %d file(s) with %d rule(s): %d violation(s)",
            len(paths),
            len(self.rules),
            sum(len(r.violations) for r in results if r is not None),
        )
        return [r for r in results if r is not None]
