"""Tests for the rule engine and concurrent use of shared rule instances."""

import logging
from concurrent.futures import ThreadPoolExecutor

from rulelint.context import source_from_text
from rulelint.engine import RuleEngine
from rulelint.rules.base import Rule
from rulelint.rules.method_size import MethodSizeRule
from rulelint.rules.unnecessary_semicolon import UnnecessarySemicolonRule


class ExplodingRule(Rule):
    id = "Exploding"
    line_match = r"."

    def apply_to(self, source):
        raise RuntimeError("boom")


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_analyze_source_runs_rules_in_order():
    source = source_from_text("class A {\n    void m() {\n        int x = 1;\n    }\n}\n")
    engine = RuleEngine([UnnecessarySemicolonRule(), MethodSizeRule(max_lines=2)])
    violations = engine.analyze_source(source)
    assert [(v.rule_id, v.line_number) for v in violations] == [
        ("UnnecessarySemicolon", 3),
        ("MethodSize", 2),
    ]


def test_failing_rule_is_skipped(caplog):
    source = source_from_text("class A {\n    int x = 1;\n}\n")
    engine = RuleEngine([ExplodingRule(), UnnecessarySemicolonRule()])
    with caplog.at_level(logging.ERROR):
        violations = engine.analyze_source(source)
    assert [v.rule_id for v in violations] == ["UnnecessarySemicolon"]
    assert "Exploding" in caplog.text


def test_analyze_files_preserves_input_order(tmp_path):
    paths = [
        _write(tmp_path, f"F{i}.java", "class F {\n" + "    int x;\n" * i + "}\n")
        for i in range(8)
    ]
    results = RuleEngine([UnnecessarySemicolonRule()], max_workers=4).analyze_files(paths)
    assert [r.path for r in results] == paths
    assert [len(r.violations) for r in results] == list(range(8))
    assert all(v.path == r.path for r in results for v in r.violations)


def test_analyze_files_reports_unreadable(tmp_path):
    good = _write(tmp_path, "A.java", "class A {\n    int x;\n}\n")
    missing = tmp_path / "Missing.java"
    results = RuleEngine([UnnecessarySemicolonRule()]).analyze_files([good, missing])
    assert results[0].loaded
    assert not results[1].loaded
    assert results[1].violations == []


def test_analyze_files_flags_parse_errors(tmp_path):
    broken = _write(tmp_path, "B.java", "class B {\n    int x;\n    void m( {\n}\n")
    (result,) = RuleEngine([UnnecessarySemicolonRule()]).analyze_files([broken])
    assert result.has_parse_errors
    assert [v.line_number for v in result.violations] == [2]


def test_analyze_files_empty():
    assert RuleEngine([UnnecessarySemicolonRule()]).analyze_files([]) == []


def test_shared_rule_instance_is_safe_across_threads():
    """Concurrent apply_to calls on one rule never see each other's violations."""
    rule = UnnecessarySemicolonRule()
    suppressed = source_from_text(
        '@SuppressWarnings("all")\npackage demo;\n\nclass A {\n' + "    int x;\n" * 50 + "}\n"
    )
    noisy = source_from_text("class B {\n" + "    int y;\n" * 50 + "}\n")
    expected_noisy = list(range(2, 52))

    def run(index):
        results = []
        for _ in range(20):
            source = suppressed if index % 2 else noisy
            results.append((index % 2, [v.line_number for v in rule.apply_to(source)]))
        return results

    with ThreadPoolExecutor(max_workers=8) as executor:
        outcomes = [r for batch in executor.map(run, range(8)) for r in batch]

    for is_suppressed, lines in outcomes:
        assert lines == ([] if is_suppressed else expected_noisy)
