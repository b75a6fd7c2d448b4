"""Unit tests for the MethodSize rule."""

import pytest

from rulelint.context import source_from_text
from rulelint.exceptions import RuleConfigurationError
from rulelint.rules.method_size import MethodSizeRule


def _method(name: str, body_lines: int) -> str:
    body = "".join("        x++;\n" for _ in range(body_lines))
    return f"    void {name}() {{\n{body}    }}\n"


def _run_rule(source: str, **properties) -> list:
    return MethodSizeRule(**properties).apply_to(source_from_text(source))


def test_short_methods_not_reported():
    source = "class A {\n    int x;\n" + _method("m", 3) + "}\n"
    assert _run_rule(source, max_lines=5) == []


def test_long_method_reported_at_first_line():
    source = "class A {\n    int x;\n" + _method("big", 6) + "}\n"
    (violation,) = _run_rule(source, max_lines=5)
    assert violation.rule_id == "MethodSize"
    assert violation.line_number == 3
    assert violation.source_line == "    void big() {"
    assert "big" in violation.message
    assert "8 lines" in violation.message


def test_fields_are_not_methods():
    source = "class A {\n    int[] x = {\n        1,\n        2,\n        3\n    };\n}\n"
    assert _run_rule(source, max_lines=2) == []


def test_constructor_counts():
    source = "class A {\n    int x;\n    A() {\n        x = 1;\n        x = 2;\n    }\n}\n"
    (violation,) = _run_rule(source, max_lines=3)
    assert violation.line_number == 3


def test_suppressed_method_not_reported():
    source = 'class A {\n    int x;\n    @SuppressWarnings("MethodSize")\n' + _method("big", 6) + "}\n"
    assert _run_rule(source, max_lines=5) == []


def test_semicolon_suppression_does_not_affect_method_size():
    source = 'class A {\n    int x;\n    @SuppressWarnings("UnnecessarySemicolon")\n' + _method("big", 6) + "}\n"
    (violation,) = _run_rule(source, max_lines=5)
    assert violation.line_number == 3


@pytest.mark.parametrize("bad", [0, -1, "ten"])
def test_invalid_max_lines_rejected(bad):
    with pytest.raises(RuleConfigurationError):
        MethodSizeRule(max_lines=bad)


def test_trailing_pragma_belongs_to_preceding_method():
    source = "class A {\n    void a() { } // rulelint: suppress MethodSize\n" + _method("b", 2) + "}\n"
    (violation,) = _run_rule(source, max_lines=2)
    assert violation.line_number == 3
