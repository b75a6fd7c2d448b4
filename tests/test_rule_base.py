"""Tests for the Rule base class: capability shapes, properties and accumulation."""

import pytest

from rulelint.context import SourceModel, source_from_text
from rulelint.exceptions import RuleConfigurationError
from rulelint.rules.base import Rule
from rulelint.syntax import NodeKind, SyntaxNode, file_node
from rulelint.walker import TreeVisitor


class EveryMemberVisitor(TreeVisitor):
    def enter_member(self, node, state):
        self.add_violation(state, node.start_line, f"member {node.name}")


class NoDetectorRule(Rule):
    id = "Nothing"


class MemberRule(Rule):
    id = "EveryMember"
    priority = 1
    visitor_class = EveryMemberVisitor


class BothRule(Rule):
    id = "Both"
    line_match = r"TODO"
    message = "found it"
    visitor_class = EveryMemberVisitor


def _member(name, start, end=None, markers=()):
    return SyntaxNode(
        kind=NodeKind.MEMBER,
        start_line=start,
        end_line=end or start,
        name=name,
        marker_names=frozenset(markers),
    )


def test_rule_without_detectors_reports_nothing():
    model = source_from_text("class A {\n    int x = 1;\n}\n")
    assert NoDetectorRule().apply_to(model) == []


def test_tree_rule_records_through_visitor():
    model = source_from_text("class A {\n    int x = 1;\n    void m() {}\n}\n")
    violations = MemberRule().apply_to(model)
    assert [(v.line_number, v.message) for v in violations] == [(2, "member x"), (3, "member m")]
    assert violations[1].source_line == "    void m() {}"
    assert violations[0].priority == 1
    assert violations[0].severity == "error"


def test_tree_rule_without_tree_reports_nothing():
    model = SourceModel(["int x = 1;"])
    assert MemberRule().apply_to(model) == []


def test_line_and_tree_findings_are_merged_in_line_order():
    lines = ["class A {", "    int a; // TODO", "    int b;", "    // TODO later", "}"]
    tree = file_node(
        [
            SyntaxNode(
                kind=NodeKind.TYPE,
                start_line=1,
                end_line=5,
                name="A",
                children=(_member("a", 2), _member("b", 3)),
            )
        ],
        5,
    )
    violations = BothRule().apply_to(SourceModel(lines, tree))
    assert [(v.line_number, v.message) for v in violations] == [
        (2, "found it"),
        (2, "member a"),
        (3, "member b"),
        (4, "found it"),
    ]


def test_tree_findings_inside_suppressed_scope_are_dropped():
    """A type marker removes members found after it, whatever the detection order."""
    lines = ["class A {", "    int a;", "    int b;", "}", "int c;"]
    suppressed_type = SyntaxNode(
        kind=NodeKind.TYPE,
        start_line=1,
        end_line=4,
        name="A",
        children=(_member("a", 2), _member("b", 3)),
        marker_names=frozenset({"Both"}),
    )
    other = SyntaxNode(kind=NodeKind.TYPE, start_line=5, end_line=5, name="C", children=(_member("c", 5),))
    violations = BothRule().apply_to(SourceModel(lines, file_node([suppressed_type, other], 5)))
    assert [v.line_number for v in violations] == [5]


def test_member_marker_suppresses_own_finding():
    lines = ["class A {", "    int a;", "    int b;", "}"]
    tree = file_node(
        [
            SyntaxNode(
                kind=NodeKind.TYPE,
                start_line=1,
                end_line=4,
                children=(_member("a", 2, markers=["all"]), _member("b", 3)),
            )
        ],
        4,
    )
    violations = MemberRule().apply_to(SourceModel(lines, tree))
    assert [v.line_number for v in violations] == [3]


def test_state_does_not_leak_between_calls():
    rule = BothRule()
    first = rule.apply_to(SourceModel(["TODO"]))
    second = rule.apply_to(SourceModel(["nothing"]))
    assert len(first) == 1
    assert second == []


def test_property_override():
    rule = MemberRule(priority=2)
    assert rule.priority == 2
    assert MemberRule.priority == 1


def test_unknown_property_rejected():
    with pytest.raises(RuleConfigurationError) as exc_info:
        MemberRule(colour="red")
    assert "colour" in str(exc_info.value)


def test_missing_id_rejected():
    class Anonymous(Rule):
        pass

    with pytest.raises(RuleConfigurationError):
        Anonymous()


def test_invalid_priority_rejected():
    with pytest.raises(RuleConfigurationError):
        MemberRule(priority=7)


@pytest.mark.parametrize("key", ["apply_to", "create_violation", "line_pattern"])
def test_methods_and_instance_state_are_not_properties(key):
    with pytest.raises(RuleConfigurationError) as exc_info:
        MemberRule(**{key: 1})
    assert key in str(exc_info.value)


def test_visitor_class_can_be_overridden():
    rule = NoDetectorRule(visitor_class=EveryMemberVisitor)
    model = source_from_text("class A {\n    int x = 1;\n}\n")
    assert [v.line_number for v in rule.apply_to(model)] == [2]
