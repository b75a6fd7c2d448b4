"""Tests for rulelint.context: SourceModel, split_lines, create_source, load_sources."""

import logging
from pathlib import Path

from rulelint.context import (
    SourceModel,
    count_tree_stats,
    create_source,
    load_sources,
    source_from_text,
    split_lines,
)


def test_split_lines_drops_terminators():
    assert split_lines("a;\r\nb\n") == ("a;", "b")


def test_split_lines_keeps_inner_blank_lines():
    assert split_lines("a\n\nb") == ("a", "", "b")


def test_split_lines_empty():
    assert split_lines("") == ()


def test_split_lines_ignores_form_feed():
    """Only newlines end lines, so numbering matches the parser's rows."""
    assert split_lines("a\x0cb\nc") == ("a\x0cb", "c")


def test_source_model_line_is_one_based():
    model = SourceModel(["first", "second"])
    assert model.line(1) == "first"
    assert model.line(2) == "second"
    assert model.line(0) == ""
    assert model.line(3) == ""
    assert model.tree is None


def test_source_from_text_builds_tree():
    model = source_from_text("class A {\n    void m() {}\n}\n")
    assert model.lines == ("class A {", "    void m() {}", "}")
    assert model.tree is not None
    assert model.has_parse_errors is False
    assert count_tree_stats(model.tree) == (1, 1)


def test_source_from_text_malformed_keeps_header_only(caplog):
    with caplog.at_level(logging.WARNING):
        model = source_from_text("import a.B;\nclass A { void m( { }\nint x = 1;\n")
    assert model.tree is not None
    assert [n.start_line for n in model.tree.imports()] == [1]
    assert count_tree_stats(model.tree) == (0, 0)
    assert model.has_parse_errors is True
    assert model.lines[2] == "int x = 1;"
    assert "syntax errors" in caplog.text


def test_create_source_sample_java(tmp_path):
    java_file = tmp_path / "A.java"
    java_file.write_bytes(b"class A { int x = 1; }\n")
    model = create_source(java_file)
    assert model is not None
    assert model.path == java_file
    assert model.lines == ("class A { int x = 1; }",)
    assert model.tree is not None


def test_create_source_nonexistent(caplog):
    with caplog.at_level(logging.ERROR):
        model = create_source(Path("/nonexistent/A.java"))
    assert model is None
    assert "Failed to read" in caplog.text


def test_create_source_empty_file(tmp_path):
    java_file = tmp_path / "Empty.java"
    java_file.write_bytes(b"")
    model = create_source(java_file)
    assert model is not None
    assert model.lines == ()
    assert model.tree is not None
    assert model.tree.types() == ()


def test_load_sources(tmp_path):
    a = tmp_path / "A.java"
    b = tmp_path / "B.java"
    a.write_bytes(b"class A {}\n")
    b.write_bytes(b"class B {}\n")
    sources = load_sources([a, b])
    assert [s.path for s in sources] == [a, b]


def test_load_sources_skips_unreadable(tmp_path):
    a = tmp_path / "A.java"
    a.write_bytes(b"class A {}\n")
    sources = load_sources([a, tmp_path / "Missing.java"])
    assert len(sources) == 1
    assert sources[0].path == a
