"""Parser tests."""

import pytest

from eqeval import Literal, ParseError, Reference, parse, parse_file, parse_line


class TestParseLine:
    def test_literal_and_reference_terms(self):
        name, expr = parse_line("b = a + 2")
        assert name == "b"
        assert expr.terms == [Reference(name="a"), Literal(value=2)]

    def test_spaces_are_ignored(self):
        name, expr = parse_line("  to tal =  4 2 +x y ")
        assert name == "total"
        assert expr.terms == [Literal(value=42), Reference(name="xy")]

    def test_tabs_are_ignored(self):
        name, expr = parse_line("a\t=\t1\t+\tb")
        assert name == "a"
        assert expr.references() == ["b"]

    def test_empty_rhs_has_no_terms(self):
        name, expr = parse_line("a =")
        assert name == "a"
        assert expr.terms == []

    def test_splits_on_first_equals(self):
        name, expr = parse_line("a = b = c")
        assert name == "a"
        assert expr.terms == [Reference(name="b=c")]

    def test_leading_zeros_are_literals(self):
        _, expr = parse_line("a = 007")
        assert expr.terms == [Literal(value=7)]

    def test_repeated_reference_is_kept(self):
        _, expr = parse_line("a = b + b + 1")
        assert expr.references() == ["b", "b"]
        assert expr.dependencies() == {"b"}

    def test_large_literal(self):
        _, expr = parse_line("a = 123456789012345678901234567890")
        assert expr.terms[0].value == 123456789012345678901234567890

    def test_missing_equals_raises(self):
        with pytest.raises(ParseError) as exc_info:
            parse_line("a 1 + 2", lineno=3)
        assert "missing '='" in str(exc_info.value)
        assert exc_info.value.line == 3

    def test_missing_name_raises(self):
        with pytest.raises(ParseError, match="missing variable name"):
            parse_line(" = 4")

    def test_empty_term_raises(self):
        with pytest.raises(ParseError, match="empty term"):
            parse_line("a = 1 + + 2")

    def test_trailing_plus_raises(self):
        with pytest.raises(ParseError, match="empty term"):
            parse_line("a = 1 +")

    def test_negative_number_is_not_a_literal(self):
        _, expr = parse_line("a = -1")
        assert expr.terms == [Reference(name="-1")]


class TestParse:
    def test_parse_multiple_lines(self):
        module = parse("a = 1\nb = a + 2\nc = b + a\n")
        assert set(module.definitions) == {"a", "b", "c"}
        assert module.definitions["c"].references() == ["b", "a"]

    def test_blank_lines_are_skipped(self):
        module = parse("\n  \na = 1\n\nb = 2\n")
        assert set(module.definitions) == {"a", "b"}

    def test_last_definition_wins(self):
        module = parse("a = 1\na = 2 + 3\n")
        assert module.definitions["a"].terms == [Literal(value=2), Literal(value=3)]

    def test_windows_line_endings(self):
        module = parse("a = 1\r\nb = a\r\n")
        assert module.definitions["b"].references() == ["a"]

    def test_error_reports_line_number(self):
        with pytest.raises(ParseError) as exc_info:
            parse("a = 1\n\nnot an equation\n")
        assert exc_info.value.line == 3
        assert str(exc_info.value).startswith("line 3:")
        assert exc_info.value.text == "not an equation"

    def test_parse_file(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_text("x = 5\ny = x + x\n")
        module = parse_file(path)
        assert module.path == str(path)
        assert set(module.definitions) == {"x", "y"}

    def test_parse_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            parse_file(tmp_path / "nope.txt")
