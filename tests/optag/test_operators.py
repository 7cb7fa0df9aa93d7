"""
Tests for operator specs and tables.
"""

import pytest

from optag import (
    BinaryOpSpec,
    BracketOpSpec,
    ConfigError,
    OperatorKind,
    OperatorTable,
    UnaryOpSpec,
)
from optag.operators import DEFAULT_OPERATORS


class TestSpecs:
    """Tests for operator spec variants."""

    def test_binary_spec(self):
        spec = BinaryOpSpec("+")
        assert spec.kind == OperatorKind.BINARY
        assert spec.name == "+"
        assert spec.symbols == ("+",)

    def test_bracket_spec(self):
        spec = BracketOpSpec(("[", "]"))
        assert spec.kind == OperatorKind.BRACKET
        assert spec.open == "["
        assert spec.close == "]"
        assert spec.name == "[]"

    def test_specs_differ_by_kind(self):
        assert BinaryOpSpec("-") != UnaryOpSpec("-")
        assert BinaryOpSpec("-") == BinaryOpSpec("-")

    def test_structural_flag_does_not_affect_identity(self):
        assert BinaryOpSpec(",", structural=True) == BinaryOpSpec(",")


class TestTableConstruction:
    """Tests for table validation and normalization."""

    def test_strings_are_binary_shorthand(self):
        table = OperatorTable([["*", "/"], ["+"]])
        assert table.tiers[0] == (BinaryOpSpec("*"), BinaryOpSpec("/"))
        assert len(table) == 2

    def test_rejects_empty_table(self):
        with pytest.raises(ConfigError, match="No operators supplied"):
            OperatorTable([])

    def test_rejects_only_empty_tiers(self):
        with pytest.raises(ConfigError, match="No operators supplied"):
            OperatorTable([[], []])

    def test_rejects_empty_symbol(self):
        with pytest.raises(ConfigError):
            OperatorTable([[""]])

    def test_rejects_incomplete_bracket(self):
        with pytest.raises(ConfigError):
            OperatorTable([[BracketOpSpec(("[", ""))]])

    def test_rejects_unknown_spec(self):
        with pytest.raises(ConfigError, match="Unsupported operator spec"):
            OperatorTable([[42]])

    def test_rejects_string_tier(self):
        with pytest.raises(ConfigError):
            OperatorTable(["+-"])

    def test_accepts_bracket_parts_as_list(self):
        table = OperatorTable([[BracketOpSpec(["<", ">"])]])
        assert table.find_bracket("<").parts == ("<", ">")


class TestStructuralInjection:
    """Tests for implicit grouping and separator specs."""

    def test_injects_into_lowest_tier(self):
        table = OperatorTable([["*"], ["+"]])
        lowest = table.tiers[-1]
        assert BracketOpSpec(("(", ")")) in lowest
        assert BinaryOpSpec(",") in lowest
        assert all(spec.structural for spec in lowest[1:])

    def test_does_not_inject_declared_parentheses(self):
        table = OperatorTable(DEFAULT_OPERATORS)
        parens = [s for s in table.specs if s.kind == OperatorKind.BRACKET and s.open == "("]
        assert len(parens) == 1
        assert parens[0].structural is False

    def test_does_not_inject_declared_comma(self):
        table = OperatorTable([[","]])
        commas = [s for s in table.specs if s.name == ","]
        assert len(commas) == 1
        assert commas[0].structural is False

    def test_structural_specs_are_not_binary_operators(self):
        table = OperatorTable([["+"]])
        assert table.find_binary(0, ",") is None
        assert table.find_binary(0, "+") == BinaryOpSpec("+")


class TestMatching:
    """Tests for first-match symbol lookup."""

    def test_matches_in_declaration_order(self):
        table = OperatorTable([["="], ["=="]])
        spec, symbol = table.match("==", 0)
        assert symbol == "="

    def test_matches_bracket_closing_symbol(self):
        table = OperatorTable(DEFAULT_OPERATORS)
        spec, symbol = table.match("a]", 1)
        assert symbol == "]"
        assert spec.name == "[]"

    def test_no_match(self):
        table = OperatorTable(DEFAULT_OPERATORS)
        assert table.match("abc", 0) is None

    def test_find_unary(self):
        table = OperatorTable(DEFAULT_OPERATORS)
        assert table.find_unary("-") == UnaryOpSpec("-")
        assert table.find_unary("+") is None

    def test_repr_lists_tiers(self):
        table = OperatorTable([["*"], ["+"]])
        assert repr(table) == "OperatorTable([['*'], ['+', '()', ',']])"
