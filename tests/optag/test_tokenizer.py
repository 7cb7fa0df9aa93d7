"""
Tests for the fragment tokenizer.
"""

import pytest

from optag import (
    ExpressionLimits,
    LimitExceededError,
    OperatorTable,
    TokenizerError,
    tokenize,
)
from optag.operators import DEFAULT_OPERATORS
from optag.tokenizer import Tokenizer, TokenType, render_source

TABLE = OperatorTable(DEFAULT_OPERATORS)


def kinds(tokens):
    return [token.type for token in tokens]


class TestHoles:
    """Tests for host values between fragments."""

    def test_tokenizes_holes_as_literals(self):
        marker = object()
        tokens = tokenize(["", ""], [marker], TABLE)
        assert kinds(tokens) == [TokenType.LITERAL, TokenType.EOF]
        assert tokens[0].value is marker
        assert tokens[0].hole == 0

    def test_tokenizes_operator_between_holes(self):
        tokens = tokenize(["", " + ", ""], ["a", "b"], TABLE)
        assert kinds(tokens) == [
            TokenType.LITERAL,
            TokenType.OPERATOR,
            TokenType.LITERAL,
            TokenType.EOF,
        ]
        assert tokens[1].value == "+"
        assert [t.position for t in tokens] == [0, 4, 6, 9]

    def test_adjacent_holes(self):
        tokens = tokenize(["", "", ""], [1, 2], TABLE)
        assert [t.value for t in tokens[:2]] == [1, 2]

    def test_renders_source_with_placeholders(self):
        assert render_source(["(", " * ", ")"]) == "({0} * {1})"

    def test_rejects_fragment_count_mismatch(self):
        with pytest.raises(ValueError):
            tokenize(["", ""], [], TABLE)


class TestLiterals:
    """Tests for string and number literals."""

    def test_tokenizes_single_quoted_string(self):
        tokens = tokenize(["'fizz'"], [], TABLE)
        assert tokens[0].type == TokenType.LITERAL
        assert tokens[0].value == "fizz"
        assert tokens[0].text == "'fizz'"

    def test_tokenizes_double_quoted_string(self):
        tokens = tokenize(['"it\'s"'], [], TABLE)
        assert tokens[0].value == "it's"

    def test_does_not_process_escapes(self):
        tokens = tokenize(["'a\\nb'"], [], TABLE)
        assert tokens[0].value == "a\\nb"

    def test_operators_inside_strings_are_text(self):
        tokens = tokenize(["'a + b' + 'c'"], [], TABLE)
        assert [t.value for t in tokens] == ["a + b", "+", "c", None]

    def test_string_literal_expected(self):
        with pytest.raises(TokenizerError, match="string literal expected"):
            tokenize(["'"], [], TABLE)

    def test_unterminated_string_literal(self):
        with pytest.raises(TokenizerError, match="unterminated string literal"):
            tokenize(["'abc"], [], TABLE)

    def test_string_does_not_span_holes(self):
        with pytest.raises(TokenizerError, match="unterminated string literal"):
            tokenize(["'ab", "'"], [1], TABLE)

    def test_tokenizes_integer(self):
        tokens = tokenize(["42"], [], TABLE)
        assert tokens[0].value == 42
        assert isinstance(tokens[0].value, int)

    def test_tokenizes_decimal(self):
        tokens = tokenize(["3.25"], [], TABLE)
        assert tokens[0].value == pytest.approx(3.25)

    def test_tokenizes_leading_decimal_point(self):
        tokens = tokenize([".5"], [], TABLE)
        assert tokens[0].value == pytest.approx(0.5)

    def test_rejects_malformed_number(self):
        with pytest.raises(TokenizerError, match="invalid number literal '1.2.3'"):
            tokenize(["1.2.3"], [], TABLE)

    def test_rejects_invalid_character(self):
        with pytest.raises(TokenizerError, match="invalid token '@'"):
            tokenize(["1 @ 2"], [], TABLE)


class TestOperators:
    """Tests for operator matching."""

    def test_matches_multi_character_operators(self):
        tokens = tokenize(["1 == 2"], [], TABLE)
        assert tokens[1].value == "=="

    def test_first_declared_match_wins(self):
        table = OperatorTable([["="], ["=="]])
        tokens = tokenize(["=="], [], table)
        assert kinds(tokens) == [TokenType.OPERATOR, TokenType.OPERATOR, TokenType.EOF]
        assert [t.value for t in tokens[:2]] == ["=", "="]

    def test_longer_symbol_declared_first_wins(self):
        table = OperatorTable([["=="], ["="]])
        tokens = tokenize(["=="], [], table)
        assert kinds(tokens) == [TokenType.OPERATOR, TokenType.EOF]

    def test_matches_bracket_symbols(self):
        tokens = tokenize(["", "[1, 2]"], [object()], TABLE)
        assert [t.text for t in tokens[1:-1]] == ["[", "1", ",", "2", "]"]
        assert tokens[1].spec.name == "[]"
        assert tokens[3].spec.structural is True

    def test_operators_take_priority_over_numbers(self):
        table = OperatorTable([["."]])
        tokens = tokenize(["1 . 2"], [], table)
        assert tokens[1].type == TokenType.OPERATOR


class TestCursor:
    """Tests for peek/advance semantics."""

    def test_peek_is_idempotent(self):
        tokenizer = Tokenizer(["1 + 2"], [], TABLE)
        first = tokenizer.peek()
        assert tokenizer.peek() is first
        assert tokenizer.advance() is first
        assert tokenizer.peek().value == "+"

    def test_eof_is_sticky(self):
        tokenizer = Tokenizer(["  "], [], TABLE)
        assert tokenizer.advance().type == TokenType.EOF
        assert tokenizer.advance().type == TokenType.EOF

    def test_enforces_expression_length(self):
        with pytest.raises(LimitExceededError):
            Tokenizer(["1 + 2 + 3"], [], TABLE, ExpressionLimits(max_expression_length=5))
