"""
Tokenizer (lexer) for the operator expression language.

Walks a sequence of literal text fragments interleaved with host values
("holes") and produces one token at a time for the parser. Operator symbols
come from the operator table; everything else is a string literal, a number
literal, or a hole value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

from .errors import TokenizerError
from .limits import ExpressionLimits, check_expression_length
from .operators import OperatorSpec, OperatorTable


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    LITERAL = "LITERAL"
    OPERATOR = "OPERATOR"
    EOF = "EOF"


@dataclass
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: Any
    """Literal value, or the matched symbol for operators."""

    position: int
    """Offset into the rendered source."""

    text: str = ""
    """Source text covered by the token; empty for holes and EOF."""

    spec: Optional[OperatorSpec] = None

    hole: Optional[int] = None
    """Index of the host value for hole literals."""


def _is_digit(ch: str) -> bool:
    """Checks if a character can be part of a number literal."""
    return ("0" <= ch <= "9") or ch == "."


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


def _parse_number(text: str, position: int, source: str) -> int | float:
    if "." not in text:
        return int(text)
    if text.count(".") == 1 and text != ".":
        return float(text)
    raise TokenizerError(f"invalid number literal '{text}'", position, source)


def render_source(fragments: Sequence[str]) -> str:
    """Renders fragments as one string, holes shown as ``{0}``, ``{1}``..."""
    parts: List[str] = []
    for i, fragment in enumerate(fragments):
        if i:
            parts.append(f"{{{i - 1}}}")
        parts.append(fragment)
    return "".join(parts)


class Tokenizer:
    """
    Stateful cursor over a fragment/value sequence.

    The cursor is ``(fragment index, char index)``. ``peek()`` is idempotent;
    ``advance()`` moves past the token last peeked.
    """

    def __init__(
        self,
        fragments: Sequence[str],
        values: Sequence[Any],
        table: OperatorTable,
        limits: Optional[ExpressionLimits] = None,
    ):
        if len(fragments) != len(values) + 1:
            raise ValueError(
                f"Expected {len(values) + 1} fragments for {len(values)} values, "
                f"got {len(fragments)}"
            )

        self._fragments = list(fragments)
        self._values = list(values)
        self._table = table
        self._source = render_source(self._fragments)
        self._fragment_index = 0
        self._char_index = 0
        self._peeked: Optional[Token] = None

        check_expression_length(sum(len(f) for f in self._fragments), limits)

        # Offset of each fragment within the rendered source
        self._offsets: List[int] = []
        offset = 0
        for i, fragment in enumerate(self._fragments):
            if i:
                offset += len(f"{{{i - 1}}}")
            self._offsets.append(offset)
            offset += len(fragment)

    @property
    def source(self) -> str:
        return self._source

    def peek(self) -> Token:
        if self._peeked is None:
            self._peeked = self._scan_token()
        return self._peeked

    def advance(self) -> Token:
        token = self.peek()
        self._peeked = None

        if token.type == TokenType.LITERAL and token.hole is not None:
            self._fragment_index += 1
            self._char_index = 0
        elif token.type != TokenType.EOF:
            self._char_index += len(token.text)

        return token

    def tokenize(self) -> List[Token]:
        """Consumes the remaining input and returns all tokens, EOF included."""
        tokens: List[Token] = []
        while True:
            token = self.advance()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _position(self) -> int:
        return self._offsets[self._fragment_index] + self._char_index

    def _scan_token(self) -> Token:
        fragment = self._fragments[self._fragment_index]

        # Skip whitespace
        while self._char_index < len(fragment) and _is_whitespace(
            fragment[self._char_index]
        ):
            self._char_index += 1

        index = self._char_index
        position = self._position()

        if index >= len(fragment):
            if self._fragment_index < len(self._values):
                return Token(
                    TokenType.LITERAL,
                    self._values[self._fragment_index],
                    position,
                    hole=self._fragment_index,
                )
            return Token(TokenType.EOF, None, position)

        match = self._table.match(fragment, index)
        if match is not None:
            spec, symbol = match
            return Token(TokenType.OPERATOR, symbol, position, text=symbol, spec=spec)

        ch = fragment[index]

        # String literals, no escape processing
        if ch == "'" or ch == '"':
            if index + 1 >= len(fragment):
                raise TokenizerError("string literal expected", position, self._source)
            end = fragment.find(ch, index + 1)
            if end == -1:
                raise TokenizerError(
                    "unterminated string literal", position, self._source
                )
            return Token(
                TokenType.LITERAL,
                fragment[index + 1 : end],
                position,
                text=fragment[index : end + 1],
            )

        # Number literals
        if _is_digit(ch):
            end = index
            while end < len(fragment) and _is_digit(fragment[end]):
                end += 1
            text = fragment[index:end]
            return Token(
                TokenType.LITERAL,
                _parse_number(text, position, self._source),
                position,
                text=text,
            )

        raise TokenizerError(f"invalid token '{ch}'", position, self._source)


def tokenize(
    fragments: Sequence[str],
    values: Sequence[Any],
    table: OperatorTable,
    limits: Optional[ExpressionLimits] = None,
) -> List[Token]:
    """
    Tokenizes a fragment/value sequence into tokens.

    Args:
        fragments: The literal text fragments (one more than ``values``)
        values: The host values between fragments
        table: The operator table supplying operator symbols
        limits: Optional expression limits

    Returns:
        List of tokens, ending with an EOF token

    Raises:
        TokenizerError: If the input contains invalid tokens
    """
    tokenizer = Tokenizer(fragments, values, table, limits)
    return tokenizer.tokenize()
