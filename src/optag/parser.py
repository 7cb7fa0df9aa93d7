"""
Parser for the operator expression language.

Parses the token stream from a Tokenizer into an Abstract Syntax Tree (AST).
Uses precedence climbing over the tiers of an operator table.

Levels (highest to lowest binding):
0. Primary: literals, host values, grouping, unary operators, bracket calls
1..T. One level per table tier, in table order

Binary operators within one tier are folded left-associatively. Groups, unary
operands and call arguments each open a nesting level, bounded while parsing.
"""

from typing import Any, List, Optional, Sequence

from .ast import (
    AstNode,
    BinaryOpNode,
    CallNode,
    LiteralNode,
    UnaryOpNode,
    calculate_ast_depth,
    count_ast_nodes,
)
from .errors import ParseError
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_depth,
    check_ast_node_count,
    check_call_arg_count,
    check_nesting_depth,
)
from .operators import BracketOpSpec, OperatorTable
from .tokenizer import Token, Tokenizer, TokenType


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.text}'"


class Parser:
    """Parser for a fragment/value sequence."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        table: OperatorTable,
        limits: Optional[ExpressionLimits] = None,
    ):
        self._tokens = tokenizer
        self._table = table
        self._limits = limits or DEFAULT_EXPRESSION_LIMITS
        self._lowest = len(table)
        self._nesting = 0

    def parse(self) -> AstNode:
        """Parses the token stream into an AST."""
        ast = self._parse_level(self._lowest)

        token = self._tokens.peek()
        if token.type != TokenType.EOF:
            raise self._error(f"unexpected {_describe(token)}", token)

        # Validate AST limits
        node_count = count_ast_nodes(ast)
        check_ast_node_count(node_count, self._limits)

        depth = calculate_ast_depth(ast)
        check_ast_depth(depth, self._limits)

        return ast

    # ============================================================
    # Token Helpers
    # ============================================================

    def _peek(self) -> Token:
        return self._tokens.peek()

    def _advance(self) -> Token:
        return self._tokens.advance()

    def _check_symbol(self, symbol: str) -> bool:
        token = self._peek()
        return token.type == TokenType.OPERATOR and token.text == symbol

    def _error(self, detail: str, token: Token) -> ParseError:
        return ParseError(detail, token.position, self._tokens.source)

    def _parse_nested(self) -> AstNode:
        """Parses a full expression one nesting level deeper."""
        self._nesting += 1
        check_nesting_depth(self._nesting, self._limits)
        node = self._parse_level(self._lowest)
        self._nesting -= 1
        return node

    # ============================================================
    # Expression Parsing
    # ============================================================

    def _parse_level(self, level: int) -> AstNode:
        """Parses binary operators of tier ``level - 1``, or a primary at level 0."""
        if level == 0:
            return self._parse_primary()

        node = self._parse_level(level - 1)

        while True:
            token = self._peek()
            if token.type == TokenType.EOF:
                return node
            if token.type == TokenType.LITERAL:
                raise self._error("expected operator", token)

            spec = self._table.find_binary(level - 1, token.text)
            if spec is None:
                return node

            self._advance()
            right = self._parse_level(level - 1)
            node = BinaryOpNode(
                position=token.position,
                operator=spec,
                left=node,
                right=right,
            )

    def _parse_primary(self) -> AstNode:
        """Parses grouping, unary operators, literals and bracket calls."""
        token = self._peek()

        if token.type == TokenType.OPERATOR:
            bracket = self._table.find_bracket(token.text)
            if bracket is not None:
                self._advance()
                expr = self._parse_nested()
                if not self._check_symbol(bracket.close):
                    raise self._error(f"unterminated '{bracket.open}'", token)
                self._advance()
                return expr

            unary = self._table.find_unary(token.text)
            if unary is not None and not unary.structural:
                self._advance()
                operand = self._parse_nested()
                return UnaryOpNode(
                    position=token.position,
                    operator=unary,
                    operand=operand,
                )

            raise self._error("expected value", token)

        if token.type == TokenType.LITERAL:
            self._advance()
            node = LiteralNode(position=token.position, value=token.value)

            following = self._peek()
            if following.type == TokenType.OPERATOR:
                bracket = self._table.find_bracket(following.text)
                if bracket is not None and not bracket.structural:
                    self._advance()
                    args = self._parse_argument_list(bracket)
                    check_call_arg_count(len(args), self._limits)
                    return CallNode(
                        position=following.position,
                        operator=bracket,
                        callee=node,
                        args=tuple(args),
                    )

            return node

        raise self._error("expected value", token)

    def _parse_argument_list(self, bracket: BracketOpSpec) -> List[AstNode]:
        """Parses call arguments (already consumed the opening symbol)."""
        args: List[AstNode] = []

        if self._check_symbol(bracket.close):
            self._advance()
            return args

        while True:
            args.append(self._parse_nested())

            if self._check_symbol(","):
                self._advance()
                continue
            if self._check_symbol(bracket.close):
                self._advance()
                return args

            token = self._peek()
            raise self._error(
                f"expected ',' or '{bracket.close}', got {_describe(token)}", token
            )


def parse(
    fragments: Sequence[str],
    values: Sequence[Any],
    table: OperatorTable,
    limits: Optional[ExpressionLimits] = None,
) -> AstNode:
    """
    Parses a fragment/value sequence into an AST.

    Args:
        fragments: The literal text fragments (one more than ``values``)
        values: The host values between fragments
        table: The operator table
        limits: Optional expression limits

    Returns:
        The parsed AST

    Raises:
        TokenizerError: If tokenization fails
        ParseError: If parsing fails
        LimitExceededError: If an expression limit is exceeded
    """
    tokenizer = Tokenizer(fragments, values, table, limits)
    parser = Parser(tokenizer, table, limits)
    return parser.parse()
