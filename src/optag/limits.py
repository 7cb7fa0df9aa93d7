"""
Resource limits for expression parsing and evaluation.

These limits protect against overly long or deeply nested expressions.
Nesting (groups, unary operands and call arguments) is bounded while parsing;
AST size limits are opt-in, since left-folded chains grow the tree linearly.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum total length of all literal fragments in characters
    max_expression_length: int = 4096

    # Maximum nesting of groups, unary operands and call arguments
    max_nesting_depth: int = 32

    # Maximum AST depth (None for unbounded)
    max_ast_depth: Optional[int] = None

    # Maximum number of AST nodes (None for unbounded)
    max_ast_nodes: Optional[int] = None

    # Maximum arguments in a bracket call (None for unbounded)
    max_call_args: Optional[int] = None


# Default expression limits.
DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()


def check_expression_length(
    length: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that the source length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if length > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, length
        )


def check_nesting_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates nesting depth while parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_nesting_depth:
        raise LimitExceededError("max_nesting_depth", limits.max_nesting_depth, depth)


def check_ast_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates AST depth after parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if limits.max_ast_depth is not None and depth > limits.max_ast_depth:
        raise LimitExceededError("max_ast_depth", limits.max_ast_depth, depth)


def check_ast_node_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates AST node count after parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if limits.max_ast_nodes is not None and count > limits.max_ast_nodes:
        raise LimitExceededError("max_ast_nodes", limits.max_ast_nodes, count)


def check_call_arg_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates bracket call argument count."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if limits.max_call_args is not None and count > limits.max_call_args:
        raise LimitExceededError("max_call_args", limits.max_call_args, count)
