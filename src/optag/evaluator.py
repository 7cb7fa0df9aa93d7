"""
Expression evaluator.

Reduces an AST to a value by resolving every operator against the operand
values. Binary operators are resolved in this order:

1. instance operator on the left operand (errors propagate)
2. static operator on the left operand's type
3. static operator on the right operand's type
4. built-in ``+`` on strings and numbers
5. built-in ``-``, ``*``, ``/`` on numbers
6. instance operator on the right operand, called with the left operand

Candidates 2, 3 and 6 are attempts: an exception raised by the candidate
moves resolution on to the next one, unless ``strict_dispatch`` is set.

Division by zero in the built-in ``/`` raises OperatorError rather than
producing an infinite or NaN result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, cast

from .ast import AstNode, BinaryOpNode, CallNode, LiteralNode, UnaryOpNode
from .builtins import (
    BUILTIN_OPERATORS,
    ExprValue,
    call_builtin_operator,
    display_value,
    is_builtin_applicable,
    is_composite,
)
from .capabilities import OperatorRegistry, find_instance_operator, find_type_operator
from .errors import OperatorError
from .operators import OperatorKind

logger = logging.getLogger("optag.evaluator")

_NOT_RESOLVED = object()


@dataclass
class EvaluationContext:
    """Evaluation context shared by every node of one evaluation."""

    registry: Optional[OperatorRegistry] = None
    """Type-level operators for types that do not declare their own."""

    source: Optional[str] = None
    """Rendered source expression for error reporting."""

    strict_dispatch: bool = False
    """Propagate exceptions from fallback candidates instead of skipping them."""


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: ExprValue
    """The evaluated value."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[str] = None
    """Error message if evaluation failed."""


class Evaluator:
    """Evaluates an AST node and returns the result."""

    def __init__(self, context: Optional[EvaluationContext] = None):
        self._context = context or EvaluationContext()
        self._registry = self._context.registry
        self._source = self._context.source

    def evaluate(self, node: AstNode) -> ExprValue:
        """Evaluates an AST node and returns the value."""
        node_type = node.type

        if node_type == "Literal":
            return cast(LiteralNode, node).value

        if node_type == "UnaryOp":
            return self._evaluate_unary_op(cast(UnaryOpNode, node))

        if node_type == "BinaryOp":
            return self._evaluate_binary_op(cast(BinaryOpNode, node))

        if node_type == "Call":
            return self._evaluate_call(cast(CallNode, node))

        raise TypeError(f"Unknown AST node: {node!r}")

    def _attempt(
        self, candidate: Callable[..., Any], stage: str, symbol: str, *args: Any
    ) -> Any:
        """Calls a fallback candidate; returns _NOT_RESOLVED if it raised."""
        try:
            return candidate(*args)
        except Exception as error:
            if self._context.strict_dispatch:
                raise
            logger.debug(
                "operator_candidate_failed",
                extra={"symbol": symbol, "stage": stage, "error": repr(error)},
            )
            return _NOT_RESOLVED

    def _type_operator(
        self, value: ExprValue, kind: OperatorKind, symbol: str
    ) -> Optional[Callable[..., Any]]:
        return find_type_operator(type(value), kind, symbol, self._registry)

    def _evaluate_unary_op(self, node: UnaryOpNode) -> ExprValue:
        """Evaluates a unary operation."""
        symbol = node.operator.op
        value = self.evaluate(node.operand)

        if is_composite(value):
            method = find_instance_operator(value, OperatorKind.UNARY, symbol)
            if method is not None:
                return method()

        raise OperatorError(
            symbol,
            f"operator{symbol} is not a callable on {display_value(value)}",
            node.position,
            self._source,
        )

    def _evaluate_binary_op(self, node: BinaryOpNode) -> ExprValue:
        """Evaluates a binary operation, folding its left spine iteratively."""
        chain: List[BinaryOpNode] = []
        current: AstNode = node
        while current.type == "BinaryOp":
            chain.append(cast(BinaryOpNode, current))
            current = cast(BinaryOpNode, current).left

        value = self.evaluate(current)
        for binary in reversed(chain):
            value = self._apply_binary_op(binary, value, self.evaluate(binary.right))
        return value

    def _apply_binary_op(
        self, node: BinaryOpNode, left: ExprValue, right: ExprValue
    ) -> ExprValue:
        """Resolves ``left <op> right`` for one binary node."""
        symbol = node.operator.op

        if is_composite(left):
            method = find_instance_operator(left, OperatorKind.BINARY, symbol)
            if method is not None:
                return method(right)

        left_static = self._type_operator(left, OperatorKind.BINARY, symbol)
        if left_static is not None:
            result = self._attempt(left_static, "left_static", symbol, left, right)
            if result is not _NOT_RESOLVED:
                return result

        if is_composite(right):
            right_static = self._type_operator(right, OperatorKind.BINARY, symbol)
            if right_static is not None and right_static is not left_static:
                result = self._attempt(right_static, "right_static", symbol, left, right)
                if result is not _NOT_RESOLVED:
                    return result

        if is_builtin_applicable(symbol, left, right):
            try:
                return call_builtin_operator(symbol, left, right)
            except OperatorError as error:
                raise OperatorError(
                    error.symbol, error.detail, node.position, self._source
                ) from None

        if is_composite(right):
            method = find_instance_operator(right, OperatorKind.BINARY, symbol)
            if method is not None:
                result = self._attempt(method, "right_instance", symbol, left)
                if result is not _NOT_RESOLVED:
                    return result

        raise OperatorError(
            symbol, self._binary_failure(symbol, left, right), node.position, self._source
        )

    def _binary_failure(self, symbol: str, left: ExprValue, right: ExprValue) -> str:
        if is_composite(left):
            return (
                f"operator{symbol} is not a callable on left operand "
                f"{display_value(left)} or a static function on either operand's types"
            )
        if symbol in BUILTIN_OPERATORS:
            return f"cannot evaluate {display_value(left)} {symbol} {display_value(right)}"
        return (
            f"operator{symbol} is not a builtin or a callable on left operand "
            f"{display_value(left)} or right operand {display_value(right)}"
        )

    def _evaluate_call(self, node: CallNode) -> ExprValue:
        """Evaluates a bracket call."""
        name = node.operator.name
        callee = self.evaluate(node.callee)
        args: List[ExprValue] = [self.evaluate(arg) for arg in node.args]

        if is_composite(callee):
            method = find_instance_operator(callee, OperatorKind.BRACKET, name)
            if method is not None:
                return method(*args)

        static = self._type_operator(callee, OperatorKind.BRACKET, name)
        if static is not None:
            result = self._attempt(static, "callee_static", name, callee, args)
            if result is not _NOT_RESOLVED:
                return result

        raise OperatorError(
            name,
            f"operator{name} is not a callable on left operand "
            f"{display_value(callee)} or a static function on its type",
            node.position,
            self._source,
        )


def evaluate(ast: AstNode, context: Optional[EvaluationContext] = None) -> EvaluationResult:
    """
    Evaluates an AST and returns the result without raising.

    Args:
        ast: The AST to evaluate
        context: The evaluation context

    Returns:
        The evaluation result with value and success status
    """
    try:
        evaluator = Evaluator(context)
        value = evaluator.evaluate(ast)
        return EvaluationResult(value=value, success=True)
    except Exception as error:
        message = str(error)
        return EvaluationResult(value=None, success=False, error=message)


def evaluate_or_raise(ast: AstNode, context: Optional[EvaluationContext] = None) -> ExprValue:
    """Evaluates an AST, propagating any error to the caller."""
    return Evaluator(context).evaluate(ast)
