"""
Operator tags: reusable expression evaluators bound to an operator table.

A tag evaluates one expression per call. The expression is given as literal
fragments with host values between them::

    op(["", " * (", " + ", ")"], a, b, c)

or as a template object exposing ``strings`` and ``values`` (PEP 750
template strings have this shape)::

    op(t"{a} * ({b} + {c})")

A single string is an expression without host values.
"""

from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .ast import AstNode
from .builtins import ExprValue
from .capabilities import OperatorRegistry
from .config import OperatorTableConfig, parse_operator_table_config
from .evaluator import EvaluationContext, Evaluator
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .operators import DEFAULT_OPERATORS, OperatorSpecInput, OperatorTable
from .parser import Parser
from .tokenizer import Tokenizer

OperatorsInput = Union[
    Sequence[Sequence[OperatorSpecInput]],
    OperatorTable,
    OperatorTableConfig,
    Mapping[str, Any],
]


def _split_expression(
    expression: Any, values: Tuple[Any, ...]
) -> Tuple[Sequence[str], Sequence[Any]]:
    if isinstance(expression, str):
        return (expression,), values
    if hasattr(expression, "strings") and hasattr(expression, "values"):
        if values:
            raise TypeError("Template expressions take no extra values")
        return tuple(expression.strings), tuple(expression.values)
    return tuple(expression), values


class OperatorTag:
    """Evaluates expressions against one immutable operator table."""

    def __init__(
        self,
        table: OperatorTable,
        *,
        registry: Optional[OperatorRegistry] = None,
        limits: Optional[ExpressionLimits] = None,
        strict_dispatch: bool = False,
    ):
        self._table = table
        self._registry = registry
        self._limits = limits or DEFAULT_EXPRESSION_LIMITS
        self._strict_dispatch = strict_dispatch

    @property
    def table(self) -> OperatorTable:
        return self._table

    @property
    def registry(self) -> Optional[OperatorRegistry]:
        return self._registry

    @property
    def limits(self) -> ExpressionLimits:
        return self._limits

    def __repr__(self) -> str:
        return f"OperatorTag({self._table!r})"

    def parse(self, expression: Any, *values: Any) -> AstNode:
        """Parses an expression into an AST without evaluating it."""
        fragments, hole_values = _split_expression(expression, values)
        tokenizer = Tokenizer(fragments, hole_values, self._table, self._limits)
        return Parser(tokenizer, self._table, self._limits).parse()

    def __call__(self, expression: Any, *values: Any) -> ExprValue:
        """
        Evaluates an expression.

        Raises:
            SyntaxError: If the expression is malformed
            OperatorError: If an operator cannot be resolved
            LimitExceededError: If an expression limit is exceeded
        """
        fragments, hole_values = _split_expression(expression, values)
        tokenizer = Tokenizer(fragments, hole_values, self._table, self._limits)
        ast = Parser(tokenizer, self._table, self._limits).parse()

        context = EvaluationContext(
            registry=self._registry,
            source=tokenizer.source,
            strict_dispatch=self._strict_dispatch,
        )
        return Evaluator(context).evaluate(ast)

    def make(self, operators: OperatorsInput, **kwargs: Any) -> "OperatorTag":
        """Creates an independent tag with its own operator table."""
        return make_op(operators, **kwargs)


def make_op(
    operators: OperatorsInput,
    *,
    registry: Optional[OperatorRegistry] = None,
    limits: Optional[ExpressionLimits] = None,
    strict_dispatch: Optional[bool] = None,
) -> OperatorTag:
    """
    Creates an operator tag.

    Args:
        operators: Tiers of operators (highest precedence first), an
            OperatorTable, or an OperatorTableConfig / plain mapping
        registry: Type-level operators for types without their own
        limits: Expression limits (overrides configured limits)
        strict_dispatch: Propagate fallback candidate errors (overrides config)

    Raises:
        ConfigError: If the operators are invalid
    """
    if isinstance(operators, Mapping):
        operators = parse_operator_table_config(operators)

    if isinstance(operators, OperatorTableConfig):
        table = operators.to_operator_table()
        limits = limits or operators.limits
        if strict_dispatch is None:
            strict_dispatch = operators.strict_dispatch
    elif isinstance(operators, OperatorTable):
        table = operators
    else:
        table = OperatorTable(operators)

    return OperatorTag(
        table,
        registry=registry,
        limits=limits,
        strict_dispatch=bool(strict_dispatch),
    )


# Process-wide default tag: * / binds tighter than + -, then == !=,
# then [ ] and ( ) calls and unary minus.
op = make_op(DEFAULT_OPERATORS)
