"""
Built-in operators on primitive values.

Primitive values are strings, numbers, booleans and None. Everything else is
a composite value and has to supply its own operators.

- ``+`` adds two numbers, or concatenates when either side is a string.
- ``-``, ``*`` and ``/`` require two numbers.
"""

from typing import Any, Callable, Dict

from .errors import EvaluationError, OperatorError

# Runtime value type. Host values are opaque.
ExprValue = Any

# Signature of a built-in binary operator.
BuiltinOperator = Callable[[ExprValue, ExprValue], ExprValue]


def is_number(value: ExprValue) -> bool:
    """Checks if a value is a number (booleans excluded)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_primitive(value: ExprValue) -> bool:
    return value is None or isinstance(value, str | int | float | bool)


def is_composite(value: ExprValue) -> bool:
    """Checks if a value may carry operator capabilities."""
    return not is_primitive(value)


def display_value(value: ExprValue) -> str:
    """
    Formats a value for error messages.

    Composite values use their own ``__str__`` if the class defines one,
    then their own ``__repr__``, and fall back to the type name.
    """
    if is_primitive(value):
        return str(value)

    cls = type(value)
    if cls.__str__ is not object.__str__:
        return str(value)
    if cls.__repr__ is not object.__repr__:
        return repr(value)
    return cls.__name__


def _add(left: ExprValue, right: ExprValue) -> ExprValue:
    if is_number(left) and is_number(right):
        return left + right
    return display_value(left) + display_value(right)


def _subtract(left: ExprValue, right: ExprValue) -> ExprValue:
    return left - right


def _multiply(left: ExprValue, right: ExprValue) -> ExprValue:
    return left * right


def _divide(left: ExprValue, right: ExprValue) -> ExprValue:
    if right == 0:
        raise OperatorError("/", "division by zero")
    return left / right


# Registry of built-in operators.
BUILTIN_OPERATORS: Dict[str, BuiltinOperator] = {
    "+": _add,
    "-": _subtract,
    "*": _multiply,
    "/": _divide,
}


def is_builtin_applicable(symbol: str, left: ExprValue, right: ExprValue) -> bool:
    """Checks if a built-in operator handles ``left <symbol> right``."""
    if symbol == "+":
        return (isinstance(left, str) or is_number(left)) and (
            isinstance(right, str) or is_number(right)
        )
    if symbol in BUILTIN_OPERATORS:
        return is_number(left) and is_number(right)
    return False


def call_builtin_operator(symbol: str, left: ExprValue, right: ExprValue) -> ExprValue:
    """
    Applies a built-in operator.

    Raises:
        EvaluationError: If the operator is unknown or fails
    """
    fn = BUILTIN_OPERATORS.get(symbol)
    if fn is None:
        raise EvaluationError(f"Unknown builtin operator: {symbol}")
    return fn(left, right)
