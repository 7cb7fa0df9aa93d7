"""
Error types for the operator expression engine.

All expression errors extend ExpressionError for consistent handling.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class ConfigError(ExpressionError):
    """
    Error thrown when an operator table or its configuration is invalid.
    """

    pass


class SyntaxError(ExpressionError):
    """
    Error thrown for a malformed token stream.
    """

    def __init__(
        self,
        detail: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(f"Syntax error: {detail}", position, expression)
        self.detail = detail


class TokenizerError(SyntaxError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    pass


class ParseError(SyntaxError):
    """
    Error thrown during parsing (syntax analysis).
    """

    pass


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation (runtime error).
    """

    pass


class OperatorError(EvaluationError):
    """
    Error thrown when no operator implementation could be resolved.
    """

    def __init__(
        self,
        symbol: str,
        detail: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(f"Operator error: {detail}", position, expression)
        self.symbol = symbol
        self.detail = detail


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
