"""
Operator expression engine.

Evaluates small expressions over host values, dispatching each operator to
capabilities the values declare, with a configurable precedence table.
"""

# Core types and utilities
from .ast import (
    AstNode,
    AstNodeBase,
    BinaryOpNode,
    CallNode,
    LiteralNode,
    UnaryOpNode,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
)

# Builtins
from .builtins import (
    BUILTIN_OPERATORS,
    ExprValue,
    display_value,
    is_composite,
    is_number,
)

# Capabilities
from .capabilities import (
    OperatorRegistry,
    bracket_operator,
    find_instance_operator,
    find_type_operator,
    operator,
    static_operator,
    unary_operator,
)

# Configuration
from .config import (
    OperatorSpecConfig,
    OperatorTableConfig,
    load_operator_table_config,
    parse_operator_table_config,
)
from .errors import (
    ConfigError,
    EvaluationError,
    ExpressionError,
    LimitExceededError,
    OperatorError,
    ParseError,
    SyntaxError,
    TokenizerError,
)

# Evaluator
from .evaluator import (
    EvaluationContext,
    EvaluationResult,
    Evaluator,
    evaluate,
    evaluate_or_raise,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
)

# Operator tables
from .operators import (
    DEFAULT_OPERATORS,
    BinaryOpSpec,
    BracketOpSpec,
    OperatorKind,
    OperatorSpec,
    OperatorTable,
    UnaryOpSpec,
)

# Parser
from .parser import (
    Parser,
    parse,
)

# Tags
from .tag import (
    OperatorTag,
    make_op,
    op,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "LiteralNode",
    "UnaryOpNode",
    "BinaryOpNode",
    "CallNode",
    "count_ast_nodes",
    "calculate_ast_depth",
    "ast_to_string",
    # Errors
    "ExpressionError",
    "ConfigError",
    "SyntaxError",
    "TokenizerError",
    "ParseError",
    "EvaluationError",
    "OperatorError",
    "LimitExceededError",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    # Operator tables
    "OperatorKind",
    "OperatorSpec",
    "BinaryOpSpec",
    "UnaryOpSpec",
    "BracketOpSpec",
    "OperatorTable",
    "DEFAULT_OPERATORS",
    # Capabilities
    "operator",
    "unary_operator",
    "bracket_operator",
    "static_operator",
    "OperatorRegistry",
    "find_instance_operator",
    "find_type_operator",
    # Configuration
    "OperatorSpecConfig",
    "OperatorTableConfig",
    "parse_operator_table_config",
    "load_operator_table_config",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    # Evaluator
    "EvaluationContext",
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    "evaluate_or_raise",
    # Builtins
    "ExprValue",
    "BUILTIN_OPERATORS",
    "display_value",
    "is_composite",
    "is_number",
    # Tags
    "OperatorTag",
    "make_op",
    "op",
]
