"""
Abstract Syntax Tree (AST) node types for the operator expression language.

The AST is produced by the parser and consumed by the evaluator.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Any, Literal, Sequence, Tuple, Union

from .operators import BinaryOpSpec, BracketOpSpec, UnaryOpSpec

# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in the rendered source (for error reporting)."""


@dataclass(frozen=True)
class LiteralNode(AstNodeBase):
    """Literal node: a string or number literal, or a host value."""

    value: Any

    @property
    def type(self) -> Literal["Literal"]:
        return "Literal"


@dataclass(frozen=True)
class UnaryOpNode(AstNodeBase):
    """Unary operator node."""

    operator: UnaryOpSpec
    operand: "AstNode"

    @property
    def type(self) -> Literal["UnaryOp"]:
        return "UnaryOp"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary operator node."""

    operator: BinaryOpSpec
    left: "AstNode"
    right: "AstNode"

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


@dataclass(frozen=True)
class CallNode(AstNodeBase):
    """Bracket call node (e.g., m[i, j] or f())."""

    operator: BracketOpSpec
    callee: "AstNode"
    args: Sequence["AstNode"]

    @property
    def type(self) -> Literal["Call"]:
        return "Call"


# Union type for all AST nodes
AstNode = Union[
    LiteralNode,
    UnaryOpNode,
    BinaryOpNode,
    CallNode,
]


# ============================================================
# AST Utilities
# ============================================================


def ast_children(node: AstNode) -> Tuple["AstNode", ...]:
    """Returns the direct children of a node, left to right."""
    if node.type == "UnaryOp":
        return (node.operand,)

    if node.type == "BinaryOp":
        return (node.left, node.right)

    if node.type == "Call":
        return (node.callee, *node.args)

    return ()


# Both walks use an explicit stack: left-folded chains are as deep as they are long.


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(ast_children(current))
    return count


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    depth = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in ast_children(current))
    return depth


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    prefix = "  " * indent

    if node.type == "Literal":
        return f"{prefix}Literal: {node.value!r}"

    if node.type == "UnaryOp":
        return f"{prefix}UnaryOp: {node.operator.name}\n{ast_to_string(node.operand, indent + 1)}"

    if node.type == "BinaryOp":
        return (
            f"{prefix}BinaryOp: {node.operator.name}\n"
            f"{ast_to_string(node.left, indent + 1)}\n"
            f"{ast_to_string(node.right, indent + 1)}"
        )

    if node.type == "Call":
        lines = [
            f"{prefix}Call: {node.operator.name}",
            f"{prefix}  callee:\n{ast_to_string(node.callee, indent + 2)}",
        ]
        if node.args:
            args_str = "\n".join(ast_to_string(a, indent + 2) for a in node.args)
            lines.append(f"{prefix}  args:\n{args_str}")
        return "\n".join(lines)

    return f"{prefix}Unknown: {node}"
