"""
Operator specifications and precedence tables.

An operator table is an ordered list of tiers, highest precedence first.
Each tier holds the operator specs that share one precedence level.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ConfigError

logger = logging.getLogger("optag.operators")


class OperatorKind(Enum):
    """The syntactic role of an operator spec."""

    BINARY = "bin"
    UNARY = "un"
    BRACKET = "fn"


@dataclass(frozen=True)
class BinaryOpSpec:
    """Infix operator, e.g. ``+``."""

    op: str
    structural: bool = field(default=False, compare=False)
    """Injected separator; never dispatched or parsed as infix."""

    @property
    def kind(self) -> OperatorKind:
        return OperatorKind.BINARY

    @property
    def name(self) -> str:
        return self.op

    @property
    def symbols(self) -> Tuple[str, ...]:
        return (self.op,)


@dataclass(frozen=True)
class UnaryOpSpec:
    """Prefix operator, e.g. ``-``."""

    op: str
    structural: bool = field(default=False, compare=False)

    @property
    def kind(self) -> OperatorKind:
        return OperatorKind.UNARY

    @property
    def name(self) -> str:
        return self.op

    @property
    def symbols(self) -> Tuple[str, ...]:
        return (self.op,)


@dataclass(frozen=True)
class BracketOpSpec:
    """Call/subscript form with an opening and closing symbol, e.g. ``[ ]``."""

    parts: Tuple[str, str]
    structural: bool = field(default=False, compare=False)

    @property
    def kind(self) -> OperatorKind:
        return OperatorKind.BRACKET

    @property
    def open(self) -> str:
        return self.parts[0]

    @property
    def close(self) -> str:
        return self.parts[1]

    @property
    def name(self) -> str:
        return self.parts[0] + self.parts[1]

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self.parts


OperatorSpec = Union[BinaryOpSpec, UnaryOpSpec, BracketOpSpec]

# Strings are shorthand for binary operators.
OperatorSpecInput = Union[str, OperatorSpec]


def _normalize_spec(spec: OperatorSpecInput) -> OperatorSpec:
    if isinstance(spec, str):
        spec = BinaryOpSpec(spec)

    if isinstance(spec, BracketOpSpec):
        if len(spec.parts) != 2 or not spec.parts[0] or not spec.parts[1]:
            raise ConfigError(
                f"Bracket operator requires an opening and closing symbol, got {spec.parts!r}"
            )
        return BracketOpSpec(tuple(spec.parts), structural=spec.structural)

    if isinstance(spec, BinaryOpSpec | UnaryOpSpec):
        if not spec.op:
            raise ConfigError("Operator symbol must not be empty")
        return spec

    raise ConfigError(f"Unsupported operator spec: {spec!r}")


class OperatorTable:
    """
    Immutable, validated precedence table.

    Tier 0 binds tightest. Grouping parentheses and the argument separator are
    injected into the lowest tier as structural specs when no tier declares them.
    """

    def __init__(self, tiers: Sequence[Sequence[OperatorSpecInput]]):
        if isinstance(tiers, str):
            raise ConfigError(f"Tiers must be a list of lists of operators, got {tiers!r}")

        normalized: List[List[OperatorSpec]] = []
        for tier in tiers:
            if isinstance(tier, str):
                raise ConfigError(f"Tier must be a list of operators, got {tier!r}")
            normalized.append([_normalize_spec(spec) for spec in tier])

        if not any(normalized):
            raise ConfigError("No operators supplied")

        declared = {symbol for tier in normalized for spec in tier for symbol in spec.symbols}

        if "(" not in declared and ")" not in declared:
            normalized[-1].append(BracketOpSpec(("(", ")"), structural=True))
            logger.debug("structural_operator_injected", extra={"symbol": "()"})
        if "," not in declared:
            normalized[-1].append(BinaryOpSpec(",", structural=True))
            logger.debug("structural_operator_injected", extra={"symbol": ","})

        self._tiers: Tuple[Tuple[OperatorSpec, ...], ...] = tuple(
            tuple(tier) for tier in normalized
        )
        self._specs: Tuple[OperatorSpec, ...] = tuple(
            spec for tier in self._tiers for spec in tier
        )

        logger.debug(
            "operator_table_created",
            extra={"tiers": len(self._tiers), "operators": len(self._specs)},
        )

    @property
    def tiers(self) -> Tuple[Tuple[OperatorSpec, ...], ...]:
        return self._tiers

    @property
    def specs(self) -> Tuple[OperatorSpec, ...]:
        """All specs in declaration order (tiers first, then position in tier)."""
        return self._specs

    def __len__(self) -> int:
        return len(self._tiers)

    def __iter__(self) -> Iterator[Tuple[OperatorSpec, ...]]:
        return iter(self._tiers)

    def __repr__(self) -> str:
        tiers = ", ".join(
            "[" + ", ".join(repr(spec.name) for spec in tier) + "]" for tier in self._tiers
        )
        return f"OperatorTable([{tiers}])"

    def match(self, text: str, index: int) -> Optional[Tuple[OperatorSpec, str]]:
        """
        Returns the first spec, in declaration order, with a symbol that
        starts at ``text[index]``, together with the matched symbol.

        This is first-match, not longest-match: a shorter symbol declared
        before a longer one sharing its prefix always wins.
        """
        for spec in self._specs:
            for symbol in spec.symbols:
                if text.startswith(symbol, index):
                    return spec, symbol
        return None

    def find_unary(self, symbol: str) -> Optional[UnaryOpSpec]:
        for spec in self._specs:
            if isinstance(spec, UnaryOpSpec) and spec.op == symbol:
                return spec
        return None

    def find_bracket(self, open_symbol: str) -> Optional[BracketOpSpec]:
        """Returns the bracket spec opened by ``open_symbol``, structural or not."""
        for spec in self._specs:
            if isinstance(spec, BracketOpSpec) and spec.open == open_symbol:
                return spec
        return None

    def find_binary(self, tier_index: int, symbol: str) -> Optional[BinaryOpSpec]:
        """Returns the dispatchable binary spec for ``symbol`` in one tier."""
        for spec in self._tiers[tier_index]:
            if isinstance(spec, BinaryOpSpec) and not spec.structural and spec.op == symbol:
                return spec
        return None


DEFAULT_OPERATORS: List[List[OperatorSpecInput]] = [
    ["*", "/"],
    ["+", "-"],
    ["==", "!="],
    [BracketOpSpec(("[", "]")), BracketOpSpec(("(", ")")), UnaryOpSpec("-")],
]
