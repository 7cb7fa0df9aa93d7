"""
Configuration models for operator tables.

Tables can be described in plain data (dicts, YAML or JSON files)::

    tiers:
      - ["*", "/"]
      - ["+", "-"]
      - - {type: fn, parts: ["[", "]"]}
        - {type: un, op: "-"}
    strictDispatch: false
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Mapping, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigError
from .limits import ExpressionLimits
from .operators import (
    BinaryOpSpec,
    BracketOpSpec,
    OperatorSpec,
    OperatorTable,
    UnaryOpSpec,
)


class OperatorSpecConfig(BaseModel):
    """A single operator in plain-data form."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["bin", "un", "fn"] = "bin"

    # Symbol for binary and unary operators
    op: Optional[str] = None

    # Opening and closing symbols for bracket operators
    parts: Optional[Tuple[str, str]] = None

    @model_validator(mode="after")
    def _check_symbols(self) -> OperatorSpecConfig:
        if self.type == "fn":
            if self.parts is None:
                raise ValueError("bracket operators require 'parts'")
        elif not self.op:
            raise ValueError(f"'{self.type}' operators require 'op'")
        return self

    def to_spec(self) -> OperatorSpec:
        if self.type == "fn":
            assert self.parts is not None
            return BracketOpSpec(self.parts)
        assert self.op is not None
        if self.type == "un":
            return UnaryOpSpec(self.op)
        return BinaryOpSpec(self.op)


class OperatorTableConfig(BaseModel):
    """Configuration for an operator tag."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # Tiers from highest to lowest precedence; strings are binary operators
    tiers: list[list[Union[str, OperatorSpecConfig]]]

    # Expression limits for every evaluation
    limits: Optional[ExpressionLimits] = Field(default=None, alias="expressionLimits")

    # Propagate exceptions raised by fallback operator candidates
    strict_dispatch: bool = Field(default=False, alias="strictDispatch")

    def to_operator_table(self) -> OperatorTable:
        return OperatorTable(
            [
                [spec if isinstance(spec, str) else spec.to_spec() for spec in tier]
                for tier in self.tiers
            ]
        )


def parse_operator_table_config(data: Mapping[str, Any]) -> OperatorTableConfig:
    """Validates plain data into an OperatorTableConfig."""
    if not isinstance(data, Mapping):
        raise ConfigError(
            f"Operator table configuration must be a mapping, got {type(data).__name__}"
        )
    try:
        return OperatorTableConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid operator table configuration: {e}") from e


def load_operator_table_config(path: Union[str, Path]) -> OperatorTableConfig:
    """
    Loads an operator table configuration from a YAML or JSON file.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    file_path = Path(path)
    ext = file_path.suffix.lower()

    if ext not in (".yaml", ".yml", ".json"):
        raise ConfigError(f"Unsupported configuration file type: {file_path.name}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {file_path}: {e}") from e

    try:
        if ext == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse configuration file {file_path}: {e}") from e

    return parse_operator_table_config(data)
