"""Scenario definitions: named expectation sets loaded from YAML"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


@dataclass(frozen=True)
class NoConstraint:
    """A declared key with no value; always satisfied."""


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Satisfied when the actual value matches any one of values."""
    values: tuple


Expectation = Union[NoConstraint, Scalar, AnyOf]


def expectation_from_value(value: Any) -> Expectation:
    """Decide the expectation variant for a raw loaded value."""
    if isinstance(value, (NoConstraint, Scalar, AnyOf)):
        return value
    if value is None:
        return NoConstraint()
    if isinstance(value, (list, tuple)):
        return AnyOf(tuple(value))
    return Scalar(value)


class ScenarioDefinition(BaseModel):
    """A named set of expectations checked against the response of one method."""
    model_config = ConfigDict(arbitrary_types_allowed=True)
    name:         str
    method:       str = Field(default="", description="Display name of the documented method to exercise")
    enabled:      bool = True
    placeholders: dict[str, str] = {}
    expectations: dict[str, Expectation] = {}

    @field_validator("expectations", mode="before")
    @classmethod
    def _decide_expectations(cls, value: Any) -> dict[str, Expectation]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("expectations must be a mapping of key to expected value")
        return {str(k): expectation_from_value(v) for k, v in value.items()}

    @field_validator("placeholders", mode="before")
    @classmethod
    def _stringify_placeholders(cls, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("placeholders must be a mapping of name to value")
        return {str(k): str(v) for k, v in value.items()}


def load_scenarios(path: Path) -> list[ScenarioDefinition]:
    """Load scenarios from a YAML file with a top-level 'scenarios' list (or a bare list)."""
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise ValueError(f"Unable to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e

    if isinstance(data, dict):
        data = data.get('scenarios')
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Invalid {path.name}: expected a list of scenarios")
    try:
        return [ScenarioDefinition.model_validate(item) for item in data]
    except ValidationError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
